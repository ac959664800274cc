"""
Application ORM Model
SQLAlchemy model for internship applications
"""
import uuid
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from gradglow.core.database import Base


class ApplicationModel(Base):
    """Internship application table ORM model"""

    __tablename__ = "applications"

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    # Foreign Keys
    internship_id = Column(
        UUID(as_uuid=True),
        ForeignKey("internship_listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    student_id = Column(UUID(as_uuid=True), nullable=False, index=True)

    # Application Details
    status = Column(String(50), nullable=False, default="pending", server_default="pending", index=True)
    resume_url = Column(String(500), nullable=True)
    cover_letter = Column(Text, nullable=True)

    # Additional questions
    linkedin_url = Column(String(500), nullable=True)
    portfolio_url = Column(String(500), nullable=True)
    why_interested = Column(Text, nullable=True)
    relevant_experience = Column(Text, nullable=True)

    # Display cache copied from the listing and profile at submit time
    student_name = Column(String(255), nullable=True)
    internship_title = Column(String(255), nullable=False)
    internship_company = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint("student_id", "internship_id", name="uq_applications_student_internship"),
    )

    def __repr__(self):
        return f"<ApplicationModel {self.id} - {self.status}>"
