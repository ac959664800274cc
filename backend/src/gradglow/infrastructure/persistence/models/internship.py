"""
Internship Listing ORM Model
SQLAlchemy model for the listings table
"""
import uuid
from sqlalchemy import Column, String, DateTime, Text, Boolean, ARRAY, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from gradglow.core.database import Base


class InternshipListingModel(Base):
    """Internship listing table ORM model"""

    __tablename__ = "internship_listings"

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    # Owner (profiles.id of a recruiter)
    recruiter_id = Column(UUID(as_uuid=True), nullable=False, index=True)

    # Listing Details
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)  # Free text, see InternshipCategory
    description = Column(Text, nullable=False)
    requirements = Column(ARRAY(Text), nullable=False, default=list)
    salary = Column(String(100), nullable=True)
    duration = Column(String(100), nullable=False)
    is_remote = Column(Boolean, nullable=False, default=False)

    # Company
    website = Column(String(500), nullable=True)
    logo_url = Column(String(500), nullable=True)
    company_description = Column(Text, nullable=True)

    # Timestamps
    deadline = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_internship_listings_created_at", created_at.desc()),
    )

    def __repr__(self):
        return f"<InternshipListingModel {self.id} - {self.title}>"
