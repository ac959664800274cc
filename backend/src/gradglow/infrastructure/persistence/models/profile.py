"""
Profile ORM Model
One row per auth account; repository scoping reads the role from here
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from gradglow.core.database import Base


class ProfileModel(Base):
    """Profile table ORM model"""

    __tablename__ = "profiles"

    # Same id as the auth user
    id = Column(UUID(as_uuid=True), primary_key=True)

    email = Column(String(255), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # "student" or "recruiter"
    name = Column(String(255), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    def __repr__(self):
        return f"<ProfileModel {self.id} - {self.role}>"
