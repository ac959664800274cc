"""SQLAlchemy Repository Implementations"""

from .internship_listing import SQLAlchemyListingRepository
from .application import SQLAlchemyApplicationRepository
from .profile import SQLAlchemyProfileRepository

__all__ = [
    "SQLAlchemyListingRepository",
    "SQLAlchemyApplicationRepository",
    "SQLAlchemyProfileRepository",
]
