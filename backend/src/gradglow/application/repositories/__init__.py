"""Repository Interfaces"""

from .interfaces import IListingRepository, IApplicationRepository, IProfileRepository

__all__ = ["IListingRepository", "IApplicationRepository", "IProfileRepository"]
