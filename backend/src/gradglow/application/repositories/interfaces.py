"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from gradglow.domain.entities import (
    Application,
    ApplicationSubmission,
    Internship,
    NewInternship,
    User,
)
from gradglow.domain.enums import ApplicationStatus


class IListingRepository(ABC):
    """Internship listing repository interface"""

    @abstractmethod
    async def fetch_all(self) -> List[Internship]:
        """Get every listing, newest first"""
        pass

    @abstractmethod
    async def fetch_owned_by(self, recruiter_id: UUID) -> List[Internship]:
        """Get listings posted by one recruiter, newest first"""
        pass

    @abstractmethod
    async def create(self, data: NewInternship, recruiter_id: UUID) -> Internship:
        """Insert a listing owned by `recruiter_id`"""
        pass

    @abstractmethod
    async def delete(self, internship_id: UUID, recruiter_id: UUID) -> bool:
        """
        Delete a listing only if `recruiter_id` owns it

        Returns:
            True if a row was removed; a missing or foreign listing is a no-op
        """
        pass


class IApplicationRepository(ABC):
    """Application repository interface"""

    @abstractmethod
    async def fetch_for_student(self, student_id: UUID) -> List[Application]:
        """Get a student's applications, newest first"""
        pass

    @abstractmethod
    async def fetch_for_recruiter(self, listing_ids: Iterable[UUID]) -> List[Application]:
        """Get applications against any of the given listings, newest first"""
        pass

    @abstractmethod
    async def create(
        self,
        listing: Internship,
        student_id: UUID,
        student_name: Optional[str],
        data: ApplicationSubmission
    ) -> Application:
        """Insert a pending application"""
        pass

    @abstractmethod
    async def update_status(self, application_id: UUID, status: ApplicationStatus) -> None:
        """Overwrite an application's status"""
        pass


class IProfileRepository(ABC):
    """Profile record repository interface"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get the profile for an auth user id, None if not created yet"""
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """Create or overwrite the profile for `user.id`"""
        pass
