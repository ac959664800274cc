"""
Internship Store Interface
Everything the view layer may read or call
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from gradglow.domain.entities import (
    Application,
    ApplicationSubmission,
    Internship,
    NewInternship,
    User,
    UserSession,
)
from gradglow.domain.enums import ApplicationStatus
from gradglow.domain.value_objects import ListingFilter


StoreListener = Callable[["IInternshipStore"], None]


class IInternshipStore(ABC):
    """Internship and application state store interface"""

    # Read views

    @property
    @abstractmethod
    def session(self) -> UserSession:
        pass

    @property
    @abstractmethod
    def loading(self) -> bool:
        """True while a mutation is in flight"""
        pass

    @property
    @abstractmethod
    def error(self) -> Optional[str]:
        """Message from the last failed fetch, None once a fetch succeeds"""
        pass

    @property
    @abstractmethod
    def internships(self) -> Tuple[Internship, ...]:
        pass

    @property
    @abstractmethod
    def student_applications(self) -> Tuple[Application, ...]:
        pass

    @property
    @abstractmethod
    def recruiter_internships(self) -> Tuple[Internship, ...]:
        pass

    @property
    @abstractmethod
    def recruiter_applications(self) -> Tuple[Application, ...]:
        pass

    @abstractmethod
    def get_by_id(self, internship_id: UUID) -> Optional[Internship]:
        """Lookup in the loaded collection; never fetches"""
        pass

    @abstractmethod
    def has_applied(self, internship_id: UUID) -> bool:
        pass

    @abstractmethod
    def filter_internships(self, listing_filter: ListingFilter) -> List[Internship]:
        pass

    @abstractmethod
    def recommended_internships(self, limit: Optional[int] = None) -> List[Internship]:
        pass

    @abstractmethod
    def status_options(self, application: Application) -> List[ApplicationStatus]:
        pass

    # Mutations

    @abstractmethod
    async def apply_for_internship(
        self,
        internship_id: UUID,
        data: ApplicationSubmission
    ) -> Application:
        """
        Submit an application as the signed-in student

        Raises:
            AuthorizationException: not a student
            ResourceNotFoundException: listing not in the loaded collection
            DuplicateApplicationException: already applied
            RepositoryException: insert failed
        """
        pass

    @abstractmethod
    async def create_internship(self, data: NewInternship) -> Internship:
        """
        Post a listing as the signed-in recruiter

        Raises:
            AuthorizationException: not a recruiter
            RepositoryException: insert failed
        """
        pass

    @abstractmethod
    async def delete_internship(self, internship_id: UUID) -> bool:
        """
        Delete one of the signed-in recruiter's listings; foreign ids are a no-op

        Raises:
            AuthorizationException: not a recruiter
            RepositoryException: delete failed
        """
        pass

    @abstractmethod
    async def update_application_status(
        self,
        application_id: UUID,
        status: ApplicationStatus
    ) -> Application:
        """
        Move an application received by the signed-in recruiter to a new status

        Raises:
            AuthorizationException: not a recruiter
            ResourceNotFoundException: application not among the recruiter's
            InvalidStatusTransitionException: move rejected by the strict workflow
            RepositoryException: update failed
        """
        pass

    # Lifecycle

    @abstractmethod
    async def handle_user_change(self, user: Optional[User]) -> None:
        """Load collections for a new user, or clear them on sign-out"""
        pass

    @abstractmethod
    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a callback run after every state change

        Returns:
            Callable that removes the listener
        """
        pass
