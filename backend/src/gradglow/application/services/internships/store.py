"""
InternshipStore Implementation
Single source of truth for listings and applications shown to the current user
"""
from contextlib import asynccontextmanager
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from gradglow.application.repositories.interfaces import (
    IApplicationRepository,
    IListingRepository,
)
from gradglow.application.services.auth import IAuthService
from gradglow.application.services.notifications import (
    INotifier,
    LoggingNotifier,
    Notification,
    NotificationLevel,
)
from gradglow.core.config import settings
from gradglow.core.exceptions import (
    AuthorizationException,
    DomainException,
    DuplicateApplicationException,
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from gradglow.core.logging_config import logger
from gradglow.domain.entities import (
    AnonymousSession,
    Application,
    ApplicationSubmission,
    Internship,
    NewInternship,
    RecruiterSession,
    StudentSession,
    User,
    UserSession,
    session_for,
)
from gradglow.domain.enums import ApplicationStatus, can_transition
from gradglow.domain.value_objects import ListingFilter
from . import views
from .interfaces import IInternshipStore, StoreListener


class InternshipStore(IInternshipStore):
    """
    In-memory state for the view layer

    Holds four backing collections as tuples: every listing, the signed-in
    recruiter's listings, the signed-in student's applications and the
    applications the recruiter has received. Mutations replace tuples and
    entries instead of editing them, so consumers can detect changes by
    identity. Role-scoped views are recomputed from the current session on
    every read.
    """

    def __init__(
        self,
        listing_repository: IListingRepository,
        application_repository: IApplicationRepository,
        notifier: Optional[INotifier] = None,
        strict_status_transitions: Optional[bool] = None,
        recommendation_limit: Optional[int] = None
    ):
        self.listing_repo = listing_repository
        self.application_repo = application_repository
        self.notifier = notifier or LoggingNotifier()
        self.strict_status_transitions = (
            strict_status_transitions
            if strict_status_transitions is not None
            else settings.STRICT_STATUS_TRANSITIONS
        )
        self.recommendation_limit = (
            recommendation_limit
            if recommendation_limit is not None
            else settings.RECOMMENDATION_LIMIT
        )

        self._session: UserSession = AnonymousSession()
        self._internships: Tuple[Internship, ...] = ()
        self._index: Dict[UUID, Internship] = {}
        self._owned: Tuple[Internship, ...] = ()
        self._applications: Tuple[Application, ...] = ()
        self._received: Tuple[Application, ...] = ()
        self._loading = False
        self._error: Optional[str] = None
        # Bumped on account switch and reset; results fetched under an older value are dropped
        self._generation = 0
        self._listeners: List[StoreListener] = []

    # Read views

    @property
    def session(self) -> UserSession:
        return self._session

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def internships(self) -> Tuple[Internship, ...]:
        return self._internships

    @property
    def student_applications(self) -> Tuple[Application, ...]:
        return views.student_applications(self._applications, self._session)

    @property
    def recruiter_internships(self) -> Tuple[Internship, ...]:
        return views.recruiter_internships(self._owned, self._session)

    @property
    def recruiter_applications(self) -> Tuple[Application, ...]:
        return views.recruiter_applications(self._received, self._owned, self._session)

    def get_by_id(self, internship_id: UUID) -> Optional[Internship]:
        return self._index.get(internship_id)

    def has_applied(self, internship_id: UUID) -> bool:
        return any(a.internship_id == internship_id for a in self.student_applications)

    def filter_internships(self, listing_filter: ListingFilter) -> List[Internship]:
        return views.filter_internships(self._internships, listing_filter)

    def recommended_internships(self, limit: Optional[int] = None) -> List[Internship]:
        return views.recommended_internships(
            self._internships,
            self.student_applications,
            self.recommendation_limit if limit is None else limit,
        )

    def status_options(self, application: Application) -> List[ApplicationStatus]:
        return views.status_options(application.status, self.strict_status_transitions)

    # Mutations

    async def apply_for_internship(
        self,
        internship_id: UUID,
        data: ApplicationSubmission
    ) -> Application:
        try:
            student = self._require_student()
            listing = self.get_by_id(internship_id)
            if listing is None:
                raise ResourceNotFoundException("Internship", str(internship_id))
            # Advisory only: concurrent submissions are caught by the unique constraint
            if self.has_applied(internship_id):
                raise DuplicateApplicationException(str(internship_id))

            generation = self._generation
            async with self._busy():
                application = await self.application_repo.create(
                    listing,
                    student.student_id,
                    student.user.name,
                    data,
                )
        except DomainException as e:
            self._notify_failure("Application failed", e)
            raise

        if self._is_stale(generation):
            return application

        self._applications = (application,) + self._applications
        self._changed()

        logger.info(f"Student {student.student_id} applied to {listing.id}")
        self.notifier.notify(Notification.success(
            "Application submitted",
            f"Your application for {listing.title} at {listing.company} has been submitted",
        ))
        return application

    async def create_internship(self, data: NewInternship) -> Internship:
        try:
            recruiter = self._require_recruiter()
            generation = self._generation
            async with self._busy():
                listing = await self.listing_repo.create(data, recruiter.recruiter_id)
        except DomainException as e:
            self._notify_failure("Could not post internship", e)
            raise

        if self._is_stale(generation):
            return listing

        self._set_internships((listing,) + self._internships)
        self._owned = (listing,) + self._owned
        self._changed()

        logger.info(f"Recruiter {recruiter.recruiter_id} posted {listing.id}")
        self.notifier.notify(Notification.success(
            "Internship posted",
            f"{listing.title} is now visible to students",
        ))
        return listing

    async def delete_internship(self, internship_id: UUID) -> bool:
        try:
            recruiter = self._require_recruiter()
            generation = self._generation
            async with self._busy():
                removed = await self.listing_repo.delete(internship_id, recruiter.recruiter_id)
        except DomainException as e:
            self._notify_failure("Could not delete internship", e)
            raise

        if self._is_stale(generation):
            return removed

        if not removed:
            logger.info(f"Delete of {internship_id} by {recruiter.recruiter_id} matched no owned listing")
            return False

        self._set_internships(tuple(i for i in self._internships if i.id != internship_id))
        self._owned = tuple(i for i in self._owned if i.id != internship_id)
        # Applications go with the listing (ON DELETE CASCADE)
        self._received = tuple(a for a in self._received if a.internship_id != internship_id)
        self._changed()

        self.notifier.notify(Notification.success("Internship deleted", "The listing has been removed"))
        return True

    async def update_application_status(
        self,
        application_id: UUID,
        status: ApplicationStatus
    ) -> Application:
        try:
            self._require_recruiter()
            try:
                status = ApplicationStatus(status)
            except ValueError as e:
                raise ValidationException("status", f"unknown status '{status}'") from e
            current = next(
                (a for a in self.recruiter_applications if a.id == application_id),
                None,
            )
            if current is None:
                raise ResourceNotFoundException("Application", str(application_id))
            if not can_transition(current.status, status, self.strict_status_transitions):
                raise InvalidStatusTransitionException(current.status.value, status.value)

            generation = self._generation
            async with self._busy():
                await self.application_repo.update_status(application_id, status)
        except DomainException as e:
            self._notify_failure("Could not update status", e)
            raise

        updated = current.with_status(status)
        if self._is_stale(generation):
            return updated

        self._received = tuple(
            updated if a.id == application_id else a
            for a in self._received
        )
        self._changed()

        self.notifier.notify(Notification.success(
            "Status updated",
            f"Application marked as {status.value}",
        ))
        return updated

    # Lifecycle

    async def handle_user_change(self, user: Optional[User]) -> None:
        previous = self._session
        self._session = session_for(user)

        if isinstance(self._session, AnonymousSession):
            self.reset()
            return

        if previous.user is None or previous.user.id != self._session.user.id:
            # Never show one account's rows to the next; fetches still in flight
            # for the previous account are dropped on arrival
            self._generation += 1
            self._owned = ()
            self._applications = ()
            self._received = ()

        await self.load()

    async def load(self) -> None:
        """Fetch everything the current session can see"""
        generation = self._generation
        await self.fetch_internships()
        if self._is_stale(generation):
            return

        if isinstance(self._session, StudentSession):
            await self.fetch_applications()
        elif isinstance(self._session, RecruiterSession):
            owned = await self.fetch_recruiter_internships()
            if self._is_stale(generation):
                return
            await self.fetch_recruiter_applications(i.id for i in owned)

    def reset(self) -> None:
        """Drop every collection, e.g. on sign-out"""
        self._generation += 1
        self._set_internships(())
        self._owned = ()
        self._applications = ()
        self._received = ()
        self._error = None
        self._changed()

    def attach(self, auth_service: IAuthService) -> Callable[[], None]:
        """Follow the identity provider's session changes"""
        return auth_service.on_auth_state_change(self.handle_user_change)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Fetches degrade to the previous collection instead of raising.
    # A fetch that outlives a user change or reset leaves state untouched.

    async def fetch_internships(self) -> Tuple[Internship, ...]:
        generation = self._generation
        try:
            internships = await self.listing_repo.fetch_all()
        except DomainException as e:
            self._fetch_failed("internships", e, generation)
            return self._internships

        if self._is_stale(generation):
            return self._internships

        self._set_internships(tuple(internships))
        self._fetch_succeeded()
        logger.debug(f"Loaded {len(self._internships)} internships")
        return self._internships

    async def fetch_recruiter_internships(self) -> Tuple[Internship, ...]:
        if not isinstance(self._session, RecruiterSession):
            return ()
        generation = self._generation
        try:
            owned = await self.listing_repo.fetch_owned_by(self._session.recruiter_id)
        except DomainException as e:
            self._fetch_failed("your internships", e, generation)
            return self._owned

        if self._is_stale(generation):
            return self._owned

        self._owned = tuple(owned)
        self._fetch_succeeded()
        return self._owned

    async def fetch_applications(self) -> Tuple[Application, ...]:
        if not isinstance(self._session, StudentSession):
            return ()
        generation = self._generation
        try:
            applications = await self.application_repo.fetch_for_student(self._session.student_id)
        except DomainException as e:
            self._fetch_failed("your applications", e, generation)
            return self._applications

        if self._is_stale(generation):
            return self._applications

        self._applications = tuple(applications)
        self._fetch_succeeded()
        return self._applications

    async def fetch_recruiter_applications(
        self,
        listing_ids: Optional[Iterable[UUID]] = None
    ) -> Tuple[Application, ...]:
        if not isinstance(self._session, RecruiterSession):
            return ()
        generation = self._generation
        ids = list(listing_ids) if listing_ids is not None else [i.id for i in self._owned]
        try:
            received = await self.application_repo.fetch_for_recruiter(ids)
        except DomainException as e:
            self._fetch_failed("received applications", e, generation)
            return self._received

        if self._is_stale(generation):
            return self._received

        self._received = tuple(received)
        self._fetch_succeeded()
        return self._received

    # Internals

    def _require_student(self) -> StudentSession:
        if not isinstance(self._session, StudentSession):
            raise AuthorizationException("Only students can apply for internships")
        return self._session

    def _require_recruiter(self) -> RecruiterSession:
        if not isinstance(self._session, RecruiterSession):
            raise AuthorizationException("Only recruiters can manage internships")
        return self._session

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Discarding result fetched for a previous session")
            return True
        return False

    @asynccontextmanager
    async def _busy(self):
        self._loading = True
        self._changed()
        try:
            yield
        finally:
            self._loading = False
            self._changed()

    def _set_internships(self, internships: Tuple[Internship, ...]) -> None:
        self._internships = internships
        self._index = {i.id: i for i in internships}

    def _fetch_succeeded(self) -> None:
        self._error = None
        self._changed()

    def _fetch_failed(self, what: str, error: DomainException, generation: int) -> None:
        logger.warning(f"Failed to load {what}: {str(error)}")
        if self._is_stale(generation):
            return
        self._error = str(error)
        self._changed()
        self.notifier.notify(Notification(
            f"Could not load {what}",
            str(error),
            NotificationLevel.WARNING,
        ))

    def _notify_failure(self, title: str, error: DomainException) -> None:
        logger.warning(f"{title}: {str(error)}")
        self.notifier.notify(Notification.error(title, str(error)))

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener failed")
