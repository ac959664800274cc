"""
Shared fixtures: entity factories, in-memory repositories and a fake DB session
"""
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
from unittest.mock import AsyncMock, Mock
from uuid import UUID, uuid4

import pytest

from gradglow.application.repositories.interfaces import (
    IApplicationRepository,
    IListingRepository,
)
from gradglow.application.services.notifications import INotifier, Notification
from gradglow.core.exceptions import DuplicateApplicationException
from gradglow.domain.entities import (
    Application,
    ApplicationSubmission,
    Internship,
    NewInternship,
    User,
)
from gradglow.domain.entities.application import COMPANY, INTERNSHIP_TITLE
from gradglow.domain.enums import ApplicationStatus, InternshipCategory, UserRole


BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _listing(**overrides) -> Internship:
    fields = dict(
        id=uuid4(),
        title="Frontend Intern",
        company="Acme",
        location="Berlin",
        category=InternshipCategory.TECH,
        description="Build UI components",
        duration="3 months",
        created_at=BASE_TIME,
        deadline=BASE_TIME + timedelta(days=30),
        recruiter_id=uuid4(),
        is_remote=False,
        requirements=("React", "TypeScript"),
    )
    fields.update(overrides)
    return Internship(**fields)


def _application(**overrides) -> Application:
    fields = dict(
        id=uuid4(),
        internship_id=uuid4(),
        student_id=uuid4(),
        status=ApplicationStatus.PENDING,
        created_at=BASE_TIME,
        resume_url="https://r.example/cv",
        student_name="Ada",
    )
    fields.update(overrides)
    return Application(**fields)


def _user(role: UserRole = UserRole.STUDENT, **overrides) -> User:
    fields = dict(id=uuid4(), email=f"{role.value}@example.com", role=role, name=role.value.title())
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def make_listing():
    return _listing


@pytest.fixture
def make_application():
    return _application


@pytest.fixture
def make_user():
    return _user


@pytest.fixture
def new_internship():
    return NewInternship(
        title="Backend Intern",
        company="Acme",
        location="Remote",
        category=InternshipCategory.TECH,
        description="APIs and queues",
        duration="3 months",
        deadline=BASE_TIME + timedelta(days=30),
        is_remote=False,
    )


class FakeListingRepository(IListingRepository):
    """Listing table in a list; `fail` makes every call raise"""

    def __init__(self, listings: Iterable[Internship] = ()):
        self.rows: List[Internship] = list(listings)
        self.calls: List[str] = []
        self.fail: Optional[Exception] = None

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail is not None:
            raise self.fail

    async def fetch_all(self) -> List[Internship]:
        self._record("fetch_all")
        return sorted(self.rows, key=lambda i: i.created_at, reverse=True)

    async def fetch_owned_by(self, recruiter_id: UUID) -> List[Internship]:
        self._record("fetch_owned_by")
        owned = [i for i in self.rows if i.recruiter_id == recruiter_id]
        return sorted(owned, key=lambda i: i.created_at, reverse=True)

    async def create(self, data: NewInternship, recruiter_id: UUID) -> Internship:
        self._record("create")
        listing = Internship(
            id=uuid4(),
            created_at=BASE_TIME + timedelta(minutes=len(self.rows) + 1),
            recruiter_id=recruiter_id,
            **asdict(data),
        )
        self.rows.append(listing)
        return listing

    async def delete(self, internship_id: UUID, recruiter_id: UUID) -> bool:
        self._record("delete")
        before = len(self.rows)
        self.rows = [
            i for i in self.rows
            if not (i.id == internship_id and i.recruiter_id == recruiter_id)
        ]
        return len(self.rows) < before


class FakeApplicationRepository(IApplicationRepository):
    """Application table in a list with the (student, internship) unique constraint"""

    def __init__(self, applications: Iterable[Application] = ()):
        self.rows: List[Application] = list(applications)
        self.calls: List[str] = []
        self.fail: Optional[Exception] = None

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail is not None:
            raise self.fail

    async def fetch_for_student(self, student_id: UUID) -> List[Application]:
        self._record("fetch_for_student")
        return [a for a in self.rows if a.student_id == student_id]

    async def fetch_for_recruiter(self, listing_ids: Iterable[UUID]) -> List[Application]:
        self._record("fetch_for_recruiter")
        ids = set(listing_ids)
        return [a for a in self.rows if a.internship_id in ids]

    async def create(
        self,
        listing: Internship,
        student_id: UUID,
        student_name: Optional[str],
        data: ApplicationSubmission
    ) -> Application:
        self._record("create")
        if any(a.student_id == student_id and a.internship_id == listing.id for a in self.rows):
            raise DuplicateApplicationException(str(listing.id))
        application = Application(
            id=uuid4(),
            internship_id=listing.id,
            student_id=student_id,
            status=ApplicationStatus.PENDING,
            created_at=BASE_TIME,
            resume_url=data.resume_url,
            cover_letter=data.cover_letter,
            student_name=student_name,
            additional_questions={INTERNSHIP_TITLE: listing.title, COMPANY: listing.company},
        )
        self.rows.insert(0, application)
        return application

    async def update_status(self, application_id: UUID, status: ApplicationStatus) -> None:
        self._record("update_status")
        self.rows = [
            a.with_status(status) if a.id == application_id else a
            for a in self.rows
        ]


class RecordingNotifier(INotifier):
    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification:
        return self.notifications[-1]


@pytest.fixture
def listing_repo():
    return FakeListingRepository()


@pytest.fixture
def application_repo():
    return FakeApplicationRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def db_session():
    """AsyncSession stand-in; `add` is synchronous on the real session"""
    session = AsyncMock()
    session.add = Mock()
    return session


@pytest.fixture
def session_factory(db_session):
    """Session factory yielding `db_session`; call count shows whether a query ran"""

    @asynccontextmanager
    async def open_session():
        yield db_session

    return Mock(side_effect=open_session)
