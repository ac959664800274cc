"""
Derived Views
Pure functions over the store's collections and the current role session
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Sequence, Tuple
from uuid import UUID

from gradglow.domain.entities import (
    Application,
    Internship,
    RecruiterSession,
    StudentSession,
    UserSession,
)
from gradglow.domain.enums import ApplicationStatus, allowed_transitions
from gradglow.domain.value_objects import ListingFilter


def student_applications(
    applications: Iterable[Application],
    session: UserSession
) -> Tuple[Application, ...]:
    """Applications submitted by the signed-in student; empty for other roles"""
    if not isinstance(session, StudentSession):
        return ()
    return tuple(a for a in applications if a.student_id == session.student_id)


def recruiter_internships(
    internships: Iterable[Internship],
    session: UserSession
) -> Tuple[Internship, ...]:
    """Listings owned by the signed-in recruiter; empty for other roles"""
    if not isinstance(session, RecruiterSession):
        return ()
    return tuple(i for i in internships if i.is_owned_by(session.recruiter_id))


def recruiter_applications(
    applications: Iterable[Application],
    owned: Iterable[Internship],
    session: UserSession
) -> Tuple[Application, ...]:
    """Applications against any listing the signed-in recruiter owns"""
    if not isinstance(session, RecruiterSession):
        return ()
    owned_ids = {i.id for i in owned if i.is_owned_by(session.recruiter_id)}
    return tuple(a for a in applications if a.internship_id in owned_ids)


def filter_internships(
    internships: Iterable[Internship],
    listing_filter: ListingFilter
) -> List[Internship]:
    """Listings matching the search box, category, location and remote toggle"""
    if listing_filter.is_empty():
        return list(internships)
    return [i for i in internships if listing_filter.matches(i)]


def status_counts(applications: Iterable[Application]) -> Dict[str, int]:
    """
    Dashboard counters

    Returns:
        Dict with "total" plus one entry per status value, zero-filled
    """
    counts = {"total": 0}
    counts.update({status.value: 0 for status in ApplicationStatus})
    for application in applications:
        counts["total"] += 1
        counts[application.status.value] += 1
    return counts


def applications_by_internship(
    applications: Iterable[Application],
    internships: Sequence[Internship]
) -> "OrderedDict[UUID, List[Application]]":
    """Group applications under their listing, keeping listing order; listings without applications get []"""
    grouped: "OrderedDict[UUID, List[Application]]" = OrderedDict(
        (internship.id, []) for internship in internships
    )
    for application in applications:
        if application.internship_id in grouped:
            grouped[application.internship_id].append(application)
    return grouped


def recommended_internships(
    internships: Iterable[Internship],
    applications: Iterable[Application],
    limit: int
) -> List[Internship]:
    """Listings the student has not applied to yet, in collection order"""
    applied = {a.internship_id for a in applications}
    picks = [i for i in internships if i.id not in applied]
    return picks[:limit]


def status_options(current: ApplicationStatus, strict: bool = False) -> List[ApplicationStatus]:
    """Statuses a recruiter may move an application to"""
    return allowed_transitions(current, strict)
