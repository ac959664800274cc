"""
Entity Mapper
Pure translation between persistence rows and domain entities.

Rows may be ORM model instances or plain mappings (e.g. JSON rows from the
hosted database's REST surface). Absent optional columns always become None.
"""
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union
from uuid import UUID

from loguru import logger

from gradglow.domain.entities import (
    Application,
    ApplicationSubmission,
    Internship,
    User,
)
from gradglow.domain.entities.application import (
    COMPANY,
    INTERNSHIP_TITLE,
    LINKEDIN,
    PORTFOLIO,
    RELEVANT_EXPERIENCE,
    WHY_INTERESTED,
)
from gradglow.domain.entities.internship import Category
from gradglow.domain.enums import ApplicationStatus, InternshipCategory, UserRole


# Column -> additional_questions key
QUESTION_COLUMNS = {
    "linkedin_url": LINKEDIN,
    "portfolio_url": PORTFOLIO,
    "why_interested": WHY_INTERESTED,
    "relevant_experience": RELEVANT_EXPERIENCE,
    "internship_title": INTERNSHIP_TITLE,
    "internship_company": COMPANY,
}


def _get(row: Any, column: str) -> Any:
    """Read a column from an ORM object or a mapping"""
    if isinstance(row, Mapping):
        return row.get(column)
    return getattr(row, column, None)


def _optional(value: Any) -> Any:
    """Collapse empty strings to None so absence has one representation"""
    if value is None or value == "":
        return None
    return value


def _uuid(value: Union[UUID, str]) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


def _timestamp(value: Union[datetime, str, None]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    # Python < 3.11 does not accept the trailing Z
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _category(value: str) -> Category:
    """Known values become InternshipCategory members; anything else passes through as-is"""
    try:
        return InternshipCategory(value)
    except ValueError:
        logger.debug(f"Passing through unrecognized category: {value!r}")
        return value


def db_row_to_listing(row: Any) -> Internship:
    """Map an internship_listings row to an Internship"""
    return Internship(
        id=_uuid(_get(row, "id")),
        title=_get(row, "title"),
        company=_get(row, "company"),
        location=_get(row, "location"),
        category=_category(_get(row, "category")),
        description=_get(row, "description"),
        requirements=tuple(_get(row, "requirements") or ()),
        salary=_optional(_get(row, "salary")),
        duration=_get(row, "duration"),
        website=_optional(_get(row, "website")),
        logo_url=_optional(_get(row, "logo_url")),
        created_at=_timestamp(_get(row, "created_at")),
        deadline=_timestamp(_get(row, "deadline")),
        is_remote=bool(_get(row, "is_remote")),
        company_description=_optional(_get(row, "company_description")),
        recruiter_id=_uuid(_get(row, "recruiter_id")),
    )


def db_row_to_application(row: Any) -> Application:
    """Map an applications row to an Application"""
    questions: Dict[str, str] = {}
    for column, key in QUESTION_COLUMNS.items():
        value = _optional(_get(row, column))
        if value is not None:
            questions[key] = value

    return Application(
        id=_uuid(_get(row, "id")),
        internship_id=_uuid(_get(row, "internship_id")),
        student_id=_uuid(_get(row, "student_id")),
        status=ApplicationStatus(_get(row, "status")),
        created_at=_timestamp(_get(row, "created_at")),
        resume_url=_optional(_get(row, "resume_url")),
        cover_letter=_optional(_get(row, "cover_letter")),
        student_name=_optional(_get(row, "student_name")),
        additional_questions=questions or None,
    )


def db_row_to_user(row: Any) -> User:
    """Map a profiles row to a User"""
    return User(
        id=_uuid(_get(row, "id")),
        email=_get(row, "email"),
        role=UserRole(_get(row, "role")),
        name=_optional(_get(row, "name")),
        avatar_url=_optional(_get(row, "avatar_url")),
    )


def application_record(
    listing: Internship,
    student_id: UUID,
    student_name: Optional[str],
    data: ApplicationSubmission
) -> Dict[str, Any]:
    """Column values for a new application, denormalizing the listing title and company"""
    return {
        "internship_id": listing.id,
        "student_id": student_id,
        "student_name": student_name,
        "internship_title": listing.title,
        "internship_company": listing.company,
        "status": ApplicationStatus.PENDING.value,
        "resume_url": _optional(data.resume_url),
        "cover_letter": _optional(data.cover_letter),
        "linkedin_url": data.answer(LINKEDIN),
        "portfolio_url": data.answer(PORTFOLIO),
        "why_interested": data.answer(WHY_INTERESTED),
        "relevant_experience": data.answer(RELEVANT_EXPERIENCE),
    }
