"""
Application Domain Entity
Immutable internship application business object
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Mapping, Optional
from uuid import UUID

from ..enums import ApplicationStatus


# Keys used inside additional_questions
LINKEDIN = "linkedIn"
PORTFOLIO = "portfolio"
WHY_INTERESTED = "whyInterested"
RELEVANT_EXPERIENCE = "relevantExperience"
INTERNSHIP_TITLE = "internshipTitle"
COMPANY = "company"


@dataclass(frozen=True)
class Application:
    """Internship application domain entity - immutable"""

    id: UUID
    internship_id: UUID
    student_id: UUID

    # Application details
    status: ApplicationStatus
    created_at: datetime

    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    student_name: Optional[str] = None

    # Free-form answers plus the denormalized listing title/company
    additional_questions: Optional[Mapping[str, str]] = None

    def with_status(self, status: ApplicationStatus) -> "Application":
        """Copy with a new status; every other field is kept"""
        return replace(self, status=status)

    @property
    def internship_title(self) -> Optional[str]:
        return (self.additional_questions or {}).get(INTERNSHIP_TITLE)

    @property
    def company(self) -> Optional[str]:
        return (self.additional_questions or {}).get(COMPANY)

    def __str__(self) -> str:
        return f"Application({self.id}, status={self.status.value})"


@dataclass(frozen=True)
class ApplicationSubmission:
    """What a student fills in when applying"""

    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    additional_questions: Optional[Mapping[str, str]] = None

    def answer(self, key: str) -> Optional[str]:
        """Non-empty answer for a question key, else None"""
        value = (self.additional_questions or {}).get(key)
        return value or None
