"""
Domain Enums
Business enumerations for the application
"""
from enum import Enum
from typing import Dict, FrozenSet, List


class UserRole(str, Enum):
    """Account role, fixed at sign-up"""
    STUDENT = "student"
    RECRUITER = "recruiter"


class InternshipCategory(str, Enum):
    """Listing categories offered by the posting form"""
    TECH = "Technology"
    DESIGN = "Design"
    MARKETING = "Marketing"
    BUSINESS = "Business"
    FINANCE = "Finance"
    ENGINEERING = "Engineering"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    OTHER = "Other"
    SOFTWARE_DEVELOPMENT = "Software Development"
    DATA_SCIENCE = "Data Science"
    PRODUCT_MANAGEMENT = "Product Management"


class ApplicationStatus(str, Enum):
    """Status of an internship application"""
    PENDING = "pending"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Workflow used when STRICT_STATUS_TRANSITIONS is enabled.
# Accepted and rejected are terminal.
STRICT_STATUS_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({ApplicationStatus.REVIEWING}),
    ApplicationStatus.REVIEWING: frozenset({
        ApplicationStatus.ACCEPTED,
        ApplicationStatus.REJECTED,
    }),
    ApplicationStatus.ACCEPTED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


def allowed_transitions(current: ApplicationStatus, strict: bool = False) -> List[ApplicationStatus]:
    """Statuses an application may move to from `current`, in declaration order"""
    if strict:
        targets = STRICT_STATUS_TRANSITIONS.get(current, frozenset())
        return [status for status in ApplicationStatus if status in targets]
    return [status for status in ApplicationStatus if status != current]


def can_transition(current: ApplicationStatus, requested: ApplicationStatus, strict: bool = False) -> bool:
    """Check whether a status move is permitted"""
    if not strict:
        return True
    return requested in STRICT_STATUS_TRANSITIONS.get(current, frozenset())
