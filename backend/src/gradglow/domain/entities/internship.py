"""
Internship Domain Entity
Immutable recruiter-posted listing
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union
from uuid import UUID

from ..enums import InternshipCategory

# Unknown categories coming from storage are kept as plain strings
Category = Union[InternshipCategory, str]


def parse_requirements(text: Optional[str]) -> Tuple[str, ...]:
    """Split free-text requirements (one per line) into trimmed, non-empty entries"""
    if not text:
        return ()
    return tuple(line.strip() for line in text.split("\n") if line.strip())


@dataclass(frozen=True)
class Internship:
    """Internship listing domain entity - immutable"""

    id: UUID
    title: str
    company: str
    location: str
    category: Category
    description: str
    duration: str
    created_at: datetime
    deadline: datetime
    recruiter_id: UUID
    is_remote: bool = False
    requirements: Tuple[str, ...] = ()

    # Optional details
    salary: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    company_description: Optional[str] = None

    def is_owned_by(self, recruiter_id: UUID) -> bool:
        return self.recruiter_id == recruiter_id

    def __str__(self) -> str:
        return f"Internship({self.title} at {self.company})"


@dataclass(frozen=True)
class NewInternship:
    """Listing payload submitted by a recruiter; id, created_at and owner are assigned on insert"""

    title: str
    company: str
    location: str
    category: Category
    description: str
    duration: str
    deadline: datetime
    is_remote: bool = False
    requirements: Tuple[str, ...] = field(default_factory=tuple)
    salary: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    company_description: Optional[str] = None

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("Title cannot be empty")
        if not self.company or not self.company.strip():
            raise ValueError("Company cannot be empty")
        # Accept any iterable of strings but store an immutable tuple
        object.__setattr__(self, "requirements", tuple(self.requirements))

    @classmethod
    def from_form(cls, requirements_text: Optional[str] = None, **fields: Any) -> "NewInternship":
        """Build from posting-form values where requirements are one per line"""
        return cls(requirements=parse_requirements(requirements_text), **fields)

    def to_record(self) -> Dict[str, Any]:
        """Column values for the insert, with enum categories flattened to their value"""
        record = asdict(self)
        record["requirements"] = list(self.requirements)
        if isinstance(self.category, InternshipCategory):
            record["category"] = self.category.value
        return record
