"""
User Domain Entity
Immutable view of the signed-in account
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from ..enums import UserRole


@dataclass(frozen=True)
class User:
    """User domain entity - immutable, owned by the identity provider"""

    id: UUID
    email: str
    role: UserRole
    name: Optional[str] = None
    avatar_url: Optional[str] = None

    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    def is_recruiter(self) -> bool:
        return self.role == UserRole.RECRUITER

    def __str__(self) -> str:
        return f"User({self.email}, {self.role.value})"
