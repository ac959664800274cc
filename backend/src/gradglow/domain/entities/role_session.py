"""
Role Sessions
Tagged union of who is using the store: nobody, a student or a recruiter.
Each variant carries only what is valid for that role, so role checks are
isinstance checks instead of role-string comparisons.
"""
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from .user import User


@dataclass(frozen=True)
class AnonymousSession:
    """No signed-in account"""

    user: None = None


@dataclass(frozen=True)
class StudentSession:
    """Signed-in student; may apply and read own applications"""

    user: User

    @property
    def student_id(self) -> UUID:
        return self.user.id


@dataclass(frozen=True)
class RecruiterSession:
    """Signed-in recruiter; may post, delete and review listings they own"""

    user: User

    @property
    def recruiter_id(self) -> UUID:
        return self.user.id


UserSession = Union[AnonymousSession, StudentSession, RecruiterSession]


def session_for(user: Optional[User]) -> UserSession:
    """Pick the session variant for the current user"""
    if user is None:
        return AnonymousSession()
    if user.is_student():
        return StudentSession(user)
    if user.is_recruiter():
        return RecruiterSession(user)
    raise ValueError(f"Unsupported role: {user.role}")
