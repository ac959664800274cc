"""Domain Entities - Core business objects"""

from .user import User
from .internship import Internship, NewInternship, parse_requirements
from .application import Application, ApplicationSubmission
from .auth_session import AuthSession
from .role_session import (
    AnonymousSession,
    StudentSession,
    RecruiterSession,
    UserSession,
    session_for,
)
__all__ = [
    "User",
    "Internship",
    "NewInternship",
    "parse_requirements",
    "Application",
    "ApplicationSubmission",
    "AuthSession",
    "AnonymousSession",
    "StudentSession",
    "RecruiterSession",
    "UserSession",
    "session_for",
]
