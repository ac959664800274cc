"""Authentication Services"""

from .interfaces import AuthListener, AuthResult, IAuthService
from .impl import AuthService

__all__ = ["AuthListener", "AuthResult", "IAuthService", "AuthService"]
