"""
Authentication Service Interfaces
Abstract base classes for the identity provider adapter
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from gradglow.domain.entities import AuthSession, User
from gradglow.domain.enums import UserRole


# Called with the new current user (None after sign-out) on every session change
AuthListener = Callable[[Optional[User]], Awaitable[None]]


@dataclass(frozen=True)
class AuthResult:
    """Outcome of sign-in or sign-up"""

    user: User
    session: Optional[AuthSession]


class IAuthService(ABC):
    """Identity provider adapter interface"""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthResult:
        """
        Authenticate with email and password

        Raises:
            AuthenticationException: invalid credentials or provider unreachable
        """
        pass

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        role: UserRole,
        name: str
    ) -> AuthResult:
        """
        Register a new account and persist its profile record

        Raises:
            AuthenticationException: registration rejected
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """Clear the session; remote failures are logged, never raised"""
        pass

    @abstractmethod
    async def get_current_user(self) -> Optional[User]:
        """Current user from the active session and profile, None if either is missing"""
        pass

    @abstractmethod
    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """
        Subscribe to session changes

        Returns:
            Callable that removes the listener
        """
        pass
