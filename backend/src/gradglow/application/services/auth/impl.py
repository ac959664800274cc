"""
Authentication Service Implementation
Identity provider adapter: auth API session plus the profile record
"""
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID

from loguru import logger

from gradglow.application.repositories.interfaces import IProfileRepository
from gradglow.core.config import settings
from gradglow.core.exceptions import AuthenticationException, RepositoryException
from gradglow.domain.entities import AuthSession, User
from gradglow.domain.enums import UserRole
from gradglow.domain.value_objects import Email
from gradglow.infrastructure.identity import SupabaseAuthClient
from .interfaces import AuthListener, AuthResult, IAuthService


class AuthService(IAuthService):
    """Authentication service implementation"""

    def __init__(
        self,
        auth_client: SupabaseAuthClient,
        profile_repository: IProfileRepository,
        refresh_margin_seconds: Optional[int] = None
    ):
        self.auth_client = auth_client
        self.profile_repo = profile_repository
        self.refresh_margin_seconds = (
            refresh_margin_seconds
            if refresh_margin_seconds is not None
            else settings.AUTH_REFRESH_MARGIN_SECONDS
        )
        self._session: Optional[AuthSession] = None
        self._user: Optional[User] = None
        self._listeners: List[AuthListener] = []

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def user(self) -> Optional[User]:
        """Last user emitted to listeners"""
        return self._user

    def database_claims(self) -> Optional[Dict[str, Any]]:
        """JWT claims for the current session, None when signed out"""
        if self._session is None:
            return None
        return self._session.jwt_claims()

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Authenticate user"""

        logger.info(f"Login attempt: {email}")

        session = await self.auth_client.sign_in_with_password(email.strip().lower(), password)

        user = await self._load_profile(session, heal=True)
        if user is None:
            logger.warning(f"Login failed: no profile for {session.user_id}")
            raise AuthenticationException("No profile found for this account")

        await self._set_state(session, user)
        logger.info(f"User logged in successfully: {email}")

        return AuthResult(user=user, session=session)

    async def sign_up(
        self,
        email: str,
        password: str,
        role: UserRole,
        name: str
    ) -> AuthResult:
        """Register a new user"""

        logger.info(f"Registering new user: {email}")

        # Validate email format
        try:
            email_vo = Email.parse(email)
        except ValueError as e:
            raise AuthenticationException(f"Invalid email: {str(e)}") from e

        try:
            role = UserRole(role)
        except ValueError as e:
            raise AuthenticationException(f"Unsupported role: {role}") from e

        if not name or not name.strip():
            raise AuthenticationException("Name cannot be empty")
        name = name.strip()

        record, session = await self.auth_client.sign_up(
            email_vo.value,
            password,
            {"role": role.value, "name": name},
        )

        user = User(
            id=UUID(str(record["id"])),
            email=record.get("email") or email_vo.value,
            role=role,
            name=name,
        )

        # Scoped queries read the profile table, not the auth metadata
        try:
            await self.profile_repo.upsert(user)
        except RepositoryException as e:
            logger.error(f"Profile creation failed for {user.id}: {str(e)}")
            raise AuthenticationException("Account created but the profile could not be saved") from e

        if session is not None:
            await self._set_state(session, user)
        else:
            logger.info(f"Sign-up for {email} awaiting email confirmation")

        logger.info(f"User registered successfully: {email}")
        return AuthResult(user=user, session=session)

    async def sign_out(self) -> None:
        """Revoke the remote session if possible and always clear the local one"""
        session = self._session
        if session is not None:
            try:
                await self.auth_client.sign_out(session.access_token)
            except AuthenticationException as e:
                logger.warning(f"Remote sign-out failed, clearing local session anyway: {str(e)}")

        await self._set_state(None, None)
        logger.info("User signed out")

    async def restore_session(self, session: AuthSession) -> Optional[User]:
        """Resume a persisted session, e.g. tokens kept between runs"""
        self._session = session
        user = await self.get_current_user()
        if user is None and self._session is not None:
            # Session without a profile: get_current_user saw no change to emit
            await self._emit(None)
        return user

    async def refresh_session(self) -> Optional[User]:
        """Exchange the refresh token and emit the (possibly unchanged) user"""
        if self._session is None:
            return None

        session = await self.auth_client.refresh_session(self._session.refresh_token)
        user = await self._load_profile(session, heal=False)
        await self._set_state(session, user)
        logger.debug(f"Session refreshed for {session.user_id}")
        return user

    async def get_current_user(self) -> Optional[User]:
        """Current user, or None without a session or profile"""
        if self._session is None:
            return None

        if self._session.is_expired(self.refresh_margin_seconds):
            try:
                return await self.refresh_session()
            except AuthenticationException as e:
                logger.warning(f"Session refresh failed, signing out locally: {str(e)}")
                await self._set_state(None, None)
                return None

        try:
            user = await self.profile_repo.get_by_id(self._session.user_id)
        except RepositoryException as e:
            logger.warning(f"Profile lookup failed for {self._session.user_id}: {str(e)}")
            return None

        if user != self._user:
            self._user = user
            await self._emit(user)
        return user

    async def _load_profile(self, session: AuthSession, heal: bool) -> Optional[User]:
        try:
            user = await self.profile_repo.get_by_id(session.user_id)
            if user is None and heal:
                user = self._user_from_metadata(session)
                if user is not None:
                    logger.info(f"Recreating missing profile for {session.user_id} from sign-up metadata")
                    await self.profile_repo.upsert(user)
            return user
        except RepositoryException as e:
            raise AuthenticationException("Could not load your profile") from e

    @staticmethod
    def _user_from_metadata(session: AuthSession) -> Optional[User]:
        try:
            role = UserRole(session.user_metadata.get("role"))
        except ValueError:
            return None
        return User(
            id=session.user_id,
            email=session.email,
            role=role,
            name=session.user_metadata.get("name") or None,
        )

    async def _set_state(self, session: Optional[AuthSession], user: Optional[User]) -> None:
        self._session = session
        self._user = user
        await self._emit(user)

    async def _emit(self, user: Optional[User]) -> None:
        for listener in list(self._listeners):
            try:
                await listener(user)
            except Exception:
                # One broken subscriber must not stop the others or the auth flow
                logger.exception("Auth state listener failed")
