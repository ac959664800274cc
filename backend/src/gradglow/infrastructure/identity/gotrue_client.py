"""
Supabase Auth (GoTrue) Client
Password sign-in, sign-up, refresh and sign-out over the auth REST API
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

import httpx
from jose import jwt, JWTError
from loguru import logger

from gradglow.core.config import settings
from gradglow.core.exceptions import AuthenticationException
from gradglow.domain.entities import AuthSession


class SupabaseAuthClient:
    """Thin async client for the GoTrue endpoints the identity adapter needs"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self.timeout = timeout or settings.AUTH_HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self.base_url}/auth/v1",
            headers={"apikey": self.api_key, "Content-Type": "application/json"},
            timeout=self.timeout,
            transport=self.transport,
        )

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Exchange email/password for a session

        Raises:
            AuthenticationException: bad credentials or provider unreachable
        """
        payload = await self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._parse_session(payload)

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Dict[str, Any]
    ) -> Tuple[Dict[str, Any], Optional[AuthSession]]:
        """
        Register an account with user metadata

        Returns:
            (user record, session) - session is None while email confirmation is pending
        """
        payload = await self._post(
            "/signup",
            json={"email": email, "password": password, "data": metadata},
        )
        if payload.get("access_token"):
            return payload["user"], self._parse_session(payload)
        # Confirmation flow returns the bare user object
        return payload.get("user", payload), None

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        """Exchange a refresh token for a new session"""
        payload = await self._post(
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )
        return self._parse_session(payload)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session's refresh tokens"""
        await self._post(
            "/logout",
            headers={"Authorization": f"Bearer {access_token}"},
        )

    async def _post(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.post(path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Auth request {path} failed: {str(e)}")
            raise AuthenticationException("Authentication service is unreachable") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning(f"Auth request {path} rejected ({response.status_code}): {message}")
            raise AuthenticationException(message)

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Authentication failed ({response.status_code})"
        return (
            body.get("error_description")
            or body.get("msg")
            or body.get("message")
            or body.get("error")
            or f"Authentication failed ({response.status_code})"
        )

    @staticmethod
    def _parse_session(payload: Dict[str, Any]) -> AuthSession:
        user = payload.get("user") or {}
        access_token = payload["access_token"]
        return AuthSession(
            access_token=access_token,
            refresh_token=payload.get("refresh_token", ""),
            user_id=UUID(user["id"]),
            email=user.get("email", ""),
            expires_at=_expiry(payload, access_token),
            token_type=payload.get("token_type", "bearer"),
            user_metadata=dict(user.get("user_metadata") or {}),
        )


def _expiry(payload: Dict[str, Any], access_token: str) -> Optional[datetime]:
    """Session expiry from the response, falling back to the token's exp claim"""
    expires_at = payload.get("expires_at")
    if expires_at is None:
        try:
            expires_at = jwt.get_unverified_claims(access_token).get("exp")
        except JWTError:
            logger.debug("Access token is not a decodable JWT; expiry unknown")
            return None
    if expires_at is None:
        return None
    return datetime.fromtimestamp(int(expires_at), tz=timezone.utc)
