"""
Tests for SupabaseAuthClient against a mocked auth API
"""
import json

import httpx
import pytest
from datetime import datetime, timezone
from jose import jwt
from uuid import uuid4

from gradglow.core.exceptions import AuthenticationException
from gradglow.infrastructure.identity import SupabaseAuthClient


USER_ID = uuid4()
EXPIRES_AT = 1893456000  # 2030-01-01T00:00:00Z


def _session_payload(access_token="opaque-token", **extra):
    payload = {
        "access_token": access_token,
        "refresh_token": "refresh-1",
        "token_type": "bearer",
        "user": {
            "id": str(USER_ID),
            "email": "ada@example.com",
            "user_metadata": {"role": "student", "name": "Ada"},
        },
    }
    payload.update(extra)
    return payload


def _client(handler):
    return SupabaseAuthClient(
        base_url="http://auth.test/",
        api_key="anon-key",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


class TestSignIn:
    """Password grant"""

    @pytest.mark.asyncio
    async def test_sign_in_posts_password_grant(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=_session_payload(expires_at=EXPIRES_AT))

        session = await _client(handler).sign_in_with_password("ada@example.com", "secret")

        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/auth/v1/token"
        assert request.url.params["grant_type"] == "password"
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content) == {"email": "ada@example.com", "password": "secret"}

        assert session.user_id == USER_ID
        assert session.email == "ada@example.com"
        assert session.refresh_token == "refresh-1"
        assert session.user_metadata == {"role": "student", "name": "Ada"}
        assert session.expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_expiry_falls_back_to_token_exp_claim(self):
        token = jwt.encode({"sub": str(USER_ID), "exp": EXPIRES_AT}, "test-secret", algorithm="HS256")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_session_payload(access_token=token))

        session = await _client(handler).sign_in_with_password("ada@example.com", "secret")

        assert session.expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise_with_provider_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            )

        with pytest.raises(AuthenticationException, match="Invalid login credentials"):
            await _client(handler).sign_in_with_password("ada@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_unreachable_provider_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AuthenticationException, match="unreachable"):
            await _client(handler).sign_in_with_password("ada@example.com", "secret")


class TestSignUpAndSession:
    """Sign-up, refresh and logout"""

    @pytest.mark.asyncio
    async def test_sign_up_sends_metadata_and_returns_session(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json=_session_payload(expires_at=EXPIRES_AT))

        record, session = await _client(handler).sign_up(
            "ada@example.com", "secret", {"role": "student", "name": "Ada"}
        )

        assert bodies[0]["data"] == {"role": "student", "name": "Ada"}
        assert record["id"] == str(USER_ID)
        assert session is not None
        assert session.user_id == USER_ID

    @pytest.mark.asyncio
    async def test_sign_up_awaiting_confirmation_has_no_session(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/auth/v1/signup"
            return httpx.Response(200, json={"id": str(USER_ID), "email": "ada@example.com"})

        record, session = await _client(handler).sign_up("ada@example.com", "secret", {})

        assert record["email"] == "ada@example.com"
        assert session is None

    @pytest.mark.asyncio
    async def test_refresh_uses_refresh_token_grant(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["grant"] = request.url.params["grant_type"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_session_payload(expires_at=EXPIRES_AT))

        session = await _client(handler).refresh_session("refresh-0")

        assert seen == {"grant": "refresh_token", "body": {"refresh_token": "refresh-0"}}
        assert session.refresh_token == "refresh-1"

    @pytest.mark.asyncio
    async def test_sign_out_sends_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["authorization"] = request.headers["authorization"]
            return httpx.Response(204)

        await _client(handler).sign_out("access-1")

        assert seen == {"path": "/auth/v1/logout", "authorization": "Bearer access-1"}
