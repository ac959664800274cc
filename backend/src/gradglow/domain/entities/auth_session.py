"""
AuthSession Domain Entity
Tokens issued by the identity provider for the signed-in account
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID


@dataclass(frozen=True)
class AuthSession:
    """Access/refresh token pair plus the identity record it belongs to"""

    access_token: str
    refresh_token: str
    user_id: UUID
    email: str
    expires_at: Optional[datetime] = None
    token_type: str = "bearer"

    # Metadata supplied at sign-up (role, name)
    user_metadata: Dict[str, Any] = field(default_factory=dict)

    def is_expired(self, margin_seconds: int = 0, now: Optional[datetime] = None) -> bool:
        """True once the access token is within `margin_seconds` of expiry"""
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now + timedelta(seconds=margin_seconds) >= self.expires_at

    def jwt_claims(self) -> Dict[str, Any]:
        """Claims the database reads through auth.uid() and auth.role()"""
        return {"sub": str(self.user_id), "email": self.email, "role": "authenticated"}

    def __repr__(self) -> str:
        # Never print tokens
        return f"AuthSession(user_id={self.user_id}, expires_at={self.expires_at})"
