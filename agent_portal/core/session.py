"""Signed, versioned session cookie.

The whole session lives client-side as an HS256 JWT holding
``{v, role, agentId?, agentName?, iat, exp}``. There is no server-side session
table and no revocation list: a token stays valid until it expires or the
client drops the cookie on logout.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import ValidationError as PydanticValidationError
from starlette.responses import Response

from agent_portal.core.config import Settings
from agent_portal.schemas.auth import SessionUser

logger = logging.getLogger(__name__)

SESSION_VERSION = 1
_ALGORITHM = "HS256"


class SessionStore:
    """Encode, decode, issue, and destroy session cookies."""

    def __init__(
        self,
        secret: str,
        *,
        cookie_name: str = "agent-portal-session",
        max_age_seconds: int = 7 * 24 * 60 * 60,
        secure: bool = False,
    ):
        self._secret = secret
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self.secure = secure

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionStore":
        return cls(
            settings.session_secret,
            cookie_name=settings.session_cookie_name,
            max_age_seconds=settings.session_max_age_seconds,
            secure=settings.cookie_secure,
        )

    # ------------------------------------------------------------------
    # Token codec
    # ------------------------------------------------------------------

    def encode(self, user: SessionUser) -> str:
        now = datetime.now(timezone.utc)
        claims = user.model_dump(by_alias=True, exclude_none=True, mode="json")
        claims.update(
            v=SESSION_VERSION,
            iat=now,
            exp=now + timedelta(seconds=self.max_age_seconds),
        )
        return jwt.encode(claims, self._secret, algorithm=_ALGORITHM)

    def decode(self, token: str | None) -> SessionUser | None:
        """Return the session user, or ``None`` for any bad token. Never raises."""
        if not token:
            return None
        try:
            claims = jwt.decode(token, self._secret, algorithms=[_ALGORITHM])
        except jwt.PyJWTError as exc:
            logger.debug("Rejected session token: %s", exc)
            return None
        if claims.get("v") != SESSION_VERSION:
            return None
        try:
            return SessionUser.model_validate(
                {k: v for k, v in claims.items() if k in ("role", "agentId", "agentName")}
            )
        except PydanticValidationError:
            return None

    # ------------------------------------------------------------------
    # Cookie lifecycle
    # ------------------------------------------------------------------

    def create(self, response: Response, user: SessionUser) -> str:
        token = self.encode(user)
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self.max_age_seconds,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )
        return token

    def destroy(self, response: Response) -> None:
        response.delete_cookie(
            self.cookie_name,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )

    def sets_cookie(self, response: Response) -> bool:
        """True if the response already writes this session cookie."""
        prefix = f"{self.cookie_name}="
        return any(
            value.startswith(prefix) for value in response.headers.getlist("set-cookie")
        )
