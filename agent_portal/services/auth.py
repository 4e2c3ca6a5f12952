"""Login / logout state machine.

    Anonymous --(admin password | agent email + passcode)--> Authenticated(role)
    Authenticated --(logout)--> Anonymous

Both logins compare against shared secrets from settings; agent logins also
require an existing agent record (email matched case-insensitively).
"""


import logging
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.config import Settings
from agent_portal.core.exceptions import UnauthorizedError, ValidationError
from agent_portal.repositories.agent import AgentRepository
from agent_portal.schemas.auth import LoginRequest, Role, SessionUser
from agent_portal.services.audit import AuditRecorder

logger = logging.getLogger(__name__)

AGENT_NOT_FOUND_MESSAGE = "Agent not found. Please check your email address."


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


class AuthService:
    def __init__(self, session: AsyncSession, audit: AuditRecorder, settings: Settings):
        self._agents = AgentRepository(session)
        self._audit = audit
        self._settings = settings

    async def login(self, body: LoginRequest) -> SessionUser:
        """Verify credentials and return the user to put in the session."""
        if not body.role:
            raise ValidationError("Role is required")

        if body.role == Role.ADMIN.value:
            user = self._login_admin(body)
            await self._audit.record(
                "LOGIN", "session", None, {"role": user.role.value}, actor=user
            )
        elif body.role == Role.AGENT.value:
            user = await self._login_agent(body)
            await self._audit.record(
                "LOGIN", "session", user.agent_id,
                {"role": user.role.value, "agentName": user.agent_name},
                actor=user,
            )
        else:
            raise ValidationError("Invalid role")

        logger.info("Login succeeded for role=%s agent=%s", user.role.value, user.agent_id)
        return user

    def _login_admin(self, body: LoginRequest) -> SessionUser:
        if not body.password:
            raise ValidationError("Password is required for admin login")
        if not _matches(body.password, self._settings.admin_password):
            logger.warning("Admin login rejected: invalid password")
            raise UnauthorizedError("Invalid password")
        return SessionUser(role=Role.ADMIN)

    async def _login_agent(self, body: LoginRequest) -> SessionUser:
        if not body.agent_id or not body.passcode:
            raise ValidationError("Email and passcode are required")
        if not _matches(body.passcode, self._settings.agent_passcode):
            logger.warning("Agent login rejected: invalid passcode")
            raise UnauthorizedError("Invalid passcode")

        agent = await self._agents.get_by_email(body.agent_id)
        if not agent:
            logger.warning("Agent login rejected: unknown email")
            raise UnauthorizedError(AGENT_NOT_FOUND_MESSAGE)
        return SessionUser(role=Role.AGENT, agent_id=agent.id, agent_name=agent.full_name)

    async def logout(self, user: SessionUser | None) -> None:
        """Record LOGOUT for an active session; the caller clears the cookie."""
        if user is not None:
            await self._audit.record(
                "LOGOUT", "session", user.agent_id, {"role": user.role.value}, actor=user
            )
