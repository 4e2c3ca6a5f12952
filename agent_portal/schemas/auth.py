"""Auth schemas: session claims, login request, and auth responses."""

from enum import Enum

from pydantic import model_validator

from agent_portal.schemas.common import CamelModel

class Role(str, Enum):
    ADMIN = "admin"
    AGENT = "agent"

class SessionUser(CamelModel):
    """Claims carried inside the signed session cookie."""

    role: Role
    agent_id: str | None = None
    agent_name: str | None = None

    @model_validator(mode="after")
    def _agent_needs_id(self) -> "SessionUser":
        if self.role is Role.AGENT and not self.agent_id:
            raise ValueError("agent sessions must carry an agentId")
        return self

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

class LoginRequest(CamelModel):
    # Kept as plain str so an unknown role is reported by the login flow itself
    role: str | None = None
    password: str | None = None
    # Agents identify themselves by email; the field keeps its historical name
    agent_id: str | None = None
    passcode: str | None = None

class LoginResponse(CamelModel):
    success: bool = True
    user: SessionUser

class LogoutResponse(CamelModel):
    success: bool = True

class SessionResponse(CamelModel):
    user: SessionUser | None = None
    is_authenticated: bool = False
