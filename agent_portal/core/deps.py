"""FastAPI dependencies: everything a router needs, resolved from ``app.state``.

``create_app`` puts the settings, Database, SessionStore and blob storage on
``app.state`` once at startup; these helpers hand them to routers.
"""

from __future__ import annotations

from fastapi import Depends, Request

from agent_portal.core.authz import authorize, require_auth
from agent_portal.core.config import Settings
from agent_portal.core.session import SessionStore
from agent_portal.db.base import get_database
from agent_portal.schemas.auth import SessionUser
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.storage import LocalBlobStorage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_storage(request: Request) -> LocalBlobStorage:
    return request.app.state.storage


def get_session_user(request: Request) -> SessionUser | None:
    """The decoded session, or ``None`` (populated by SessionMiddleware)."""
    return getattr(request.state, "user", None)


async def current_user(user: SessionUser | None = Depends(get_session_user)) -> SessionUser:
    return require_auth(user)


def allow(resource: str, action: str):
    """Dependency factory enforcing a policy row that needs no record lookup."""

    async def _check(user: SessionUser | None = Depends(get_session_user)) -> SessionUser:
        return authorize(user, resource, action)

    return _check


def get_audit_recorder(
    request: Request, user: SessionUser | None = Depends(get_session_user)
) -> AuditRecorder:
    return AuditRecorder(get_database(request), user)
