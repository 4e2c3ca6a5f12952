"""Auth router: login, logout, and current session."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.config import Settings
from agent_portal.core.deps import (
    get_audit_recorder,
    get_session_store,
    get_session_user,
    get_settings,
)
from agent_portal.core.session import SessionStore
from agent_portal.db.base import get_db
from agent_portal.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    SessionResponse,
    SessionUser,
)
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    body: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    """Admin: ``{role, password}``. Agent: ``{role, agentId: <email>, passcode}``."""
    user = await AuthService(session, audit, settings).login(body)
    store.create(response, user)
    return LoginResponse(user=user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    user: SessionUser | None = Depends(get_session_user),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    await AuthService(session, audit, settings).logout(user)
    store.destroy(response)
    return LogoutResponse()


@router.get("/session", response_model=SessionResponse, response_model_exclude_none=True)
async def current_session(user: SessionUser | None = Depends(get_session_user)):
    return SessionResponse(user=user, is_authenticated=user is not None)
