"""Audit trail (admin only) and dashboard routers."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.deps import allow
from agent_portal.core.response import ListResponse, listed
from agent_portal.db.base import get_db
from agent_portal.domain.audit import AuditAction, EntityType
from agent_portal.schemas.audit import ActivityItem, AuditLogOut, DashboardStats
from agent_portal.schemas.auth import SessionUser
from agent_portal.services.audit import AuditService
from agent_portal.services.dashboard import DashboardService

router = APIRouter(prefix="/audit", tags=["Audit"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=ListResponse[AuditLogOut])
async def list_audit_logs(
    entity_type: Optional[EntityType] = Query(default=None, alias="entityType"),
    action: Optional[AuditAction] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500, description="Max entries returned"),
    user: SessionUser = Depends(allow("audit_log", "list")),
    session: AsyncSession = Depends(get_db),
):
    """Newest-first audit entries, filterable by entity type and action."""
    logs = await AuditService(session).search(
        entity_type=entity_type, action=action, limit=limit
    )
    return listed([AuditLogOut.model_validate(log) for log in logs])


@dashboard_router.get("/stats", response_model=dict[str, DashboardStats])
async def dashboard_stats(
    user: SessionUser = Depends(allow("dashboard", "read")),
    session: AsyncSession = Depends(get_db),
):
    return {"stats": await DashboardService(session).stats(user)}


@dashboard_router.get("/activity", response_model=dict[str, list[ActivityItem]])
async def dashboard_activity(
    user: SessionUser = Depends(allow("dashboard", "read")),
    session: AsyncSession = Depends(get_db),
):
    """Ten most recent agent creations, inspection bookings and uploads."""
    return {"activity": await DashboardService(session).activity(user)}
