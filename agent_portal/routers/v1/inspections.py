"""Inspection router (no delete endpoint: inspections are only removed with their agent)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.deps import allow, current_user, get_audit_recorder
from agent_portal.core.response import DataResponse, ListResponse, listed
from agent_portal.db.base import get_db
from agent_portal.schemas.auth import SessionUser
from agent_portal.schemas.inspection import InspectionCreate, InspectionOut, InspectionUpdate
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.inspection import InspectionService

router = APIRouter(prefix="/inspections", tags=["Inspections"])


def _svc(session: AsyncSession, audit: AuditRecorder) -> InspectionService:
    return InspectionService(session, audit)


@router.get("", response_model=ListResponse[InspectionOut])
async def list_inspections(
    agent_id: Optional[str] = Query(default=None, alias="agentId"),
    filter_status: Optional[str] = Query(default=None, alias="status"),
    user: SessionUser = Depends(allow("inspection", "list")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """List inspections by inspection date, latest first. Agents see only their own."""
    items = await _svc(session, audit).list_inspections(
        user, agent_id=agent_id, status=filter_status
    )
    return listed(items)


@router.post("", response_model=DataResponse[InspectionOut], status_code=status.HTTP_201_CREATED)
async def create_inspection(
    body: InspectionCreate,
    user: SessionUser = Depends(allow("inspection", "create")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    inspection = await _svc(session, audit).create_inspection(body, user)
    return {"data": InspectionOut.model_validate(inspection)}


@router.get("/{inspection_id}", response_model=DataResponse[InspectionOut])
async def get_inspection(
    inspection_id: str,
    user: SessionUser = Depends(current_user),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    return {"data": await _svc(session, audit).get_inspection(inspection_id, user)}


@router.put("/{inspection_id}", response_model=DataResponse[InspectionOut])
async def update_inspection(
    inspection_id: str,
    body: InspectionUpdate,
    user: SessionUser = Depends(allow("inspection", "update")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    inspection = await _svc(session, audit).update_inspection(inspection_id, body, user)
    return {"data": InspectionOut.model_validate(inspection)}
