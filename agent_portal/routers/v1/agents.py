"""Agent CRUD router.

Pattern:
  1. Gate the endpoint with a policy dependency (``allow`` / ``current_user``)
  2. Inject DB session + audit recorder via Depends
  3. Instantiate the service and call it
  4. Wrap the result in the response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.deps import allow, current_user, get_audit_recorder, get_storage
from agent_portal.core.response import DataResponse, ListResponse, listed
from agent_portal.db.base import get_db
from agent_portal.schemas.agent import AgentCreate, AgentOut, AgentUpdate
from agent_portal.schemas.auth import SessionUser
from agent_portal.services.agent import AgentService
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.storage import LocalBlobStorage

router = APIRouter(prefix="/agents", tags=["Agents"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[AgentOut])
async def list_agents(
    search: Optional[str] = Query(default=None, description="Match name, email or brokerage"),
    filter_status: Optional[str] = Query(default=None, alias="status", description="active|inactive"),
    user: SessionUser = Depends(allow("agent", "list")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """List agents, newest first. Agents only ever receive their own record."""
    items = await AgentService(session, audit).list_agents(
        user, search=search, status=filter_status
    )
    return listed([AgentOut.model_validate(a) for a in items])


@router.post("", response_model=DataResponse[AgentOut], status_code=status.HTTP_201_CREATED)
async def create_agent(
    body: AgentCreate,
    user: SessionUser = Depends(allow("agent", "create")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    agent = await AgentService(session, audit).create_agent(body, user)
    return {"data": AgentOut.model_validate(agent)}


@router.get("/{agent_id}", response_model=DataResponse[AgentOut])
async def get_agent(
    agent_id: str,
    user: SessionUser = Depends(current_user),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    agent = await AgentService(session, audit).get_agent(agent_id, user)
    return {"data": AgentOut.model_validate(agent)}


@router.put("/{agent_id}", response_model=DataResponse[AgentOut])
async def update_agent(
    agent_id: str,
    body: AgentUpdate,
    user: SessionUser = Depends(allow("agent", "update")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    agent = await AgentService(session, audit).update_agent(agent_id, body, user)
    return {"data": AgentOut.model_validate(agent)}


@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_agent(
    agent_id: str,
    user: SessionUser = Depends(allow("agent", "delete")),
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    storage: LocalBlobStorage = Depends(get_storage),
):
    """Delete an agent together with its inspections and documents."""
    await AgentService(session, audit, storage).delete_agent(agent_id, user)
