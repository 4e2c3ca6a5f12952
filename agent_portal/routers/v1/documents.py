"""Document router: multipart PDF upload, listing, URL lookup, deletion."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.config import Settings
from agent_portal.core.deps import (
    allow,
    current_user,
    get_audit_recorder,
    get_settings,
    get_storage,
)
from agent_portal.core.response import DataResponse, ListResponse, listed
from agent_portal.db.base import get_db
from agent_portal.domain.document import DocumentCategory
from agent_portal.schemas.auth import SessionUser
from agent_portal.schemas.document import DocumentOut, DocumentUrlOut
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.document import DocumentService
from agent_portal.services.storage import LocalBlobStorage

router = APIRouter(prefix="/documents", tags=["Documents"])


# ------------------------------------------------------------------
# Helper: instantiate service with its collaborators
# ------------------------------------------------------------------

def _svc(
    session: AsyncSession = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    storage: LocalBlobStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> DocumentService:
    return DocumentService(session, audit, storage, settings.max_upload_size_bytes)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[DocumentOut])
async def list_documents(
    agent_id: Optional[str] = Query(default=None, alias="agentId"),
    inspection_id: Optional[str] = Query(default=None, alias="inspectionId"),
    category: Optional[str] = Query(default=None),
    user: SessionUser = Depends(allow("document", "list")),
    svc: DocumentService = Depends(_svc),
):
    """List documents, newest first. Agents see only their own."""
    items = await svc.list_documents(
        user, agent_id=agent_id, inspection_id=inspection_id, category=category
    )
    return listed([DocumentOut.model_validate(d) for d in items])


@router.post("", response_model=DataResponse[DocumentOut], status_code=status.HTTP_201_CREATED)
async def upload_document(
    agent_id: str = Form(default="", alias="agentId"),
    inspection_id: str = Form(default="", alias="inspectionId"),
    title: str = Form(default=""),
    category: DocumentCategory = Form(default="Other"),
    file: Optional[UploadFile] = File(default=None),
    user: SessionUser = Depends(allow("document", "create")),
    settings: Settings = Depends(get_settings),
    svc: DocumentService = Depends(_svc),
):
    """Upload a PDF (multipart/form-data) for an agent, optionally tied to an inspection."""
    data = b""
    file_name = ""
    content_type = None
    if file is not None:
        # One byte past the ceiling is enough to detect an oversized upload
        data = await file.read(settings.max_upload_size_bytes + 1)
        file_name = file.filename or ""
        content_type = file.content_type

    document = await svc.upload_document(
        user,
        agent_id=agent_id,
        inspection_id=inspection_id or None,
        title=title,
        category=category,
        file_name=file_name,
        content_type=content_type,
        data=data,
    )
    return {"data": DocumentOut.model_validate(document)}


@router.get("/{document_id}", response_model=DataResponse[DocumentOut])
async def get_document(
    document_id: str,
    user: SessionUser = Depends(current_user),
    svc: DocumentService = Depends(_svc),
):
    return {"data": DocumentOut.model_validate(await svc.get_document(document_id, user))}


@router.get("/{document_id}/url", response_model=DocumentUrlOut)
async def get_document_url(
    document_id: str,
    user: SessionUser = Depends(current_user),
    svc: DocumentService = Depends(_svc),
):
    """Public URL of the stored PDF, after the ownership check."""
    url, document = await svc.get_document_url(document_id, user)
    return {"url": url, "document": DocumentOut.model_validate(document)}


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    user: SessionUser = Depends(allow("document", "delete")),
    svc: DocumentService = Depends(_svc),
):
    await svc.delete_document(document_id, user)
