"""Document service: PDF upload, listing, URL lookup, and deletion.

Upload order: validate → store blob → insert row → commit → audit. If the
insert fails the freshly stored blob is removed again.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.authz import authorize, scope_agent_id
from agent_portal.core.exceptions import InternalError, NotFoundError, ValidationError
from agent_portal.domain.document import Document, DocumentCategory
from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.document import DocumentRepository
from agent_portal.repositories.inspection import InspectionRepository
from agent_portal.schemas.auth import SessionUser
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.storage import LocalBlobStorage, validate_pdf_upload

logger = logging.getLogger(__name__)

class DocumentService:
    def __init__(
        self,
        session: AsyncSession,
        audit: AuditRecorder,
        storage: LocalBlobStorage,
        max_upload_bytes: int,
    ):
        self._session = session
        self._repo = DocumentRepository(session)
        self._audit = audit
        self._storage = storage
        self._max_upload_bytes = max_upload_bytes

    async def list_documents(
        self,
        user: SessionUser,
        *,
        agent_id: str | None = None,
        inspection_id: str | None = None,
        category: str | None = None,
    ) -> list[Document]:
        authorize(user, "document", "list")
        return await self._repo.search_documents(
            agent_id=scope_agent_id(user, agent_id),
            inspection_id=inspection_id,
            category=category,
        )

    async def get_document(self, document_id: str, user: SessionUser) -> Document:
        document = await self._repo.get_by_id(document_id)
        if not document:
            raise NotFoundError("Document", document_id)
        authorize(user, "document", "read", owner_agent_id=document.agent_id)
        return document

    async def get_document_url(self, document_id: str, user: SessionUser) -> tuple[str, Document]:
        document = await self.get_document(document_id, user)
        return self._storage.public_url(document.storage_path), document

    async def upload_document(
        self,
        user: SessionUser,
        *,
        agent_id: str,
        title: str,
        file_name: str,
        content_type: str | None,
        data: bytes,
        inspection_id: str | None = None,
        category: DocumentCategory = "Other",
    ) -> Document:
        authorize(user, "document", "create")
        if not agent_id or not title or not file_name:
            raise ValidationError("Agent ID, title, and file are required")
        validate_pdf_upload(file_name, content_type, data, self._max_upload_bytes)

        if not await AgentRepository(self._session).get_by_id(agent_id):
            raise ValidationError("Invalid agent ID")
        if inspection_id:
            inspection = await InspectionRepository(self._session).get_by_id(inspection_id)
            if not inspection or inspection.agent_id != agent_id:
                raise ValidationError("Invalid inspection ID for this agent")

        storage_path = await self._storage.save(file_name, agent_id, data)
        try:
            document = await self._repo.create(
                agent_id=agent_id,
                inspection_id=inspection_id or None,
                title=title,
                category=category,
                file_name=file_name,
                file_size=len(data),
                mime_type="application/pdf",
                storage_path=storage_path,
                uploaded_by=user.role.value,
            )
            await self._session.commit()
        except Exception as exc:
            await self._session.rollback()
            await self._storage.delete(storage_path)
            raise InternalError("Failed to save document") from exc

        await self._audit.record(
            "UPLOAD_DOC", "document", document.id,
            {
                "agentId": agent_id,
                "inspectionId": inspection_id or None,
                "title": title,
                "category": category,
                "fileName": file_name,
                "fileSize": len(data),
            },
        )
        return document

    async def delete_document(self, document_id: str, user: SessionUser) -> None:
        authorize(user, "document", "delete")
        document = await self._repo.get_by_id(document_id)
        if not document:
            raise NotFoundError("Document", document_id)

        if not await self._storage.delete(document.storage_path):
            logger.warning("Deleting document %s whose blob could not be removed", document_id)

        if not await self._repo.delete(document_id):
            raise InternalError("Failed to delete document")
        await self._session.commit()

        await self._audit.record(
            "DELETE_DOC", "document", document_id,
            {
                "agentId": document.agent_id,
                "title": document.title,
                "fileName": document.file_name,
            },
        )
