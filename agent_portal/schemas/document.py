"""Document Pydantic schemas."""


from datetime import datetime

from agent_portal.domain.document import DocumentCategory
from agent_portal.schemas.common import CamelModel

class DocumentOut(CamelModel):
    id: str
    agent_id: str
    inspection_id: str | None = None
    title: str
    category: DocumentCategory
    file_name: str
    file_size: int
    mime_type: str
    storage_path: str
    uploaded_by: str
    created_at: datetime

class DocumentUrlOut(CamelModel):
    url: str
    document: DocumentOut
