from sqlalchemy import select

from agent_portal.domain.document import Document
from agent_portal.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    model = Document

    async def search_documents(
        self,
        *,
        agent_id: str | None = None,
        inspection_id: str | None = None,
        category: str | None = None,
    ) -> list[Document]:
        return await self.search(
            filters={
                "agent_id": agent_id,
                "inspection_id": inspection_id,
                "category": category,
            }
        )

    async def storage_paths_for_agent(self, agent_id: str) -> list[str]:
        result = await self._session.execute(
            select(Document.storage_path).where(Document.agent_id == agent_id)
        )
        return list(result.scalars().all())
