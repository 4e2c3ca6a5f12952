"""Dashboard aggregates for the admin home page."""


from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.authz import authorize
from agent_portal.domain.agent import Agent
from agent_portal.domain.inspection import Inspection
from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.document import DocumentRepository
from agent_portal.repositories.inspection import InspectionRepository
from agent_portal.schemas.auth import SessionUser
from agent_portal.services.audit import AuditService

def _start_of_month(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

class DashboardService:
    def __init__(self, session: AsyncSession):
        self._agents = AgentRepository(session)
        self._inspections = InspectionRepository(session)
        self._documents = DocumentRepository(session)
        self._audit = AuditService(session)

    async def stats(self, user: SessionUser) -> dict[str, int]:
        authorize(user, "dashboard", "read")
        return {
            "total_agents": await self._agents.count(),
            "active_agents": await self._agents.count(Agent.status == "active"),
            # Inspections booked (created) this calendar month
            "inspections_this_month": await self._inspections.count(
                Inspection.created_at >= _start_of_month()
            ),
            "documents_uploaded": await self._documents.count(),
        }

    async def activity(self, user: SessionUser, limit: int = 10) -> list[dict]:
        authorize(user, "dashboard", "read")
        return await self._audit.recent_activity(limit=limit)
