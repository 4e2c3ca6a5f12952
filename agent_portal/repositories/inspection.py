from agent_portal.domain.inspection import Inspection
from agent_portal.repositories.base import BaseRepository


class InspectionRepository(BaseRepository[Inspection]):
    model = Inspection
    # Inspections list by the date of the visit, not the row creation time
    default_order_by = "inspection_date"

    async def search_inspections(
        self, *, agent_id: str | None = None, status: str | None = None
    ) -> list[Inspection]:
        return await self.search(filters={"agent_id": agent_id, "status": status})
