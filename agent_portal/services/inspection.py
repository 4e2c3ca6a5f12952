"""Inspection service."""


from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.authz import authorize, scope_agent_id
from agent_portal.core.exceptions import NotFoundError, ValidationError
from agent_portal.domain.inspection import Inspection
from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.inspection import InspectionRepository
from agent_portal.schemas.agent import AgentSummary
from agent_portal.schemas.auth import SessionUser
from agent_portal.schemas.inspection import InspectionCreate, InspectionOut, InspectionUpdate
from agent_portal.services.audit import AuditRecorder

class InspectionService:
    def __init__(self, session: AsyncSession, audit: AuditRecorder):
        self._session = session
        self._repo = InspectionRepository(session)
        self._agents = AgentRepository(session)
        self._audit = audit

    async def _with_agent(self, inspection: Inspection) -> InspectionOut:
        """Response model with the owning agent's contact summary embedded."""
        agent = await self._agents.get_by_id(inspection.agent_id)
        out = InspectionOut.model_validate(inspection)
        if agent:
            out.agent = AgentSummary.model_validate(agent)
        return out

    async def list_inspections(
        self,
        user: SessionUser,
        *,
        agent_id: str | None = None,
        status: str | None = None,
    ) -> list[InspectionOut]:
        authorize(user, "inspection", "list")
        items = await self._repo.search_inspections(
            agent_id=scope_agent_id(user, agent_id), status=status
        )
        return [await self._with_agent(i) for i in items]

    async def get_inspection(self, inspection_id: str, user: SessionUser) -> InspectionOut:
        inspection = await self._repo.get_by_id(inspection_id)
        if not inspection:
            raise NotFoundError("Inspection", inspection_id)
        authorize(user, "inspection", "read", owner_agent_id=inspection.agent_id)
        return await self._with_agent(inspection)

    async def create_inspection(self, data: InspectionCreate, user: SessionUser) -> Inspection:
        authorize(user, "inspection", "create")
        agent = await self._agents.get_by_id(data.agent_id)
        if not agent:
            raise ValidationError("Invalid agent ID")

        inspection = await self._repo.create(**data.model_dump())
        await self._session.commit()

        await self._audit.record(
            "CREATE_INSPECTION", "inspection", inspection.id,
            {
                "agentId": agent.id,
                "agentName": agent.full_name,
                "propertyAddress": inspection.property_address,
            },
        )
        return inspection

    async def update_inspection(
        self, inspection_id: str, data: InspectionUpdate, user: SessionUser
    ) -> Inspection:
        authorize(user, "inspection", "update")
        changes = data.model_dump(exclude_unset=True)
        updated = await self._repo.update(inspection_id, **changes)
        if not updated:
            raise NotFoundError("Inspection", inspection_id)
        await self._session.commit()

        await self._audit.record(
            "UPDATE_INSPECTION", "inspection", inspection_id,
            {"updatedFields": [to_camel(name) for name in changes]},
        )
        return updated
