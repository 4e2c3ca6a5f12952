"""Agent service: authorize, mutate, commit, then audit.

Rule: No FastAPI here. Routers hand in the session user; policy decisions go
through :mod:`agent_portal.core.authz`.
"""


import logging

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.core.authz import authorize
from agent_portal.core.exceptions import ConflictError, NotFoundError
from agent_portal.domain.agent import Agent
from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.document import DocumentRepository
from agent_portal.schemas.agent import AgentCreate, AgentUpdate
from agent_portal.schemas.auth import Role, SessionUser
from agent_portal.services.audit import AuditRecorder
from agent_portal.services.storage import LocalBlobStorage

logger = logging.getLogger(__name__)

class AgentService:
    def __init__(
        self,
        session: AsyncSession,
        audit: AuditRecorder,
        storage: LocalBlobStorage | None = None,
    ):
        self._session = session
        self._repo = AgentRepository(session)
        self._audit = audit
        self._storage = storage

    async def list_agents(
        self, user: SessionUser, *, search: str | None = None, status: str | None = None
    ) -> list[Agent]:
        authorize(user, "agent", "list")
        # Agents only ever see their own record
        if user.role is Role.AGENT:
            agent = await self._repo.get_by_id(user.agent_id)
            return [agent] if agent else []
        return await self._repo.search_agents(search=search, status=status)

    async def get_agent(self, agent_id: str, user: SessionUser) -> Agent:
        authorize(user, "agent", "read", owner_agent_id=agent_id)
        agent = await self._repo.get_by_id(agent_id)
        if not agent:
            raise NotFoundError("Agent", agent_id)
        return agent

    async def create_agent(self, data: AgentCreate, user: SessionUser) -> Agent:
        authorize(user, "agent", "create")
        if await self._repo.get_by_email(data.email):
            raise ConflictError(f"An agent with email '{data.email}' already exists")
        try:
            agent = await self._repo.create(**data.model_dump())
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ConflictError(f"An agent with email '{data.email}' already exists") from exc

        await self._audit.record(
            "CREATE_AGENT", "agent", agent.id,
            {"agentName": agent.full_name, "email": agent.email},
        )
        return agent

    async def update_agent(self, agent_id: str, data: AgentUpdate, user: SessionUser) -> Agent:
        authorize(user, "agent", "update")
        changes = data.model_dump(exclude_unset=True)
        if "email" in changes:
            existing = await self._repo.get_by_email(changes["email"])
            if existing and existing.id != agent_id:
                raise ConflictError(f"An agent with email '{changes['email']}' already exists")

        try:
            updated = await self._repo.update(agent_id, **changes)
            if not updated:
                raise NotFoundError("Agent", agent_id)
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ConflictError(
                f"An agent with email '{changes['email']}' already exists"
            ) from exc

        await self._audit.record(
            "UPDATE_AGENT", "agent", agent_id,
            {"updatedFields": [to_camel(name) for name in changes]},
        )
        return updated

    async def delete_agent(self, agent_id: str, user: SessionUser) -> None:
        """Delete the agent; inspections and documents cascade in the store."""
        authorize(user, "agent", "delete")
        agent = await self._repo.get_by_id(agent_id)
        if not agent:
            raise NotFoundError("Agent", agent_id)

        blob_paths = await DocumentRepository(self._session).storage_paths_for_agent(agent_id)
        deleted = await self._repo.delete(agent_id)
        if not deleted:
            raise NotFoundError("Agent", agent_id)
        await self._session.commit()
        logger.info("Deleted agent %s with %d stored document(s)", agent_id, len(blob_paths))

        if self._storage is not None:
            for path in blob_paths:
                await self._storage.delete(path)

        await self._audit.record(
            "DELETE_AGENT", "agent", agent_id, {"agentName": agent.full_name}
        )
