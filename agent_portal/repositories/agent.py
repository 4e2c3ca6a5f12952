"""Agent repository."""

from __future__ import annotations

from sqlalchemy import func, or_

from agent_portal.domain.agent import Agent
from agent_portal.repositories.base import BaseRepository


class AgentRepository(BaseRepository[Agent]):
    model = Agent

    async def get_by_email(self, email: str) -> Agent | None:
        """Case-insensitive lookup, used by agent login."""
        result = await self._session.execute(
            self._base_query().where(func.lower(Agent.email) == email.strip().lower())
        )
        return result.scalars().first()

    async def search_agents(
        self, *, search: str | None = None, status: str | None = None
    ) -> list[Agent]:
        q = self._apply_filters(self._base_query(), {"status": status})
        if search:
            q = q.where(
                or_(
                    Agent.full_name.icontains(search, autoescape=True),
                    Agent.email.icontains(search, autoescape=True),
                    Agent.brokerage_name.icontains(search, autoescape=True),
                )
            )
        q = self._apply_order(q, "created_at", "desc")
        return list((await self._session.execute(q)).scalars().all())
