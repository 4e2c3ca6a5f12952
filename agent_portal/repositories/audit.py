"""Audit log repository: append and read only."""

from __future__ import annotations

from agent_portal.domain.audit import AuditLog
from agent_portal.repositories.base import AppendOnlyRepository


class AuditLogRepository(AppendOnlyRepository[AuditLog]):
    model = AuditLog

    async def find_all(self, limit: int = 100) -> list[AuditLog]:
        return await self.search(limit=limit)

    async def search_logs(
        self,
        *,
        entity_type: str | None = None,
        action: str | None = None,
        actions: tuple[str, ...] | None = None,
        limit: int | None = 50,
    ) -> list[AuditLog]:
        q = self._apply_filters(
            self._base_query(), {"entity_type": entity_type, "action": action}
        )
        if actions:
            q = q.where(AuditLog.action.in_(actions))
        q = self._apply_order(q, "created_at", "desc")
        if limit:
            q = q.limit(limit)
        return list((await self._session.execute(q)).scalars().all())
