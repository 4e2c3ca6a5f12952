"""Audit trail: best-effort recorder plus the admin read path.

The recorder runs AFTER the primary mutation has committed and writes in its
own session. A crash between the two leaves the mutation without an audit
entry; a failed audit write is logged and swallowed, never retried, and never
surfaces to the caller.
"""


import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.db.base import Database
from agent_portal.domain.audit import AuditAction, AuditLog, EntityType
from agent_portal.repositories.audit import AuditLogRepository
from agent_portal.schemas.auth import Role, SessionUser

logger = logging.getLogger(__name__)

# Audit actions surfaced on the admin dashboard activity feed
ACTIVITY_ACTIONS: tuple[AuditAction, ...] = ("UPLOAD_DOC", "CREATE_INSPECTION", "CREATE_AGENT")


class AuditRecorder:
    def __init__(self, database: Database, actor: SessionUser | None):
        self._database = database
        self._actor = actor

    async def record(
        self,
        action: AuditAction,
        entity_type: EntityType,
        entity_id: str | None = None,
        metadata: dict[str, Any] | None = None,
        *,
        actor: SessionUser | None = None,
    ) -> None:
        """Append one audit entry. Never raises."""
        actor = actor or self._actor
        # No session: attributed to admin with no actor id.
        # TODO: decide whether session-less writes should be attributed to a "system" role.
        actor_role = actor.role.value if actor else Role.ADMIN.value
        actor_id = actor.agent_id if actor else None
        try:
            async with self._database.session_factory() as session:
                await AuditLogRepository(session).create(
                    actor_role=actor_role,
                    actor_id=actor_id,
                    action=action,
                    entity_type=entity_type,
                    entity_id=entity_id,
                    details=metadata or {},
                )
                await session.commit()
        except Exception:
            logger.exception(
                "Failed to create audit log %s %s/%s", action, entity_type, entity_id
            )


class AuditService:
    """Read-only access to the audit trail."""

    def __init__(self, session: AsyncSession):
        self._repo = AuditLogRepository(session)

    async def search(
        self,
        *,
        entity_type: EntityType | None = None,
        action: AuditAction | None = None,
        limit: int = 50,
    ) -> list[AuditLog]:
        return await self._repo.search_logs(
            entity_type=entity_type, action=action, limit=limit
        )

    async def find_all(self, limit: int = 100) -> list[AuditLog]:
        return await self._repo.find_all(limit=limit)

    async def recent_activity(self, limit: int = 10) -> list[dict[str, Any]]:
        """Latest creations, rendered for the dashboard feed."""
        logs = await self._repo.search_logs(actions=ACTIVITY_ACTIONS, limit=limit)
        return [_activity_item(log) for log in logs]


def _activity_item(log: AuditLog) -> dict[str, Any]:
    meta = log.details or {}
    if log.action == "UPLOAD_DOC":
        kind = "upload"
        description = f'Document "{meta.get("title") or "Unknown"}" uploaded'
    elif log.action == "CREATE_INSPECTION":
        kind = "inspection"
        description = f"Inspection created for {meta.get('propertyAddress') or 'Unknown address'}"
    else:
        kind = "agent"
        description = f'Agent "{meta.get("agentName") or "Unknown"}" created'
    return {
        "id": log.id,
        "type": kind,
        "description": description,
        "timestamp": log.created_at,
        "actor_role": log.actor_role,
    }
