"""Audit log and dashboard Pydantic schemas."""


from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, Field

from agent_portal.schemas.common import CamelModel

class AuditLogOut(CamelModel):
    id: str
    actor_role: str
    actor_id: str | None = None
    action: str
    entity_type: str
    entity_id: str | None = None
    # ORM attribute is ``details`` (column "metadata")
    metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("details", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime

class DashboardStats(CamelModel):
    total_agents: int
    active_agents: int
    inspections_this_month: int
    documents_uploaded: int

class ActivityItem(CamelModel):
    id: str
    type: Literal["upload", "inspection", "agent"]
    description: str
    timestamp: datetime
    actor_role: str
