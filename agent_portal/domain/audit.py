"""SQLAlchemy ORM model for the audit trail."""

from __future__ import annotations

from typing import Any, Literal, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from agent_portal.db.base import Base
from agent_portal.domain.mixins import CreatedAtMixin, IdMixin

AuditAction = Literal[
    "CREATE_AGENT",
    "UPDATE_AGENT",
    "DELETE_AGENT",
    "CREATE_INSPECTION",
    "UPDATE_INSPECTION",
    "UPLOAD_DOC",
    "DELETE_DOC",
    "LOGIN",
    "LOGOUT",
]
EntityType = Literal["agent", "inspection", "document", "session"]


class AuditLog(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "audit_logs"

    # Who
    actor_role: Mapped[str] = mapped_column(String(20), nullable=False)
    actor_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # What
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    # No FK: entries must outlive the entity they describe
    entity_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # "metadata" is reserved on declarative classes
    details: Mapped[Optional[Any]] = mapped_column("metadata", JSON, nullable=True)

    # No updated_at: audit rows are immutable
