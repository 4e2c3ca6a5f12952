"""Domain package: all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  agent.py       Real-estate agents (own inspections and documents)
  inspection.py  Property inspections, one agent each
  document.py    Uploaded PDF metadata (payload lives in blob storage)
  audit.py       Immutable audit trail (never updated or deleted)
  mixins.py      Shared IdMixin, CreatedAtMixin, TimestampMixin
"""

from agent_portal.domain.agent import Agent
from agent_portal.domain.audit import AuditLog
from agent_portal.domain.document import Document
from agent_portal.domain.inspection import Inspection

__all__ = [
    "Agent",
    "AuditLog",
    "Document",
    "Inspection",
]
