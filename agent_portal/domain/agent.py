"""SQLAlchemy ORM model for real-estate agents.

Agents own inspections and documents; deleting an agent cascades to both at
the database level (``ON DELETE CASCADE``).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agent_portal.db.base import Base
from agent_portal.domain.mixins import IdMixin, TimestampMixin

AgentStatus = Literal["active", "inactive"]


class Agent(Base, IdMixin, TimestampMixin):
    __tablename__ = "agents"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    brokerage_name: Mapped[str] = mapped_column(String(255), nullable=False)
    license_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # "active" | "inactive"
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False, index=True)

    inspections: Mapped[List["Inspection"]] = relationship(
        back_populates="agent", lazy="noload", passive_deletes=True
    )
    documents: Mapped[List["Document"]] = relationship(
        back_populates="agent", lazy="noload", passive_deletes=True
    )
