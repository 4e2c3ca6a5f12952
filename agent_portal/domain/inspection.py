"""SQLAlchemy ORM model for property inspections."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agent_portal.db.base import Base
from agent_portal.domain.mixins import CreatedAtMixin, IdMixin

InspectionStatus = Literal["scheduled", "completed", "canceled"]


class Inspection(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "inspections"

    agent_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    inspection_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    property_address: Mapped[str] = mapped_column(String(500), nullable=False)
    # "scheduled" | "completed" | "canceled"
    status: Mapped[str] = mapped_column(String(20), default="scheduled", nullable=False, index=True)
    inspector_name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    agent: Mapped["Agent"] = relationship(back_populates="inspections", lazy="noload")
