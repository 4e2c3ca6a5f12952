"""SQLAlchemy ORM model for uploaded PDF documents.

The binary payload lives in blob storage; the row keeps only its metadata and
the opaque ``storage_path`` handed back by the storage service.
"""

from __future__ import annotations

from typing import Literal, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agent_portal.db.base import Base
from agent_portal.domain.mixins import CreatedAtMixin, IdMixin

DocumentCategory = Literal["W9", "Agreement", "Insurance", "InspectionReport", "Other"]


class Document(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "documents"

    agent_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    inspection_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("inspections.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(50), default="Other", nullable=False, index=True)

    # Blob storage reference
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    storage_path: Mapped[str] = mapped_column(String(500), nullable=False)
    uploaded_by: Mapped[str] = mapped_column(String(50), nullable=False)

    agent: Mapped["Agent"] = relationship(back_populates="documents", lazy="noload")
