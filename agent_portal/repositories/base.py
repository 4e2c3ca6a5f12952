"""Generic async repository: CRUD plus filtered, ordered search."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agent_portal.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class AppendOnlyRepository(Generic[ModelT]):
    """Read and insert only; rows are never changed once written.

    Every call is a single statement against the store; transaction boundaries
    belong to the caller.
    """

    model: type[ModelT]
    default_order_by: str = "created_at"

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        return select(self.model)

    def _apply_filters(self, q, filters: dict[str, Any] | None):
        """Apply simple equality filters, skipping ``None`` values."""
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)
        return q

    def _apply_order(self, q, order_by: str | None, order: str):
        col = getattr(self.model, order_by or self.default_order_by, None)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        return q

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def search(
        self,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        order: str = "desc",
        limit: int | None = None,
    ) -> list[ModelT]:
        """Return matching rows, newest first by default."""
        q = self._apply_filters(self._base_query(), filters)
        q = self._apply_order(q, order_by, order)
        if limit:
            q = q.limit(limit)
        items = (await self._session.execute(q)).scalars().all()
        return list(items)

    async def count(self, *conditions: Any) -> int:
        q = select(func.count()).select_from(self.model)
        for condition in conditions:
            q = q.where(condition)
        return (await self._session.execute(q)).scalar_one()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id
        await self._session.refresh(instance)
        return instance


class BaseRepository(AppendOnlyRepository[ModelT]):
    """Generic CRUD repository.

    Deletes are hard deletes and rely on the schema's foreign keys for
    cascading.
    """

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        """Overwrite only the given columns; returns ``None`` if the row is missing."""
        kwargs.pop("id", None)
        kwargs.pop("created_at", None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = datetime.now(timezone.utc)

        if kwargs:
            await self._session.execute(
                update(self.model)
                .where(self.model.id == entity_id)
                .values(**kwargs)
                .execution_options(synchronize_session=False)
            )
            await self._session.flush()

        instance = await self.get_by_id(entity_id)
        if instance is not None:
            await self._session.refresh(instance)
        return instance

    async def delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.flush()
        return result.rowcount > 0
