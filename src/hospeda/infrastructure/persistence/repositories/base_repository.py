"""Generic repository for managed entity tables.

Provides the data-access operations the CRUD services rely on: lookups,
filtered and paginated listing, counting, creation, partial updates, soft
delete, restore and hard delete. Storage errors propagate unchanged; the
service boundary turns them into INTERNAL_ERROR results.

Filters are plain dictionaries. A key is a column name, optionally followed
by an operator suffix:

- ``name``: equality (a list or tuple becomes ``IN``)
- ``name__contains``: case-insensitive substring match
- ``price__gte`` / ``price__lte``: inclusive bounds
- ``ends_at__gt`` / ``starts_at__lt``: exclusive bounds

``None`` values are ignored so optional search params can be passed through.
"""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hospeda.domain.entities.pagination import PaginationParams
from hospeda.infrastructure.persistence.database import Base

ModelT = TypeVar("ModelT", bound=Base)

_OPERATORS = ("contains", "gte", "lte", "gt", "lt", "ne")


class SqlAlchemyRepository(Generic[ModelT]):
    """Repository for one model class.

    Args:
        session: SQLAlchemy async session.
        model: Mapped model class handled by this repository.
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    @property
    def _soft_deletable(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _column(self, name: str) -> Any:
        column = getattr(self.model, name, None)
        if column is None or not hasattr(column, "property"):
            raise ValueError(f"Unknown filter field '{name}' for {self.model.__tablename__}")
        return column

    def _apply_filters(self, query: Select, filters: dict[str, Any] | None) -> Select:
        for key, value in (filters or {}).items():
            if value is None:
                continue
            name, _, op = key.partition("__")
            if op and op not in _OPERATORS:
                raise ValueError(f"Unknown filter operator '{op}' in '{key}'")
            column = self._column(name)
            if op == "contains":
                query = query.where(column.ilike(f"%{value}%"))
            elif op == "gte":
                query = query.where(column >= value)
            elif op == "lte":
                query = query.where(column <= value)
            elif op == "gt":
                query = query.where(column > value)
            elif op == "lt":
                query = query.where(column < value)
            elif op == "ne":
                query = query.where(column != value)
            elif isinstance(value, (list, tuple, set, frozenset)):
                query = query.where(column.in_(list(value)))
            else:
                query = query.where(column == value)
        return query

    def _base_query(self, filters: dict[str, Any] | None, include_deleted: bool) -> Select:
        query = select(self.model)
        if self._soft_deletable and not include_deleted:
            query = query.where(self.model.deleted_at.is_(None))
        return self._apply_filters(query, filters)

    async def find_by_id(self, entity_id: str, include_deleted: bool = True) -> ModelT | None:
        """Get a record by ID.

        Args:
            entity_id: The record ID.
            include_deleted: Also return soft-deleted records.

        Returns:
            The record if found, None otherwise.
        """
        result = await self.session.execute(
            self._base_query({"id": entity_id}, include_deleted)
        )
        return result.scalar_one_or_none()

    async def find_one(
        self,
        filters: dict[str, Any],
        include_deleted: bool = False,
    ) -> ModelT | None:
        """Get the first record matching the filters."""
        result = await self.session.execute(
            self._base_query(filters, include_deleted).limit(1)
        )
        return result.scalars().first()

    async def exists(self, filters: dict[str, Any], include_deleted: bool = True) -> bool:
        """Check whether any record matches the filters."""
        query = self._base_query(filters, include_deleted).with_only_columns(self.model.id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def find_all(
        self,
        filters: dict[str, Any] | None = None,
        pagination: PaginationParams | None = None,
        include_deleted: bool = False,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> tuple[list[ModelT], int]:
        """List records matching the filters.

        Args:
            filters: Filter dictionary (see module docstring).
            pagination: Page to return. None returns every match.
            include_deleted: Also return soft-deleted records.
            order_by: Column to sort by.
            descending: Sort direction.

        Returns:
            Tuple of (records, total matching count).
        """
        query = self._base_query(filters, include_deleted)

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.session.execute(count_query)
        total = total_result.scalar_one()

        sort_column = self._column(order_by)
        query = query.order_by(sort_column.desc() if descending else sort_column.asc())

        if pagination is not None:
            query = query.offset(pagination.offset).limit(pagination.page_size)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def count(
        self,
        filters: dict[str, Any] | None = None,
        include_deleted: bool = False,
    ) -> int:
        """Count records matching the filters."""
        query = self._base_query(filters, include_deleted)
        result = await self.session.execute(
            select(func.count()).select_from(query.subquery())
        )
        return result.scalar_one()

    async def create(self, data: dict[str, Any]) -> ModelT:
        """Insert a new record.

        Args:
            data: Column values.

        Returns:
            The created record, refreshed with its defaults.
        """
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity_id: str, data: dict[str, Any]) -> ModelT | None:
        """Apply a partial update.

        Args:
            entity_id: The record ID.
            data: Columns to change.

        Returns:
            The updated record, or None if it does not exist.
        """
        entity = await self.find_by_id(entity_id)
        if entity is None:
            return None
        for key, value in data.items():
            self._column(key)
            setattr(entity, key, value)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def soft_delete(self, entity_id: str, actor_id: str | None) -> int:
        """Mark a live record as deleted.

        Returns:
            Number of rows affected (0 if missing or already deleted).
        """
        now = datetime.now(timezone.utc)
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == entity_id, self.model.deleted_at.is_(None))
            .values(deleted_at=now, deleted_by_id=actor_id, updated_at=now, updated_by_id=actor_id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount

    async def restore(self, entity_id: str, actor_id: str | None) -> int:
        """Clear the deletion stamp of a soft-deleted record.

        Returns:
            Number of rows affected (0 if missing or not deleted).
        """
        now = datetime.now(timezone.utc)
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == entity_id, self.model.deleted_at.is_not(None))
            .values(deleted_at=None, deleted_by_id=None, updated_at=now, updated_by_id=actor_id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount

    async def hard_delete(self, entity_id: str) -> int:
        """Permanently remove a record.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount
