"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar, Type, Optional, List, Any
from sqlalchemy import delete, func, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from swipematch.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

_OPERATORS = {
    "eq": lambda field, value: field == value,
    "ne": lambda field, value: field != value,
    "lt": lambda field, value: field < value,
    "lte": lambda field, value: field <= value,
    "gt": lambda field, value: field > value,
    "gte": lambda field, value: field >= value,
    "in": lambda field, value: field.in_(value),
}


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing common CRUD operations for all models.

    Repositories never commit; the owning UnitOfWork decides when a
    write becomes durable.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    @property
    def _pk(self):
        """Primary key column of the model (single-column keys only)."""
        return inspect(self.model).primary_key[0]

    def _insert(self):
        """
        Return a dialect-specific INSERT construct for the model.

        The PostgreSQL and SQLite constructs both expose
        ``on_conflict_do_nothing`` / ``on_conflict_do_update``, which is
        the atomic upsert primitive the matching core relies on.
        """
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise NotImplementedError(f"Upsert not supported for dialect {dialect!r}")
        return insert(self.model)

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Field values for the new record

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Get a record by primary key, or None if not found."""
        result = await self.session.execute(
            select(self.model).where(self._pk == id)
        )
        return result.scalar_one_or_none()

    async def filter(self, **filters) -> List[ModelType]:
        """
        Filter records by field values.

        Supports comparison operators using double underscore syntax:
        ``field__lt``, ``field__lte``, ``field__gt``, ``field__gte``,
        ``field__ne``, ``field__in`` and plain ``field`` for equality.

        Examples:
            await repo.filter(actor_id="u1", direction="like")
            await repo.filter(status__in=["open", "investigating"])
        """
        query = self._apply_filters(select(self.model), filters)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def _apply_filters(self, query, filters: dict):
        """Apply ``field__op=value`` filters to a select, update or delete."""
        for filter_key, value in filters.items():
            if "__" in filter_key:
                field_name, operator = filter_key.rsplit("__", 1)
            else:
                field_name, operator = filter_key, "eq"

            if operator not in _OPERATORS:
                raise ValueError(f"Unknown filter operator: {operator}")

            field = getattr(self.model, field_name)
            query = query.where(_OPERATORS[operator](field, value))

        return query

    async def update(self, id: Any, **kwargs) -> Optional[ModelType]:
        """
        Update a record by primary key.

        Returns:
            Updated model instance or None if not found
        """
        await self.session.execute(
            update(self.model)
            .where(self._pk == id)
            .values(**kwargs)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return await self.get_by_id(id)

    async def delete(self, id: Any) -> bool:
        """
        Delete a record by primary key.

        Returns:
            True if deleted, False if not found
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self._pk == id)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return (result.rowcount or 0) > 0  # type: ignore

    async def delete_all(self, **filters) -> int:
        """
        Delete all records matching the given filters.

        Refuses to run without filters.

        Returns:
            Number of records deleted
        """
        if not filters:
            raise ValueError("delete_all requires at least one filter")

        query = self._apply_filters(delete(self.model), filters)
        result = await self.session.execute(
            query.execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount or 0  # type: ignore

    async def count(self, **filters) -> int:
        """Count records matching the given filters (same syntax as ``filter``)."""
        query = self._apply_filters(
            select(func.count()).select_from(self.model), filters
        )
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def exists(self, **filters) -> bool:
        """Check if any records exist matching the given filters."""
        query = self._apply_filters(select(self._pk), filters).limit(1)
        result = await self.session.execute(query)
        return result.first() is not None
