"""Generic persistence service for entities with a server-assigned integer id.

Provides:
- EntitySchema: base pydantic schema carrying the optional ``id``
- EntityService: the capability set the REST adapter depends on
- SqlEntityService: async SQLAlchemy implementation, bound per entity by
  subclassing with ``model`` and ``schema`` class attributes
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, ClassVar, Generic, Protocol, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.elephant.core.errors import InvalidSortError
from src.elephant.core.pagination import Direction, Page, Pageable

logger = structlog.get_logger(__name__)

# Ids are stored in BIGINT columns
MAX_ENTITY_ID = 2**63 - 1


class EntitySchema(BaseModel):
    """Base for entity DTOs: an optional id assigned on first save."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, ge=1, le=MAX_ENTITY_ID)


SchemaT = TypeVar("SchemaT", bound=EntitySchema)


class EntityService(Protocol[SchemaT]):
    """Persistence operations used by the CRUD resource adapter."""

    async def save(self, entity: SchemaT) -> SchemaT: ...

    async def find_all(self, pageable: Pageable) -> Page[SchemaT]: ...

    async def find_one(self, entity_id: int) -> SchemaT | None: ...

    async def delete(self, entity_id: int) -> None: ...


class SqlEntityService(Generic[SchemaT]):
    """Async CRUD for one entity table.

    Subclasses set ``model`` (SQLAlchemy mapped class with an ``id`` column)
    and ``schema`` (EntitySchema subclass whose fields mirror the columns).

    Args:
        session_factory: Async callable that yields AsyncSession instances.
    """

    model: ClassVar[type[Any]]
    schema: ClassVar[type[EntitySchema]]

    def __init__(
        self, session_factory: Callable[..., AsyncGenerator[AsyncSession, None]]
    ) -> None:
        self._session_factory = session_factory

    @property
    def entity_name(self) -> str:
        return self.model.__tablename__

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        sessions = self._session_factory()
        try:
            yield await anext(sessions)
        finally:
            await sessions.aclose()

    def _to_schema(self, model: Any) -> SchemaT:
        return self.schema.model_validate(model)  # type: ignore[return-value]

    def _order_by(self, pageable: Pageable) -> list[Any]:
        columns = self.model.__table__.columns
        clauses = []
        for order in pageable.sort:
            column = columns.get(order.prop)
            if column is None:
                raise InvalidSortError(self.entity_name, order.prop)
            clauses.append(column.desc() if order.direction == Direction.DESC else column.asc())
        # Stable paging needs a total order
        if not any(order.prop == "id" for order in pageable.sort):
            clauses.append(columns["id"].asc())
        return clauses

    async def save(self, entity: SchemaT) -> SchemaT:
        """Insert a new entity or overwrite the stored one with the same id.

        An entity without an id, or whose id has no stored row, is inserted
        and gets its id from the database. Explicit ids are never written, so
        the id sequence stays ahead of every stored row.
        """
        data = entity.model_dump(exclude={"id"})
        async with self._session() as session:
            model = None
            if entity.id is not None:
                model = await session.get(self.model, entity.id)
            if model is None:
                model = self.model(**data)
                session.add(model)
            else:
                for key, value in data.items():
                    setattr(model, key, value)
            await session.commit()
            await session.refresh(model)
            logger.debug(
                "service.saved",
                entity=self.entity_name,
                entity_id=model.id,
                requested_id=entity.id,
            )
            return self._to_schema(model)

    async def find_all(self, pageable: Pageable) -> Page[SchemaT]:
        """Return one page of entities plus the total row count."""
        order_by = self._order_by(pageable)
        async with self._session() as session:
            total = await session.scalar(select(func.count()).select_from(self.model))
            stmt = (
                select(self.model)
                .order_by(*order_by)
                .offset(pageable.offset)
                .limit(pageable.size)
            )
            result = await session.execute(stmt)
            content = [self._to_schema(m) for m in result.scalars().all()]
        return Page(
            content=content,
            number=pageable.page,
            size=pageable.size,
            total_elements=total or 0,
        )

    async def find_one(self, entity_id: int) -> SchemaT | None:
        """Get an entity by id, None if there is no such row."""
        async with self._session() as session:
            model = await session.get(self.model, entity_id)
            if model is None:
                return None
            return self._to_schema(model)

    async def delete(self, entity_id: int) -> None:
        """Delete an entity by id. Deleting a missing id is a no-op."""
        async with self._session() as session:
            result = await session.execute(delete(self.model).where(self.model.id == entity_id))
            await session.commit()
            logger.debug(
                "service.deleted",
                entity=self.entity_name,
                entity_id=entity_id,
                rows=result.rowcount,
            )
