"""
TripPlanner Backend: Repository Base Class
============================================

What:  Shared get/list/create/update/delete for single-table entities.
Why:   Trips, destinations and packing items differ only in their eager
       loading options and in which columns need normalization.
How:   Each repository receives the async_sessionmaker once and opens a new
       session per call. Every call commits before returning, so no
       transaction ever spans two repository calls.

Relation loading:
    with_relations=False returns bare rows. Relationship attributes are
    declared lazy="raise", so touching them on a bare row is a programming
    error rather than a hidden query.
"""

import logging
import uuid
from typing import Any, ClassVar, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.interfaces import LoaderOption

from app.database import Base
from app.models.common import utcnow
from app.utils.date_utils import to_calendar_date
from app.utils.serialized_list import normalize_serialized_list

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    model: ClassVar[Type[Any]]
    # Columns holding a JSON-encoded list of strings
    serialized_list_fields: ClassVar[Tuple[str, ...]] = ()
    # DATE columns; incoming values are reduced to the calendar day
    date_fields: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ── Hooks ─────────────────────────────────────────────────────────────
    def relation_options(self) -> Sequence[LoaderOption]:
        return ()

    def prepare_values(self, data: Mapping[str, Any]) -> dict:
        values = dict(data)
        for field in self.serialized_list_fields:
            if field in values:
                values[field] = normalize_serialized_list(values[field])
        for field in self.date_fields:
            if field in values:
                values[field] = to_calendar_date(values[field])
        return values

    def select_stmt(self, with_relations: bool = False) -> Select:
        stmt = select(self.model)
        if with_relations:
            stmt = stmt.options(*self.relation_options())
        return stmt

    # ── CRUD ──────────────────────────────────────────────────────────────
    async def list_all(self, with_relations: bool = False) -> List[ModelT]:
        async with self._session_factory() as session:
            result = await session.execute(
                self.select_stmt(with_relations).order_by(self.model.created_at)
            )
            return list(result.scalars().all())

    async def get_by_id(
        self, entity_id: uuid.UUID, with_relations: bool = False
    ) -> Optional[ModelT]:
        async with self._session_factory() as session:
            result = await session.execute(
                self.select_stmt(with_relations).where(self.model.id == entity_id)
            )
            return result.scalar_one_or_none()

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        async with self._session_factory() as session:
            entity = self.model(**self.prepare_values(data))
            session.add(entity)
            await session.commit()
            logger.debug("Created %s %s", self.model.__name__, entity.id)
            return entity

    async def update(self, entity_id: uuid.UUID, data: Mapping[str, Any]) -> Optional[ModelT]:
        """
        Apply a partial update. Keys absent from data keep their stored value;
        updated_at is refreshed on every call. Returns None if no row matches.
        """
        async with self._session_factory() as session:
            entity = await session.get(self.model, entity_id)
            if entity is None:
                return None
            for key, value in self.prepare_values(data).items():
                setattr(entity, key, value)
            entity.updated_at = utcnow()
            await session.commit()
            return entity

    async def delete(self, entity_id: uuid.UUID) -> None:
        # Dependent rows go through ON DELETE CASCADE; a missing id is a no-op
        async with self._session_factory() as session:
            await session.execute(delete(self.model).where(self.model.id == entity_id))
            await session.commit()
