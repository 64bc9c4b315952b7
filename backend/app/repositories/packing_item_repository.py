"""
TripPlanner Backend: Packing Item Repository
==============================================

What:  Persistence for packing items, scoped to their owning trip.
Relations: the owning trip.
"""

import uuid
from typing import List, Sequence

from sqlalchemy import delete
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from app.models.packing_item import PackingItem
from app.repositories.base import SQLAlchemyRepository


class PackingItemRepository(SQLAlchemyRepository[PackingItem]):
    model = PackingItem

    def relation_options(self) -> Sequence[LoaderOption]:
        return (selectinload(PackingItem.trip),)

    async def list_by_trip(
        self, trip_id: uuid.UUID, with_relations: bool = False
    ) -> List[PackingItem]:
        stmt = (
            self.select_stmt(with_relations)
            .where(PackingItem.trip_id == trip_id)
            .order_by(PackingItem.created_at)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def delete_all_for_trip(self, trip_id: uuid.UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(PackingItem).where(PackingItem.trip_id == trip_id))
            await session.commit()
