"""
TripPlanner Backend: Packing Item Service
===========================================

What:  Rules for packing items. Every item belongs to an existing trip, so
       creating an item or moving it to another trip first checks that the
       trip exists (404 "Trip not found").
"""

import logging
from typing import List, Union

from app.exceptions import NotFoundError
from app.models.packing_item import PackingItem
from app.repositories.packing_item_repository import PackingItemRepository
from app.repositories.trip_repository import TripRepository
from app.schemas.packing_item import PackingItemCreate, PackingItemResponse, PackingItemUpdate
from app.schemas.trip import PackingItemDetailResponse
from app.services.common import database_errors, parse_uuid

logger = logging.getLogger(__name__)

PackingItemOut = Union[PackingItemResponse, PackingItemDetailResponse]


def to_packing_item_response(item: PackingItem, with_relations: bool = False) -> PackingItemOut:
    if with_relations:
        return PackingItemDetailResponse.model_validate(item)
    return PackingItemResponse.model_validate(item)


class PackingItemService:
    def __init__(self, packing_items: PackingItemRepository, trips: TripRepository):
        self._items = packing_items
        self._trips = trips

    async def _require_trip(self, trip_id, message: str) -> None:
        with database_errors(message, trip_id=str(trip_id)):
            trip = await self._trips.get_by_id(trip_id)
        if trip is None:
            raise NotFoundError(resource="trip", resource_id=str(trip_id))

    async def _require_item(self, item_id, message: str) -> PackingItem:
        with database_errors(message, packing_item_id=str(item_id)):
            item = await self._items.get_by_id(item_id)
        if item is None:
            raise NotFoundError(resource="packing item", resource_id=str(item_id))
        return item

    async def list_items(self, with_relations: bool = False) -> List[PackingItemOut]:
        with database_errors("Error retrieving packing items"):
            items = await self._items.list_all(with_relations)
        return [to_packing_item_response(i, with_relations) for i in items]

    async def get_item(self, item_id: str, with_relations: bool = False) -> PackingItemOut:
        iid = parse_uuid(item_id, "packing item")
        with database_errors("Error retrieving packing item", packing_item_id=item_id):
            item = await self._items.get_by_id(iid, with_relations)
        if item is None:
            raise NotFoundError(resource="packing item", resource_id=item_id)
        return to_packing_item_response(item, with_relations)

    async def list_items_for_trip(
        self, trip_id: str, with_relations: bool = False
    ) -> List[PackingItemOut]:
        tid = parse_uuid(trip_id, "trip")
        await self._require_trip(tid, "Error retrieving packing items")
        with database_errors("Error retrieving packing items", trip_id=trip_id):
            items = await self._items.list_by_trip(tid, with_relations)
        return [to_packing_item_response(i, with_relations) for i in items]

    async def create_item(self, payload: PackingItemCreate) -> PackingItemResponse:
        await self._require_trip(payload.trip_id, "Error creating packing item")
        with database_errors("Error creating packing item", trip_id=str(payload.trip_id)):
            item = await self._items.create(payload.model_dump())
        logger.info("Packing item %s added to trip %s", item.id, item.trip_id)
        return PackingItemResponse.model_validate(item)

    async def update_item(self, item_id: str, payload: PackingItemUpdate) -> PackingItemResponse:
        iid = parse_uuid(item_id, "packing item")
        await self._require_item(iid, "Error updating packing item")
        data = payload.model_dump(exclude_unset=True)
        if "trip_id" in data:
            await self._require_trip(data["trip_id"], "Error updating packing item")

        with database_errors("Error updating packing item", packing_item_id=item_id):
            item = await self._items.update(iid, data)
        if item is None:
            raise NotFoundError(resource="packing item", resource_id=item_id)
        return PackingItemResponse.model_validate(item)

    async def delete_item(self, item_id: str) -> None:
        iid = parse_uuid(item_id, "packing item")
        await self._require_item(iid, "Error deleting packing item")
        with database_errors("Error deleting packing item", packing_item_id=item_id):
            await self._items.delete(iid)

    async def delete_items_for_trip(self, trip_id: str) -> None:
        tid = parse_uuid(trip_id, "trip")
        await self._require_trip(tid, "Error deleting packing items")
        with database_errors("Error deleting packing items", trip_id=trip_id):
            await self._items.delete_all_for_trip(tid)
        logger.info("All packing items of trip %s deleted", trip_id)
