"""
TripPlanner Backend: Destination Service
==========================================

What:  CRUD rules for destinations and the list of trips visiting one.
Who:   Called by the destination route handlers.
"""

import logging
from typing import List, Union

from app.exceptions import NotFoundError
from app.models.destination import Destination
from app.repositories.destination_repository import DestinationRepository
from app.repositories.trip_to_destination_repository import TripToDestinationRepository
from app.schemas.destination import DestinationCreate, DestinationResponse, DestinationUpdate
from app.schemas.trip import DestinationDetailResponse, TripResponse
from app.services.common import database_errors, parse_uuid

logger = logging.getLogger(__name__)

DestinationOut = Union[DestinationResponse, DestinationDetailResponse]


def to_destination_response(destination: Destination, with_relations: bool = False) -> DestinationOut:
    if with_relations:
        return DestinationDetailResponse.model_validate(destination)
    return DestinationResponse.model_validate(destination)


class DestinationService:
    def __init__(
        self,
        destinations: DestinationRepository,
        trip_destinations: TripToDestinationRepository,
    ):
        self._destinations = destinations
        self._trip_destinations = trip_destinations

    async def _require_destination(self, destination_id, message: str) -> Destination:
        with database_errors(message, destination_id=str(destination_id)):
            destination = await self._destinations.get_by_id(destination_id)
        if destination is None:
            raise NotFoundError(resource="destination", resource_id=str(destination_id))
        return destination

    async def list_destinations(self, with_relations: bool = False) -> List[DestinationOut]:
        with database_errors("Error retrieving destinations"):
            destinations = await self._destinations.list_all(with_relations)
        return [to_destination_response(d, with_relations) for d in destinations]

    async def get_destination(self, destination_id: str, with_relations: bool = False) -> DestinationOut:
        did = parse_uuid(destination_id, "destination")
        with database_errors("Error retrieving destination", destination_id=destination_id):
            destination = await self._destinations.get_by_id(did, with_relations)
        if destination is None:
            raise NotFoundError(resource="destination", resource_id=destination_id)
        return to_destination_response(destination, with_relations)

    async def create_destination(self, payload: DestinationCreate) -> DestinationResponse:
        with database_errors("Error creating destination"):
            destination = await self._destinations.create(payload.model_dump())
        logger.info("Destination created: %s", destination.id)
        return DestinationResponse.model_validate(destination)

    async def update_destination(
        self, destination_id: str, payload: DestinationUpdate
    ) -> DestinationResponse:
        did = parse_uuid(destination_id, "destination")
        await self._require_destination(did, "Error updating destination")
        with database_errors("Error updating destination", destination_id=destination_id):
            destination = await self._destinations.update(did, payload.model_dump(exclude_unset=True))
        if destination is None:
            raise NotFoundError(resource="destination", resource_id=destination_id)
        return DestinationResponse.model_validate(destination)

    async def delete_destination(self, destination_id: str) -> None:
        did = parse_uuid(destination_id, "destination")
        await self._require_destination(did, "Error deleting destination")
        with database_errors("Error deleting destination", destination_id=destination_id):
            await self._destinations.delete(did)
        logger.info("Destination deleted: %s", destination_id)

    async def list_trips(self, destination_id: str) -> List[TripResponse]:
        """Trips visiting the destination, without their own relations."""
        did = parse_uuid(destination_id, "destination")
        await self._require_destination(did, "Error retrieving trips for destination")
        with database_errors("Error retrieving trips for destination", destination_id=destination_id):
            links = await self._trip_destinations.list_trips_for_destination(did)
        return [TripResponse.model_validate(link.trip) for link in links]
