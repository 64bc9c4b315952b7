"""
TripPlanner Backend: Trip Service
===================================

What:  Business rules for trips, trip search and the trip/destination
       associations.
Why:   Keeps HTTP out of the rules and SQL out of the routes.
How:   Each method parses identifiers, checks that referenced rows exist,
       performs one repository call and converts the rows into response
       schemas.
Who:   Called by the trip route handlers.

Error Handling Strategy:
    Malformed ids           → ValidationError (400)
    Missing trip            → NotFoundError   (404 "Trip not found")
    Duplicate association   → ConflictError   (409, raised by the repository)
    Anything unexpected     → DatabaseError   (500, per-operation message)
"""

import logging
from typing import List, Optional, Union

from app.exceptions import NotFoundError, ValidationError
from app.models.trip import Trip
from app.repositories.trip_repository import TripRepository
from app.repositories.trip_to_destination_repository import TripToDestinationRepository
from app.schemas.trip import (
    TripCreate,
    TripDestinationDates,
    TripDetailResponse,
    TripResponse,
    TripToDestinationResponse,
    TripToDestinationWithDestination,
    TripUpdate,
)
from app.services.common import database_errors, parse_uuid
from app.utils.date_utils import to_calendar_date

logger = logging.getLogger(__name__)

TripOut = Union[TripResponse, TripDetailResponse]


def to_trip_response(trip: Trip, with_relations: bool = False) -> TripOut:
    if with_relations:
        return TripDetailResponse.model_validate(trip)
    return TripResponse.model_validate(trip)


class TripService:
    """
    Responsibilities:
        - list/get/create/update/delete trips
        - search by name and date window
        - trips visiting a destination
        - add, re-date and remove destinations of a trip
    """

    def __init__(
        self,
        trips: TripRepository,
        trip_destinations: TripToDestinationRepository,
    ):
        self._trips = trips
        self._trip_destinations = trip_destinations

    async def _require_trip(self, trip_id, message: str) -> Trip:
        with database_errors(message, trip_id=str(trip_id)):
            trip = await self._trips.get_by_id(trip_id)
        if trip is None:
            raise NotFoundError(resource="trip", resource_id=str(trip_id))
        return trip

    # ── Trips ─────────────────────────────────────────────────────────────

    async def list_trips(self, with_relations: bool = False) -> List[TripOut]:
        with database_errors("Error retrieving trips"):
            trips = await self._trips.list_all(with_relations)
        return [to_trip_response(t, with_relations) for t in trips]

    async def get_trip(self, trip_id: str, with_relations: bool = False) -> TripOut:
        tid = parse_uuid(trip_id, "trip")
        with database_errors("Error retrieving trip", trip_id=trip_id):
            trip = await self._trips.get_by_id(tid, with_relations)
        if trip is None:
            raise NotFoundError(resource="trip", resource_id=trip_id)
        return to_trip_response(trip, with_relations)

    async def create_trip(self, payload: TripCreate) -> TripResponse:
        with database_errors("Error creating trip"):
            trip = await self._trips.create(payload.model_dump())
        logger.info("Trip created: %s", trip.id)
        return TripResponse.model_validate(trip)

    async def update_trip(self, trip_id: str, payload: TripUpdate) -> TripResponse:
        tid = parse_uuid(trip_id, "trip")
        await self._require_trip(tid, "Error updating trip")
        with database_errors("Error updating trip", trip_id=trip_id):
            trip = await self._trips.update(tid, payload.model_dump(exclude_unset=True))
        if trip is None:
            raise NotFoundError(resource="trip", resource_id=trip_id)
        return TripResponse.model_validate(trip)

    async def delete_trip(self, trip_id: str) -> None:
        tid = parse_uuid(trip_id, "trip")
        await self._require_trip(tid, "Error deleting trip")
        with database_errors("Error deleting trip", trip_id=trip_id):
            await self._trips.delete(tid)
        logger.info("Trip deleted: %s", trip_id)

    async def search_trips(
        self,
        query: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        with_relations: bool = False,
    ) -> List[TripOut]:
        try:
            start = to_calendar_date(start_date) if start_date else None
            end = to_calendar_date(end_date) if end_date else None
        except ValueError:
            raise ValidationError(
                message="Invalid search parameters",
                context={"start_date": start_date, "end_date": end_date},
            ) from None

        with database_errors("Error searching trips"):
            trips = await self._trips.search(query, start, end, with_relations)
        return [to_trip_response(t, with_relations) for t in trips]

    async def list_trips_by_destination(
        self, destination_id: str, with_relations: bool = False
    ) -> List[TripOut]:
        did = parse_uuid(destination_id, "destination")
        with database_errors("Error retrieving trips by destination", destination_id=destination_id):
            trips = await self._trips.list_by_destination(did, with_relations)
        return [to_trip_response(t, with_relations) for t in trips]

    # ── Destinations of a trip ────────────────────────────────────────────

    async def list_destinations(self, trip_id: str) -> List[TripToDestinationWithDestination]:
        tid = parse_uuid(trip_id, "trip")
        await self._require_trip(tid, "Error retrieving destinations for trip")
        with database_errors("Error retrieving destinations for trip", trip_id=trip_id):
            links = await self._trip_destinations.list_destinations_for_trip(tid)
        return [TripToDestinationWithDestination.model_validate(link) for link in links]

    async def add_destination(
        self,
        trip_id: str,
        destination_id: str,
        dates: Optional[TripDestinationDates] = None,
    ) -> TripToDestinationResponse:
        tid = parse_uuid(trip_id, "trip")
        did = parse_uuid(destination_id, "destination")
        dates = dates or TripDestinationDates()

        await self._require_trip(tid, "Error adding destination to trip")
        with database_errors(
            "Error adding destination to trip", trip_id=trip_id, destination_id=destination_id
        ):
            link = await self._trip_destinations.add(tid, did, dates.start_date, dates.end_date)
        return TripToDestinationResponse.model_validate(link)

    async def update_destination(
        self,
        trip_id: str,
        destination_id: str,
        dates: TripDestinationDates,
    ) -> TripToDestinationResponse:
        tid = parse_uuid(trip_id, "trip")
        did = parse_uuid(destination_id, "destination")

        with database_errors(
            "Error updating trip destination", trip_id=trip_id, destination_id=destination_id
        ):
            link = await self._trip_destinations.update(tid, did, dates.start_date, dates.end_date)
        if link is None:
            raise NotFoundError(
                resource="trip-destination relationship",
                message="Trip-destination relationship not found",
                context={"trip_id": trip_id, "destination_id": destination_id},
            )
        return TripToDestinationResponse.model_validate(link)

    async def remove_destination(self, trip_id: str, destination_id: str) -> None:
        tid = parse_uuid(trip_id, "trip")
        did = parse_uuid(destination_id, "destination")
        with database_errors(
            "Error removing destination from trip", trip_id=trip_id, destination_id=destination_id
        ):
            await self._trip_destinations.remove(tid, did)
