"""
TripPlanner Backend: Fuel Station Service
===========================================

What:  Finds fuel stations around a stored destination.
How:   Validates the radius, loads the destination, requires coordinates,
       then asks the FuelStationProvider for stations inside the circle.

Error Handling Strategy:
    radius outside 1..20000       → ValidationError      (400)
    destination missing           → NotFoundError        (404)
    destination without lat/lon   → ValidationError      (400)
    provider failure              → ExternalServiceError (500 "Error fetching fuel stations")
"""

import logging

from app.exceptions import ExternalServiceError, NotFoundError, ValidationError
from app.repositories.destination_repository import DestinationRepository
from app.schemas.fuel_station import (
    DEFAULT_RADIUS_METERS,
    MAX_RADIUS_METERS,
    FuelStationDestination,
    FuelStationsResponse,
)
from app.services.common import database_errors, parse_uuid
from app.services.places_base import FuelStationProvider

logger = logging.getLogger(__name__)


class FuelStationService:
    def __init__(self, destinations: DestinationRepository, provider: FuelStationProvider):
        self._destinations = destinations
        self._provider = provider

    async def find_for_destination(
        self, destination_id: str, radius: int = DEFAULT_RADIUS_METERS
    ) -> FuelStationsResponse:
        did = parse_uuid(destination_id, "destination")
        if radius < 1 or radius > MAX_RADIUS_METERS:
            raise ValidationError(
                message=(
                    "Invalid radius. Please provide a positive integer less than "
                    "or equal to 20000 (20 km)."
                ),
                field="radius",
            )

        with database_errors("Error fetching fuel stations", destination_id=destination_id):
            destination = await self._destinations.get_by_id(did)
        if destination is None:
            raise NotFoundError(resource="destination", resource_id=destination_id)
        if not destination.has_coordinates:
            raise ValidationError(
                message="Destination does not have geographic coordinates (latitude/longitude)",
                context={"destination_id": destination_id},
            )

        try:
            stations = await self._provider.find_fuel_stations(
                destination.longitude, destination.latitude, radius
            )
        except ExternalServiceError as e:
            raise ExternalServiceError(
                message="Error fetching fuel stations",
                context={**e.context, "destination_id": destination_id},
            ) from e

        return FuelStationsResponse(
            data=stations,
            destination=FuelStationDestination(
                id=destination.id,
                name=destination.name,
                latitude=destination.latitude,
                longitude=destination.longitude,
            ),
            radius=radius,
        )
