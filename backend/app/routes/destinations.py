"""
TripPlanner Backend: Destination Route Handlers
=================================================

What:  HTTP endpoints for destinations, the trips visiting a destination
       and the fuel stations around it.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_destination_service, get_fuel_station_service
from app.schemas.common import ErrorResponse
from app.schemas.destination import DestinationCreate, DestinationResponse, DestinationUpdate
from app.schemas.fuel_station import DEFAULT_RADIUS_METERS, FuelStationsResponse
from app.schemas.trip import DestinationDetailResponse, TripResponse
from app.services.destination_service import DestinationService
from app.services.fuel_station_service import FuelStationService


router = APIRouter(prefix="/api", tags=["Destinations"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_WITH_RELATIONS_DOC = {200: {"model": DestinationDetailResponse}}

WithRelations = Query(
    default=False,
    alias="withRelations",
    description="Include the trips visiting the destination",
)


@router.get(
    "/destinations",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="List all destinations",
)
async def list_destinations(
    with_relations: bool = WithRelations,
    service: DestinationService = Depends(get_destination_service),
):
    return await service.list_destinations(with_relations)


@router.get(
    "/destinations/{destination_id}",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="Get a single destination",
)
async def get_destination(
    destination_id: str,
    with_relations: bool = WithRelations,
    service: DestinationService = Depends(get_destination_service),
):
    return await service.get_destination(destination_id, with_relations)


@router.post(
    "/destinations",
    response_model=DestinationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a destination",
)
async def create_destination(
    payload: DestinationCreate,
    service: DestinationService = Depends(get_destination_service),
) -> DestinationResponse:
    return await service.create_destination(payload)


@router.put(
    "/destinations/{destination_id}",
    response_model=DestinationResponse,
    responses=_ERRORS,
    summary="Update a destination (partial)",
)
async def update_destination(
    destination_id: str,
    payload: DestinationUpdate,
    service: DestinationService = Depends(get_destination_service),
) -> DestinationResponse:
    return await service.update_destination(destination_id, payload)


@router.delete(
    "/destinations/{destination_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a destination and its trip links",
)
async def delete_destination(
    destination_id: str,
    service: DestinationService = Depends(get_destination_service),
) -> Response:
    await service.delete_destination(destination_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/destinations/{destination_id}/trips",
    response_model=List[TripResponse],
    responses=_ERRORS,
    summary="List the trips visiting a destination",
)
async def list_destination_trips(
    destination_id: str,
    service: DestinationService = Depends(get_destination_service),
) -> List[TripResponse]:
    return await service.list_trips(destination_id)


@router.get(
    "/destinations/{destination_id}/fuel-stations",
    response_model=FuelStationsResponse,
    # fuelTypes / openingHours are left out when the provider has no data
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Find fuel stations around a destination",
    description=(
        "Looks up fuel stations within `radius` meters (1-20000, default 5000) of the "
        "destination's coordinates using the Geoapify Places API."
    ),
)
async def get_fuel_stations(
    destination_id: str,
    radius: int = Query(default=DEFAULT_RADIUS_METERS, description="Search radius in meters"),
    service: FuelStationService = Depends(get_fuel_station_service),
) -> FuelStationsResponse:
    return await service.find_for_destination(destination_id, radius)
