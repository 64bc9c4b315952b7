"""
TripPlanner Backend: Trip Route Handlers
==========================================

What:  HTTP endpoints for trips, trip search, trips by destination, the
       destinations of a trip and the packing list of a trip.
How:   Each handler parses path/query/body input, calls one TripService or
       PackingItemService method and picks the status code.

Route order matters: /trips/search and /trips/by-destination/... are
declared before /trips/{trip_id} so they are not captured as ids.

Relation-aware endpoints (withRelations=true) declare response_model=None:
a fixed response model would strip the nested fields of the detail views.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from app.dependencies import get_packing_item_service, get_trip_service
from app.schemas.common import ErrorResponse
from app.schemas.packing_item import PackingItemResponse
from app.schemas.trip import (
    TripCreate,
    TripDestinationDates,
    TripDetailResponse,
    TripResponse,
    TripToDestinationResponse,
    TripToDestinationWithDestination,
    TripUpdate,
)
from app.services.packing_item_service import PackingItemService
from app.services.trip_service import TripService


router = APIRouter(prefix="/api", tags=["Trips"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_WITH_RELATIONS_DOC = {200: {"model": TripDetailResponse}}

WithRelations = Query(
    default=False,
    alias="withRelations",
    description="Include destinations (with their date windows) and packing items",
)


# ── Trips ─────────────────────────────────────────────────────────────────

@router.get(
    "/trips",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="List all trips",
)
async def list_trips(
    with_relations: bool = WithRelations,
    service: TripService = Depends(get_trip_service),
):
    return await service.list_trips(with_relations)


@router.get(
    "/trips/search",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="Search trips by name and date window",
    description=(
        "Case-sensitive substring match on the trip name. With both dates, only "
        "trips lying entirely within [startDate, endDate] are returned."
    ),
)
async def search_trips(
    query: Optional[str] = Query(default=None, description="Substring of the trip name"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    with_relations: bool = WithRelations,
    service: TripService = Depends(get_trip_service),
):
    return await service.search_trips(query, start_date, end_date, with_relations)


@router.get(
    "/trips/by-destination/{destination_id}",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="List trips that visit a destination",
)
async def list_trips_by_destination(
    destination_id: str,
    with_relations: bool = WithRelations,
    service: TripService = Depends(get_trip_service),
):
    return await service.list_trips_by_destination(destination_id, with_relations)


@router.get(
    "/trips/{trip_id}",
    response_model=None,
    responses={**_ERRORS, **_WITH_RELATIONS_DOC},
    summary="Get a single trip",
)
async def get_trip(
    trip_id: str,
    with_relations: bool = WithRelations,
    service: TripService = Depends(get_trip_service),
):
    return await service.get_trip(trip_id, with_relations)


@router.post(
    "/trips",
    response_model=TripResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a trip",
)
async def create_trip(
    payload: TripCreate,
    service: TripService = Depends(get_trip_service),
) -> TripResponse:
    return await service.create_trip(payload)


@router.put(
    "/trips/{trip_id}",
    response_model=TripResponse,
    responses=_ERRORS,
    summary="Update a trip (partial)",
)
async def update_trip(
    trip_id: str,
    payload: TripUpdate,
    service: TripService = Depends(get_trip_service),
) -> TripResponse:
    return await service.update_trip(trip_id, payload)


@router.delete(
    "/trips/{trip_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a trip with its packing items and destination links",
)
async def delete_trip(
    trip_id: str,
    service: TripService = Depends(get_trip_service),
) -> Response:
    await service.delete_trip(trip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Destinations of a trip ────────────────────────────────────────────────

@router.get(
    "/trips/{trip_id}/destinations",
    response_model=List[TripToDestinationWithDestination],
    responses=_ERRORS,
    summary="List the destinations of a trip with their date windows",
)
async def list_trip_destinations(
    trip_id: str,
    service: TripService = Depends(get_trip_service),
) -> List[TripToDestinationWithDestination]:
    return await service.list_destinations(trip_id)


@router.post(
    "/trips/{trip_id}/destinations/{destination_id}",
    response_model=TripToDestinationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 409: {"description": "Already associated", "model": ErrorResponse}},
    summary="Add a destination to a trip",
)
async def add_destination_to_trip(
    trip_id: str,
    destination_id: str,
    dates: Optional[TripDestinationDates] = Body(default=None),
    service: TripService = Depends(get_trip_service),
) -> TripToDestinationResponse:
    return await service.add_destination(trip_id, destination_id, dates)


@router.put(
    "/trips/{trip_id}/destinations/{destination_id}",
    response_model=TripToDestinationResponse,
    responses=_ERRORS,
    summary="Change the date window of a destination within a trip",
)
async def update_trip_destination(
    trip_id: str,
    destination_id: str,
    dates: Optional[TripDestinationDates] = Body(default=None),
    service: TripService = Depends(get_trip_service),
) -> TripToDestinationResponse:
    return await service.update_destination(
        trip_id, destination_id, dates or TripDestinationDates()
    )


@router.delete(
    "/trips/{trip_id}/destinations/{destination_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Remove a destination from a trip",
)
async def remove_destination_from_trip(
    trip_id: str,
    destination_id: str,
    service: TripService = Depends(get_trip_service),
) -> Response:
    await service.remove_destination(trip_id, destination_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Packing list of a trip ────────────────────────────────────────────────

@router.get(
    "/trips/{trip_id}/packing-items",
    response_model=List[PackingItemResponse],
    responses=_ERRORS,
    summary="List the packing items of a trip",
)
async def list_trip_packing_items(
    trip_id: str,
    service: PackingItemService = Depends(get_packing_item_service),
) -> List[PackingItemResponse]:
    return await service.list_items_for_trip(trip_id)


@router.delete(
    "/trips/{trip_id}/packing-items",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete every packing item of a trip",
)
async def delete_trip_packing_items(
    trip_id: str,
    service: PackingItemService = Depends(get_packing_item_service),
) -> Response:
    await service.delete_items_for_trip(trip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
