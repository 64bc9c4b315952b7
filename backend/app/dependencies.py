"""FastAPI dependencies resolving services from the per-app container."""

from fastapi import Request

from app.container import Container
from app.services.destination_service import DestinationService
from app.services.diary_service import DiaryService
from app.services.fuel_station_service import FuelStationService
from app.services.packing_item_service import PackingItemService
from app.services.trip_service import TripService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_trip_service(request: Request) -> TripService:
    return get_container(request).trip_service


def get_destination_service(request: Request) -> DestinationService:
    return get_container(request).destination_service


def get_packing_item_service(request: Request) -> PackingItemService:
    return get_container(request).packing_item_service


def get_fuel_station_service(request: Request) -> FuelStationService:
    return get_container(request).fuel_station_service


def get_diary_service(request: Request) -> DiaryService:
    return get_container(request).diary_service
