"""
TripPlanner Backend: Dependency Container
===========================================

What:  Builds the engine, session factory, repositories, services and the
       fuel-station provider once per process.
Why:   Every collaborator is passed in explicitly; no module holds a global
       engine or service instance, so tests can assemble an application
       against any database.
How:   create_app() calls Container.build(settings) and stores the result on
       app.state.container. Route dependencies read it from there.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import Settings
from app.database import build_engine, build_session_factory
from app.repositories import (
    DestinationRepository,
    DiaryEntryRepository,
    PackingItemRepository,
    TagRepository,
    TripRepository,
    TripToDestinationRepository,
)
from app.services.destination_service import DestinationService
from app.services.diary_service import DiaryService
from app.services.fuel_station_service import FuelStationService
from app.services.geoapify_service import GeoapifyService
from app.services.packing_item_service import PackingItemService
from app.services.places_base import FuelStationProvider
from app.services.trip_service import TripService

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    fuel_station_provider: FuelStationProvider
    trip_service: TripService
    destination_service: DestinationService
    packing_item_service: PackingItemService
    fuel_station_service: FuelStationService
    diary_service: DiaryService

    @classmethod
    def build(
        cls,
        settings: Settings,
        fuel_station_provider: Optional[FuelStationProvider] = None,
    ) -> "Container":
        engine = build_engine(settings)
        session_factory = build_session_factory(engine)

        trips = TripRepository(session_factory)
        destinations = DestinationRepository(session_factory)
        trip_destinations = TripToDestinationRepository(session_factory)
        packing_items = PackingItemRepository(session_factory)
        provider = fuel_station_provider or GeoapifyService.from_settings(settings)

        logger.debug("Dependency container assembled")
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            fuel_station_provider=provider,
            trip_service=TripService(trips, trip_destinations),
            destination_service=DestinationService(destinations, trip_destinations),
            packing_item_service=PackingItemService(packing_items, trips),
            fuel_station_service=FuelStationService(destinations, provider),
            diary_service=DiaryService(
                DiaryEntryRepository(session_factory),
                TagRepository(session_factory),
            ),
        )

    async def close(self) -> None:
        await self.fuel_station_provider.close()
        await self.engine.dispose()
