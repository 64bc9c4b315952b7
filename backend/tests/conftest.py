"""
TripPlanner Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the whole suite.
How:   Repository and API tests run against an in-memory SQLite database
       created through the same build_engine() the application uses, so the
       foreign-key cascades and case-sensitive LIKE behave as in production.

Fixture Hierarchy (all function-scoped):
    settings
    ├── engine ── session_factory ── trip_repo, destination_repo,
    │                                trip_destination_repo, packing_item_repo,
    │                                tag_repo, diary_entry_repo
    ├── fake_fuel_provider
    └── api_app ── test_client (httpx AsyncClient over ASGITransport)
"""

import os
from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any app import so get_settings() never sees a real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GEOAPIFY_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.database import Base, build_engine, build_session_factory  # noqa: E402
from app.repositories import (  # noqa: E402
    DestinationRepository,
    DiaryEntryRepository,
    PackingItemRepository,
    TagRepository,
    TripRepository,
    TripToDestinationRepository,
)
from app.schemas.fuel_station import (  # noqa: E402
    FuelStation,
    FuelStationAddress,
    FuelStationLocation,
)
from app.services.places_base import FuelStationProvider  # noqa: E402
from app import models  # noqa: E402,F401


class FakeFuelStationProvider(FuelStationProvider):
    """Returns canned stations and records every lookup."""

    def __init__(self, stations: List[FuelStation] = None):
        self.stations = stations or []
        self.calls = []
        self.closed = False

    async def find_fuel_stations(self, longitude, latitude, radius=5000):
        self.calls.append((longitude, latitude, radius))
        return list(self.stations)

    async def close(self) -> None:
        self.closed = True


def make_station(station_id: str = "place-1", name: str = "Aral") -> FuelStation:
    return FuelStation(
        id=station_id,
        name=name,
        distance=412,
        address=FuelStationAddress(formatted="Hauptstr. 1, Berlin", city="Berlin"),
        location=FuelStationLocation(latitude=52.53, longitude=13.38),
    )


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        geoapify_api_key="test-key-not-real",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def trip_repo(session_factory) -> TripRepository:
    return TripRepository(session_factory)


@pytest.fixture
def destination_repo(session_factory) -> DestinationRepository:
    return DestinationRepository(session_factory)


@pytest.fixture
def trip_destination_repo(session_factory) -> TripToDestinationRepository:
    return TripToDestinationRepository(session_factory)


@pytest.fixture
def packing_item_repo(session_factory) -> PackingItemRepository:
    return PackingItemRepository(session_factory)


@pytest.fixture
def tag_repo(session_factory) -> TagRepository:
    return TagRepository(session_factory)


@pytest.fixture
def diary_entry_repo(session_factory) -> DiaryEntryRepository:
    return DiaryEntryRepository(session_factory)


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_fuel_provider() -> FakeFuelStationProvider:
    return FakeFuelStationProvider([make_station()])


@pytest_asyncio.fixture
async def api_app(settings, fake_fuel_provider):
    from app.main import create_app

    application = create_app(settings, fuel_station_provider=fake_fuel_provider)
    # ASGITransport does not run the lifespan; create tables and close explicitly
    container = application.state.container
    async with container.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await container.close()


@pytest_asyncio.fixture
async def test_client(api_app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
