"""
TripPlanner Backend: Service Unit Tests
=========================================

What:  Service-layer rules with the repositories replaced by AsyncMock.
How:   Repository rows are SimpleNamespace objects; the response schemas
       read them through from_attributes.

What we test:
    ✅ malformed ids are rejected before any repository call
    ✅ missing rows map to NotFoundError, repository failures to DatabaseError
    ✅ partial updates forward only the fields the client sent
    ✅ fuel-station lookup: radius bounds, coordinates required, provider errors
    ✅ diary entry creation creates and links named tags
"""

import uuid
from datetime import date, datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.exceptions import (
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from app.schemas.destination import DestinationUpdate
from app.schemas.diary import DiaryEntryCreate
from app.schemas.packing_item import PackingItemCreate
from app.schemas.trip import TripCreate, TripDestinationDates, TripUpdate
from app.services.destination_service import DestinationService
from app.services.diary_service import DiaryService
from app.services.fuel_station_service import FuelStationService
from app.services.packing_item_service import PackingItemService
from app.services.trip_service import TripService


def _now() -> datetime:
    return datetime.now(timezone.utc)


def trip_row(**overrides) -> SimpleNamespace:
    values = dict(
        id=uuid.uuid4(),
        name="Beach Vacation",
        description=None,
        start_date=None,
        end_date=None,
        image=None,
        participants=None,
        created_at=_now(),
        updated_at=_now(),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def destination_row(**overrides) -> SimpleNamespace:
    values = dict(
        id=uuid.uuid4(),
        name="Berlin",
        description=None,
        activities=None,
        photos=None,
        latitude=52.52,
        longitude=13.40,
        created_at=_now(),
        updated_at=_now(),
    )
    values.update(overrides)
    row = SimpleNamespace(**values)
    row.has_coordinates = row.latitude is not None and row.longitude is not None
    return row


def link_row(trip_id, destination_id, **overrides) -> SimpleNamespace:
    values = dict(
        trip_id=trip_id,
        destination_id=destination_id,
        start_date=None,
        end_date=None,
        created_at=_now(),
        updated_at=_now(),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class TestTripService:

    def setup_method(self):
        self.trips = AsyncMock()
        self.links = AsyncMock()
        self.service = TripService(self.trips, self.links)

    @pytest.mark.asyncio
    async def test_get_trip_rejects_malformed_id(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.get_trip("not-a-uuid")

        assert exc_info.value.message == "Invalid trip id format. Please provide a valid UUID."
        self.trips.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_trip_not_found(self):
        self.trips.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_trip(str(uuid.uuid4()))

        assert exc_info.value.message == "Trip not found"

    @pytest.mark.asyncio
    async def test_repository_failure_becomes_database_error(self):
        self.trips.list_all.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_trips()

        assert exc_info.value.message == "Error retrieving trips"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_create_trip_passes_validated_fields(self):
        self.trips.create.return_value = trip_row(participants='["Alice"]')
        payload = TripCreate(name="Beach Vacation", participants=["Alice"], startDate="2023-06-15")

        result = await self.service.create_trip(payload)

        data = self.trips.create.await_args.args[0]
        assert data["name"] == "Beach Vacation"
        assert data["participants"] == ["Alice"]
        assert data["start_date"] == date(2023, 6, 15)
        assert result.participants == '["Alice"]'

    @pytest.mark.asyncio
    async def test_update_forwards_only_sent_fields(self):
        trip = trip_row()
        self.trips.get_by_id.return_value = trip
        self.trips.update.return_value = trip_row(id=trip.id, description="New")

        await self.service.update_trip(str(trip.id), TripUpdate(description="New"))

        self.trips.update.assert_awaited_once_with(trip.id, {"description": "New"})

    @pytest.mark.asyncio
    async def test_update_missing_trip(self):
        self.trips.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_trip(str(uuid.uuid4()), TripUpdate(name="x"))
        self.trips.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_trip(self):
        self.trips.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.delete_trip(str(uuid.uuid4()))
        self.trips.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_with_invalid_date(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.search_trips(start_date="June 1st")

        assert exc_info.value.message == "Invalid search parameters"
        self.trips.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_parses_dates(self):
        self.trips.search.return_value = []

        await self.service.search_trips("Beach", "2023-06-01", "2023-06-30T00:00:00Z")

        self.trips.search.assert_awaited_once_with(
            "Beach", date(2023, 6, 1), date(2023, 6, 30), False
        )

    @pytest.mark.asyncio
    async def test_add_destination_requires_trip(self):
        self.trips.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.add_destination(str(uuid.uuid4()), str(uuid.uuid4()))
        self.links.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_destination_conflict_passes_through(self):
        trip = trip_row()
        self.trips.get_by_id.return_value = trip
        self.links.add.side_effect = ConflictError("This destination is already associated with the trip")

        with pytest.raises(ConflictError):
            await self.service.add_destination(str(trip.id), str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_add_destination_forwards_dates(self):
        trip = trip_row()
        destination_id = uuid.uuid4()
        self.trips.get_by_id.return_value = trip
        self.links.add.return_value = link_row(
            trip.id, destination_id, start_date=date(2023, 6, 16), end_date=date(2023, 6, 20)
        )

        result = await self.service.add_destination(
            str(trip.id),
            str(destination_id),
            TripDestinationDates(startDate="2023-06-16", endDate="2023-06-20"),
        )

        self.links.add.assert_awaited_once_with(
            trip.id, destination_id, date(2023, 6, 16), date(2023, 6, 20)
        )
        assert result.start_date == date(2023, 6, 16)

    @pytest.mark.asyncio
    async def test_update_missing_association(self):
        self.links.update.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_destination(
                str(uuid.uuid4()), str(uuid.uuid4()), TripDestinationDates()
            )

        assert exc_info.value.message == "Trip-destination relationship not found"


class TestDestinationService:

    def setup_method(self):
        self.destinations = AsyncMock()
        self.links = AsyncMock()
        self.service = DestinationService(self.destinations, self.links)

    @pytest.mark.asyncio
    async def test_update_forwards_only_sent_fields(self):
        destination = destination_row()
        self.destinations.get_by_id.return_value = destination
        self.destinations.update.return_value = destination

        await self.service.update_destination(
            str(destination.id), DestinationUpdate(activities=["Museum"])
        )

        self.destinations.update.assert_awaited_once_with(destination.id, {"activities": ["Museum"]})

    @pytest.mark.asyncio
    async def test_list_trips_requires_destination(self):
        self.destinations.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.list_trips(str(uuid.uuid4()))

        assert exc_info.value.message == "Destination not found"

    @pytest.mark.asyncio
    async def test_list_trips_returns_linked_trips(self):
        destination = destination_row()
        trip = trip_row(name="Germany")
        self.destinations.get_by_id.return_value = destination
        self.links.list_trips_for_destination.return_value = [
            SimpleNamespace(trip=trip, **vars(link_row(trip.id, destination.id)))
        ]

        trips = await self.service.list_trips(str(destination.id))

        assert [t.name for t in trips] == ["Germany"]


class TestPackingItemService:

    def setup_method(self):
        self.items = AsyncMock()
        self.trips = AsyncMock()
        self.service = PackingItemService(self.items, self.trips)

    @pytest.mark.asyncio
    async def test_create_requires_existing_trip(self):
        self.trips.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.create_item(PackingItemCreate(name="Towel", tripId=uuid.uuid4()))
        self.items.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_for_unknown_trip(self):
        self.trips.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.list_items_for_trip(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_missing_item(self):
        self.items.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete_item(str(uuid.uuid4()))

        assert exc_info.value.message == "Packing item not found"
        self.items.delete.assert_not_awaited()


class TestFuelStationService:

    def setup_method(self):
        self.destinations = AsyncMock()
        self.provider = AsyncMock()
        self.service = FuelStationService(self.destinations, self.provider)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("radius", [0, -5, 20001])
    async def test_radius_out_of_range(self, radius):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.find_for_destination(str(uuid.uuid4()), radius)

        assert exc_info.value.message.startswith("Invalid radius.")
        self.destinations.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_destination(self):
        self.destinations.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.find_for_destination(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_destination_without_coordinates(self):
        self.destinations.get_by_id.return_value = destination_row(latitude=None, longitude=None)

        with pytest.raises(ValidationError) as exc_info:
            await self.service.find_for_destination(str(uuid.uuid4()))

        assert exc_info.value.message == (
            "Destination does not have geographic coordinates (latitude/longitude)"
        )
        self.provider.find_fuel_stations.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_called_with_longitude_first(self):
        destination = destination_row()
        self.destinations.get_by_id.return_value = destination
        self.provider.find_fuel_stations.return_value = []

        result = await self.service.find_for_destination(str(destination.id), 2500)

        self.provider.find_fuel_stations.assert_awaited_once_with(13.40, 52.52, 2500)
        assert result.radius == 2500
        assert result.destination.name == "Berlin"
        assert result.data == []

    @pytest.mark.asyncio
    async def test_provider_failure(self):
        self.destinations.get_by_id.return_value = destination_row()
        self.provider.find_fuel_stations.side_effect = ExternalServiceError("boom")

        with pytest.raises(ExternalServiceError) as exc_info:
            await self.service.find_for_destination(str(uuid.uuid4()))

        assert exc_info.value.message == "Error fetching fuel stations"


class TestDiaryService:

    def setup_method(self):
        self.entries = AsyncMock()
        self.tags = AsyncMock()
        self.service = DiaryService(self.entries, self.tags)

    @pytest.mark.asyncio
    async def test_create_entry_creates_and_links_named_tags(self):
        user_id = uuid.uuid4()
        entry_id = uuid.uuid4()
        existing_tag = SimpleNamespace(id=uuid.uuid4(), name="food", user_id=user_id, created_at=_now(), updated_at=_now())
        new_tag = SimpleNamespace(id=uuid.uuid4(), name="beach", user_id=user_id, created_at=_now(), updated_at=_now())
        entry = SimpleNamespace(
            id=entry_id, title="Day 1", content="", user_id=user_id,
            created_at=_now(), updated_at=_now(), tags=[new_tag, existing_tag],
        )
        self.entries.create_for_user.return_value = entry
        self.tags.list_by_names_or_ids.return_value = [new_tag, existing_tag]
        self.entries.get_of_user.return_value = entry

        payload = DiaryEntryCreate(
            title="Day 1", tags=[{"name": "beach"}, {"id": str(existing_tag.id)}]
        )
        result = await self.service.create_entry(str(user_id), payload)

        self.entries.create_for_user.assert_awaited_once_with(user_id, {"title": "Day 1", "content": ""})
        self.tags.create_for_user.assert_awaited_once_with(user_id, ["beach"])
        self.tags.list_by_names_or_ids.assert_awaited_once_with(["beach"], [existing_tag.id], user_id)
        self.entries.associate_tags.assert_awaited_once_with(entry_id, [new_tag.id, existing_tag.id])
        assert {t.name for t in result.tags} == {"beach", "food"}

    @pytest.mark.asyncio
    async def test_create_entry_without_tags_skips_tag_calls(self):
        user_id = uuid.uuid4()
        entry = SimpleNamespace(
            id=uuid.uuid4(), title="Day 1", content="", user_id=user_id,
            created_at=_now(), updated_at=_now(), tags=[],
        )
        self.entries.create_for_user.return_value = entry
        self.entries.get_of_user.return_value = entry

        await self.service.create_entry(str(user_id), DiaryEntryCreate(title="Day 1"))

        self.tags.create_for_user.assert_not_awaited()
        self.entries.associate_tags.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_entry(self):
        self.entries.get_of_user.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete_entry(str(uuid.uuid4()), str(uuid.uuid4()))

        assert exc_info.value.message == "Diary entry not found"

    @pytest.mark.asyncio
    async def test_malformed_user_id(self):
        with pytest.raises(ValidationError):
            await self.service.list_tags("me")
