"""
TripPlanner Backend: HTTP API Tests
=====================================

What:  Full request/response cycle through create_app() with an in-memory
       SQLite database and a fake fuel-station provider.

What we test:
    ✅ the Beach Vacation scenario (201, 201, 409, nested association dates)
    ✅ camelCase JSON, {"errors": [...]} bodies and status codes
    ✅ cascading trip deletion, search, packing items, diary, fuel stations
    ✅ X-Request-ID and security headers on every response
"""

import uuid

import pytest


async def _create_trip(client, **body):
    payload = {"name": "Beach Vacation", **body}
    response = await client.post("/api/trips", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_destination(client, **body):
    payload = {"name": "Beach", **body}
    response = await client.post("/api/destinations", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestBeachVacationScenario:

    @pytest.mark.asyncio
    async def test_associate_destination_end_to_end(self, test_client):
        trip = await _create_trip(
            test_client,
            startDate="2023-06-15",
            endDate="2023-06-22",
            participants=["Alice", "Bob"],
        )
        destination = await _create_destination(test_client, latitude=36.5, longitude=-4.9)
        url = f"/api/trips/{trip['id']}/destinations/{destination['id']}"
        window = {"startDate": "2023-06-16", "endDate": "2023-06-20"}

        first = await test_client.post(url, json=window)
        assert first.status_code == 201
        assert first.json()["startDate"] == "2023-06-16"

        second = await test_client.post(url, json=window)
        assert second.status_code == 409
        assert second.json() == {"errors": ["This destination is already associated with the trip"]}

        detail = await test_client.get(f"/api/trips/{trip['id']}", params={"withRelations": "true"})
        assert detail.status_code == 200
        body = detail.json()
        assert body["participants"] == '["Alice","Bob"]'
        assert len(body["tripToDestinations"]) == 1
        link = body["tripToDestinations"][0]
        assert link["startDate"] == "2023-06-16"
        assert link["endDate"] == "2023-06-20"
        assert link["destination"]["name"] == "Beach"
        assert body["packingItems"] == []


class TestTripEndpoints:

    @pytest.mark.asyncio
    async def test_create_returns_camel_case(self, test_client):
        trip = await _create_trip(test_client, startDate="2023-06-15T10:00:00Z")

        assert trip["startDate"] == "2023-06-15"
        assert "createdAt" in trip and "updatedAt" in trip
        assert "tripToDestinations" not in trip

    @pytest.mark.asyncio
    async def test_create_rejects_reversed_dates(self, test_client):
        response = await test_client.post(
            "/api/trips",
            json={"name": "Backwards", "startDate": "2023-06-20", "endDate": "2023-06-10"},
        )

        assert response.status_code == 400
        assert response.json() == {"errors": ["End date must be after or equal to start date"]}

    @pytest.mark.asyncio
    async def test_create_requires_name(self, test_client):
        response = await test_client.post("/api/trips", json={"description": "no name"})

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("name:")

    @pytest.mark.asyncio
    async def test_get_with_malformed_id(self, test_client):
        response = await test_client.get("/api/trips/123")

        assert response.status_code == 400
        assert response.json() == {"errors": ["Invalid trip id format. Please provide a valid UUID."]}

    @pytest.mark.asyncio
    async def test_get_unknown_trip(self, test_client):
        response = await test_client.get(f"/api/trips/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"errors": ["Trip not found"]}

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client):
        trip = await _create_trip(test_client, description="Sun")

        response = await test_client.put(f"/api/trips/{trip['id']}", json={"description": "Rain"})

        assert response.status_code == 200
        assert response.json()["description"] == "Rain"
        assert response.json()["name"] == "Beach Vacation"

    @pytest.mark.asyncio
    async def test_update_rejects_null_name(self, test_client):
        trip = await _create_trip(test_client)

        response = await test_client.put(f"/api/trips/{trip['id']}", json={"name": None})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_cascades(self, test_client):
        trip = await _create_trip(test_client)
        destination = await _create_destination(test_client)
        await test_client.post(f"/api/trips/{trip['id']}/destinations/{destination['id']}")
        item = await test_client.post(
            "/api/packing-items", json={"name": "Towel", "amount": 2, "tripId": trip["id"]}
        )
        assert item.status_code == 201

        response = await test_client.delete(f"/api/trips/{trip['id']}")
        assert response.status_code == 204

        assert (await test_client.get(f"/api/trips/{trip['id']}")).status_code == 404
        assert (await test_client.get(f"/api/packing-items/{item.json()['id']}")).status_code == 404
        trips = await test_client.get(f"/api/destinations/{destination['id']}/trips")
        assert trips.json() == []

    @pytest.mark.asyncio
    async def test_search(self, test_client):
        await _create_trip(test_client, name="Beach Vacation", startDate="2023-06-01", endDate="2023-06-10")
        await _create_trip(test_client, name="beach party", startDate="2023-06-01", endDate="2023-06-10")
        await _create_trip(test_client, name="Beach Weekend", startDate="2023-07-01", endDate="2023-07-03")

        response = await test_client.get(
            "/api/trips/search",
            params={"query": "Beach", "startDate": "2023-06-01", "endDate": "2023-06-30"},
        )

        assert response.status_code == 200
        assert [t["name"] for t in response.json()] == ["Beach Vacation"]

    @pytest.mark.asyncio
    async def test_search_with_bad_date(self, test_client):
        response = await test_client.get("/api/trips/search", params={"startDate": "soon"})

        assert response.status_code == 400
        assert response.json() == {"errors": ["Invalid search parameters"]}

    @pytest.mark.asyncio
    async def test_trips_by_destination(self, test_client):
        trip = await _create_trip(test_client)
        await _create_trip(test_client, name="Unrelated")
        destination = await _create_destination(test_client)
        await test_client.post(f"/api/trips/{trip['id']}/destinations/{destination['id']}")

        response = await test_client.get(
            f"/api/trips/by-destination/{destination['id']}", params={"withRelations": "true"}
        )

        assert response.status_code == 200
        body = response.json()
        assert [t["id"] for t in body] == [trip["id"]]
        assert body[0]["tripToDestinations"][0]["destinationId"] == destination["id"]


class TestTripDestinationEndpoints:

    @pytest.mark.asyncio
    async def test_add_to_unknown_trip(self, test_client):
        destination = await _create_destination(test_client)

        response = await test_client.post(f"/api/trips/{uuid.uuid4()}/destinations/{destination['id']}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_add_unknown_destination(self, test_client):
        trip = await _create_trip(test_client)

        response = await test_client.post(f"/api/trips/{trip['id']}/destinations/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"errors": ["Trip or destination not found"]}

    @pytest.mark.asyncio
    async def test_update_window_and_list(self, test_client):
        trip = await _create_trip(test_client)
        destination = await _create_destination(test_client)
        url = f"/api/trips/{trip['id']}/destinations/{destination['id']}"
        await test_client.post(url, json={"startDate": "2023-06-16", "endDate": "2023-06-20"})

        response = await test_client.put(url, json={"endDate": "2023-06-21"})
        assert response.status_code == 200
        assert response.json()["startDate"] == "2023-06-16"
        assert response.json()["endDate"] == "2023-06-21"

        listing = await test_client.get(f"/api/trips/{trip['id']}/destinations")
        assert [link["destination"]["id"] for link in listing.json()] == [destination["id"]]

    @pytest.mark.asyncio
    async def test_update_unassociated_pair(self, test_client):
        trip = await _create_trip(test_client)
        destination = await _create_destination(test_client)

        response = await test_client.put(
            f"/api/trips/{trip['id']}/destinations/{destination['id']}",
            json={"startDate": "2023-06-16"},
        )

        assert response.status_code == 404
        assert response.json() == {"errors": ["Trip-destination relationship not found"]}

    @pytest.mark.asyncio
    async def test_remove(self, test_client):
        trip = await _create_trip(test_client)
        destination = await _create_destination(test_client)
        url = f"/api/trips/{trip['id']}/destinations/{destination['id']}"
        await test_client.post(url)

        response = await test_client.delete(url)

        assert response.status_code == 204
        assert (await test_client.get(f"/api/trips/{trip['id']}/destinations")).json() == []


class TestDestinationEndpoints:

    @pytest.mark.asyncio
    async def test_activities_list_is_returned_serialized(self, test_client):
        destination = await _create_destination(test_client, activities=["Swim", "Surf"])
        assert destination["activities"] == '["Swim","Surf"]'

    @pytest.mark.asyncio
    async def test_coordinates_must_come_together(self, test_client):
        response = await test_client.post("/api/destinations", json={"name": "Half", "latitude": 10})

        assert response.status_code == 400
        assert response.json() == {"errors": ["Latitude and longitude must be provided together"]}

    @pytest.mark.asyncio
    async def test_latitude_range(self, test_client):
        response = await test_client.post(
            "/api/destinations", json={"name": "Nowhere", "latitude": 91, "longitude": 0}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("latitude:")

    @pytest.mark.asyncio
    async def test_get_with_relations(self, test_client):
        trip = await _create_trip(test_client)
        destination = await _create_destination(test_client)
        await test_client.post(f"/api/trips/{trip['id']}/destinations/{destination['id']}")

        response = await test_client.get(
            f"/api/destinations/{destination['id']}", params={"withRelations": "true"}
        )

        links = response.json()["tripToDestinations"]
        assert [link["trip"]["name"] for link in links] == ["Beach Vacation"]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client):
        response = await test_client.delete(f"/api/destinations/{uuid.uuid4()}")
        assert response.status_code == 404


class TestFuelStationEndpoint:

    @pytest.mark.asyncio
    async def test_returns_stations_around_destination(self, test_client, fake_fuel_provider):
        destination = await _create_destination(test_client, latitude=52.52, longitude=13.40)

        response = await test_client.get(
            f"/api/destinations/{destination['id']}/fuel-stations", params={"radius": 3000}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["radius"] == 3000
        assert body["destination"] == {
            "id": destination["id"],
            "name": "Beach",
            "latitude": 52.52,
            "longitude": 13.40,
        }
        assert [s["name"] for s in body["data"]] == ["Aral"]
        assert "fuelTypes" not in body["data"][0]
        assert fake_fuel_provider.calls == [(13.40, 52.52, 3000)]

    @pytest.mark.asyncio
    async def test_default_radius(self, test_client, fake_fuel_provider):
        destination = await _create_destination(test_client, latitude=52.52, longitude=13.40)

        response = await test_client.get(f"/api/destinations/{destination['id']}/fuel-stations")

        assert response.json()["radius"] == 5000

    @pytest.mark.asyncio
    async def test_radius_too_large(self, test_client):
        destination = await _create_destination(test_client, latitude=52.52, longitude=13.40)

        response = await test_client.get(
            f"/api/destinations/{destination['id']}/fuel-stations", params={"radius": 25000}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_destination_without_coordinates(self, test_client, fake_fuel_provider):
        destination = await _create_destination(test_client)

        response = await test_client.get(f"/api/destinations/{destination['id']}/fuel-stations")

        assert response.status_code == 400
        assert fake_fuel_provider.calls == []


class TestPackingItemEndpoints:

    @pytest.mark.asyncio
    async def test_crud_and_trip_listing(self, test_client):
        trip = await _create_trip(test_client)

        created = await test_client.post("/api/packing-items", json={"name": "Towel", "tripId": trip["id"]})
        assert created.status_code == 201
        item = created.json()
        assert item["amount"] == 1
        assert item["tripId"] == trip["id"]

        updated = await test_client.put(f"/api/packing-items/{item['id']}", json={"amount": 3})
        assert updated.json()["amount"] == 3
        assert updated.json()["name"] == "Towel"

        detail = await test_client.get(f"/api/packing-items/{item['id']}", params={"withRelations": "true"})
        assert detail.json()["trip"]["id"] == trip["id"]

        listing = await test_client.get(f"/api/trips/{trip['id']}/packing-items")
        assert [i["id"] for i in listing.json()] == [item["id"]]

        cleared = await test_client.delete(f"/api/trips/{trip['id']}/packing-items")
        assert cleared.status_code == 204
        assert (await test_client.get(f"/api/trips/{trip['id']}/packing-items")).json() == []

    @pytest.mark.asyncio
    async def test_create_for_unknown_trip(self, test_client):
        response = await test_client.post(
            "/api/packing-items", json={"name": "Towel", "tripId": str(uuid.uuid4())}
        )

        assert response.status_code == 404
        assert response.json() == {"errors": ["Trip not found"]}

    @pytest.mark.asyncio
    async def test_amount_must_be_positive(self, test_client):
        trip = await _create_trip(test_client)

        response = await test_client.post(
            "/api/packing-items", json={"name": "Towel", "amount": 0, "tripId": trip["id"]}
        )

        assert response.status_code == 400


class TestDiaryEndpoints:

    @pytest.mark.asyncio
    async def test_create_entry_with_tags(self, test_client):
        user_id = str(uuid.uuid4())
        base = f"/api/users/{user_id}"

        created = await test_client.post(
            f"{base}/diary-entries",
            json={"title": "Day 1", "content": "Sunny", "tags": [{"name": "beach"}, {"name": "food"}]},
        )
        assert created.status_code == 201
        entry = created.json()
        assert {t["name"] for t in entry["tags"]} == {"beach", "food"}

        tags = await test_client.get(f"{base}/tags")
        assert [t["name"] for t in tags.json()] == ["beach", "food"]

        # Reusing an existing tag name does not create a duplicate
        await test_client.post(f"{base}/diary-entries", json={"title": "Day 2", "tags": [{"name": "beach"}]})
        assert len((await test_client.get(f"{base}/tags")).json()) == 2

        entries = await test_client.get(f"{base}/diary-entries")
        assert {e["title"] for e in entries.json()} == {"Day 1", "Day 2"}

    @pytest.mark.asyncio
    async def test_update_and_delete_entry(self, test_client):
        base = f"/api/users/{uuid.uuid4()}"
        entry = (await test_client.post(f"{base}/diary-entries", json={"title": "Day 1"})).json()

        updated = await test_client.put(f"{base}/diary-entries/{entry['id']}", json={"content": "Rainy"})
        assert updated.status_code == 200
        assert updated.json()["content"] == "Rainy"

        deleted = await test_client.delete(f"{base}/diary-entries/{entry['id']}")
        assert deleted.status_code == 204

        again = await test_client.delete(f"{base}/diary-entries/{entry['id']}")
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_entries_of_other_user_are_invisible(self, test_client):
        owner = f"/api/users/{uuid.uuid4()}"
        other = f"/api/users/{uuid.uuid4()}"
        entry = (await test_client.post(f"{owner}/diary-entries", json={"title": "Secret"})).json()

        assert (await test_client.get(f"{other}/diary-entries")).json() == []
        response = await test_client.put(f"{other}/diary-entries/{entry['id']}", json={"title": "Mine"})
        assert response.status_code == 404


class TestAmbientBehaviour:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/trips", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/trips")
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_security_headers_on_errors_too(self, test_client):
        response = await test_client.get(f"/api/trips/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
