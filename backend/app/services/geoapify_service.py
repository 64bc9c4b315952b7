"""
TripPlanner Backend: Geoapify Places Integration
==================================================

What:  Fuel-station lookup around a point using the Geoapify Places API.
How:   One GET to /v2/places per lookup through a shared httpx.AsyncClient,
       then each GeoJSON feature is reshaped into a FuelStation.
Who:   FuelStationService, through the FuelStationProvider interface.

Request:
    GET https://api.geoapify.com/v2/places
        ?categories=service.vehicle.fuel
        &filter=circle:<lon>,<lat>,<radius>
        &bias=proximity:<lon>,<lat>
        &limit=20
        &apiKey=<key>

Failure Handling:
    Timeouts, connection errors and non-2xx answers raise
    ExternalServiceError immediately. There is no retry and no circuit
    breaker; the client timeout bounds the worst case.

Fuel types:
    If the place carries `fuel_options`, its keys decide the list:
        diesel → diesel, e10 → e10, e5 | octane_95 → e5/95,
        e98 | octane_98 → e98, lpg → lpg, cng → cng
    Otherwise the flat properties fuel_diesel, fuel_e10, fuel_octane_95,
    fuel_octane_98 and fuel_lpg are used. "electric" is appended when
    facilities.ev_charging or ev_charging is set.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import Settings
from app.exceptions import ExternalServiceError
from app.schemas.fuel_station import (
    FuelStation,
    FuelStationAddress,
    FuelStationLocation,
    MAX_RADIUS_METERS,
    OpeningHours,
)
from app.services.places_base import FuelStationProvider

logger = logging.getLogger(__name__)

FUEL_CATEGORY = "service.vehicle.fuel"
RESULT_LIMIT = 20
UNKNOWN_STATION_NAME = "Unknown Gas Station"

# (label, keys in fuel_options that enable it)
_FUEL_OPTION_KEYS = (
    ("diesel", ("diesel",)),
    ("e10", ("e10",)),
    ("e5/95", ("e5", "octane_95")),
    ("e98", ("e98", "octane_98")),
    ("lpg", ("lpg",)),
    ("cng", ("cng",)),
)

# (label, flat property) used when fuel_options is absent
_FLAT_FUEL_PROPERTIES = (
    ("diesel", "fuel_diesel"),
    ("e10", "fuel_e10"),
    ("e5/95", "fuel_octane_95"),
    ("e98", "fuel_octane_98"),
    ("lpg", "fuel_lpg"),
)


def extract_fuel_types(props: Dict[str, Any]) -> Optional[List[str]]:
    fuel_types: List[str] = []
    options = props.get("fuel_options")
    if options:
        for label, keys in _FUEL_OPTION_KEYS:
            if any(options.get(key) for key in keys):
                fuel_types.append(label)
    else:
        for label, prop in _FLAT_FUEL_PROPERTIES:
            if props.get(prop):
                fuel_types.append(label)

    facilities = props.get("facilities") or {}
    if facilities.get("ev_charging") or props.get("ev_charging"):
        fuel_types.append("electric")

    return fuel_types or None


def feature_to_station(feature: Dict[str, Any]) -> FuelStation:
    """Reshape one GeoJSON feature from the Places API into a FuelStation."""
    props = feature.get("properties") or {}
    coordinates = (feature.get("geometry") or {}).get("coordinates") or [0.0, 0.0]

    opening_hours = props.get("opening_hours")
    return FuelStation(
        id=str(props.get("place_id") or props.get("id") or ""),
        name=props.get("name") or UNKNOWN_STATION_NAME,
        distance=props.get("distance"),
        address=FuelStationAddress(
            formatted=props.get("formatted") or "",
            street=props.get("street") or "",
            city=props.get("city") or "",
            postcode=props.get("postcode") or "",
            country=props.get("country") or "",
        ),
        # GeoJSON order is [longitude, latitude]
        location=FuelStationLocation(latitude=coordinates[1], longitude=coordinates[0]),
        fuel_types=extract_fuel_types(props),
        opening_hours=(
            OpeningHours(open24h="24/7" in opening_hours, text=opening_hours)
            if opening_hours
            else None
        ),
    )


class GeoapifyService(FuelStationProvider):
    """
    Geoapify implementation of FuelStationProvider.

    The httpx client is created once and shared by all requests; pass
    `client` to inject one (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.geoapify.com/v2/places",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeoapifyService":
        return cls(
            api_key=settings.geoapify_api_key,
            base_url=settings.geoapify_base_url,
            timeout=settings.geoapify_timeout_seconds,
        )

    async def find_fuel_stations(
        self, longitude: float, latitude: float, radius: int = 5000
    ) -> List[FuelStation]:
        radius = min(radius, MAX_RADIUS_METERS)
        params = {
            "categories": FUEL_CATEGORY,
            "filter": f"circle:{longitude},{latitude},{radius}",
            "bias": f"proximity:{longitude},{latitude}",
            "limit": RESULT_LIMIT,
            "apiKey": self.api_key,
        }

        try:
            response = await self._client.get(self.base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            # Never log params: they carry the API key
            logger.error("Geoapify request failed: %s", type(e).__name__)
            raise ExternalServiceError(
                message="Failed to fetch fuel stations from Geoapify API",
                context={"error_type": type(e).__name__},
            ) from e

        features = payload.get("features") if isinstance(payload, dict) else None
        if not features:
            return []

        stations = [feature_to_station(feature) for feature in features]
        logger.info(
            "Geoapify returned %d fuel station(s) within %dm of (%s, %s)",
            len(stations), radius, latitude, longitude,
        )
        return stations

    async def close(self) -> None:
        await self._client.aclose()
