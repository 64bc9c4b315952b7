"""
TripPlanner Backend: Fuel Station Schemas
===========================================

What:  The normalized shape of a fuel station, independent of the places
       provider, and the envelope returned by the fuel-station endpoint.

Example response:
    {
        "data": [
            {
                "id": "51a3...",
                "name": "Aral",
                "distance": 412,
                "address": {"formatted": "Hauptstr. 1, 10115 Berlin, Germany", ...},
                "location": {"latitude": 52.53, "longitude": 13.38},
                "fuelTypes": ["diesel", "e10", "electric"],
                "openingHours": {"open24h": true, "text": "24/7"}
            }
        ],
        "destination": {"id": "...", "name": "Berlin", "latitude": 52.52, "longitude": 13.40},
        "radius": 5000
    }

fuelTypes and openingHours are omitted when the provider has no data.
"""

import uuid
from typing import List, Optional

from pydantic import Field

from app.schemas.common import CamelModel

DEFAULT_RADIUS_METERS = 5000
MAX_RADIUS_METERS = 20000


class FuelStationAddress(CamelModel):
    formatted: str = ""
    street: str = ""
    city: str = ""
    postcode: str = ""
    country: str = ""


class FuelStationLocation(CamelModel):
    latitude: float
    longitude: float


class OpeningHours(CamelModel):
    open24h: bool
    text: str


class FuelStation(CamelModel):
    id: str
    name: str
    distance: Optional[float] = Field(default=None, description="Distance in meters")
    address: FuelStationAddress
    location: FuelStationLocation
    fuel_types: Optional[List[str]] = None
    opening_hours: Optional[OpeningHours] = None


class FuelStationDestination(CamelModel):
    id: uuid.UUID
    name: str
    latitude: float
    longitude: float


class FuelStationsResponse(CamelModel):
    data: List[FuelStation]
    destination: FuelStationDestination
    radius: int
