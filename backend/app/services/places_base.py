"""
TripPlanner Backend: Abstract Fuel-Station Provider
=====================================================

What:  Abstract base class defining the contract for fuel-station lookups.
Why:   FuelStationService depends on this interface, not on Geoapify, so the
       provider can be replaced (or faked in tests) without touching callers.
How:   Concrete implementations inherit from FuelStationProvider and
       implement find_fuel_stations() and close().
"""

from abc import ABC, abstractmethod
from typing import List

from app.schemas.fuel_station import FuelStation


class FuelStationProvider(ABC):
    """
    Contract:
        - find_fuel_stations() returns stations inside a circle, nearest first
        - an empty result is an empty list, never None
        - every transport or upstream failure is raised as ExternalServiceError
        - no retries; one call to the provider per lookup
    """

    @abstractmethod
    async def find_fuel_stations(
        self, longitude: float, latitude: float, radius: int
    ) -> List[FuelStation]:
        """
        Args:
            longitude: Centre of the search circle.
            latitude:  Centre of the search circle.
            radius:    Circle radius in meters.

        Raises:
            ExternalServiceError: The provider could not be reached or answered
                with an error status.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources; called once at application shutdown."""
        ...
