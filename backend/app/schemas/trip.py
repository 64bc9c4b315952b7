"""
TripPlanner Backend: Trip & Association Schemas
=================================================

What:  Request bodies and response models for trips and trip/destination
       associations.
Who:   Trip routes (validation) and TripService (response conversion).

Partial updates:
    TripUpdate fields default to None, but only the fields the client
    actually sent are written (model_dump(exclude_unset=True)). Sending
    "name": null is rejected because the column is NOT NULL.
"""

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CalendarDate, CamelModel, SerializedList, ensure_date_order, reject_null
from app.schemas.destination import DestinationResponse
from app.schemas.packing_item import PackingItemResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TripCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: CalendarDate = None
    end_date: CalendarDate = None
    image: Optional[str] = Field(default=None, description="Image URL or path")
    participants: Optional[SerializedList] = Field(
        default=None,
        description="Participant names as a list or an already serialized JSON array",
    )

    @model_validator(mode="after")
    def check_date_order(self) -> "TripCreate":
        ensure_date_order(self.start_date, self.end_date)
        return self


class TripUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: CalendarDate = None
    end_date: CalendarDate = None
    image: Optional[str] = None
    participants: Optional[SerializedList] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        return reject_null(v, "name")

    @model_validator(mode="after")
    def check_date_order(self) -> "TripUpdate":
        ensure_date_order(self.start_date, self.end_date)
        return self


class TripDestinationDates(CamelModel):
    """Optional date window of a destination within a trip."""

    start_date: CalendarDate = None
    end_date: CalendarDate = None

    @model_validator(mode="after")
    def check_date_order(self) -> "TripDestinationDates":
        ensure_date_order(self.start_date, self.end_date)
        return self


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TripResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    image: Optional[str] = None
    participants: Optional[str] = Field(
        default=None, description="JSON-encoded list of participant names"
    )
    created_at: datetime
    updated_at: datetime


class TripToDestinationResponse(CamelModel):
    trip_id: uuid.UUID
    destination_id: uuid.UUID
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class TripToDestinationWithDestination(TripToDestinationResponse):
    destination: DestinationResponse


class TripToDestinationWithTrip(TripToDestinationResponse):
    trip: TripResponse


class TripDetailResponse(TripResponse):
    """A trip with its destinations (each with its own window) and packing list."""

    trip_to_destinations: List[TripToDestinationWithDestination] = Field(default_factory=list)
    packing_items: List[PackingItemResponse] = Field(default_factory=list)


class DestinationDetailResponse(DestinationResponse):
    """A destination with the trips that visit it."""

    trip_to_destinations: List[TripToDestinationWithTrip] = Field(default_factory=list)


class PackingItemDetailResponse(PackingItemResponse):
    trip: TripResponse
