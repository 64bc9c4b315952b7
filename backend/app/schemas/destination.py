"""
TripPlanner Backend: Destination Schemas
==========================================

Coordinates are optional, but a destination has either both latitude and
longitude or neither. The fuel-station lookup relies on that.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CamelModel, SerializedList, reject_null

COORDINATES_PAIR_MESSAGE = "Latitude and longitude must be provided together"


def _check_coordinate_pair(model: CamelModel) -> None:
    sent = model.model_fields_set
    if ("latitude" in sent) != ("longitude" in sent):
        raise ValueError(COORDINATES_PAIR_MESSAGE)
    if (model.latitude is None) != (model.longitude is None):
        raise ValueError(COORDINATES_PAIR_MESSAGE)


class DestinationCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    activities: Optional[SerializedList] = None
    photos: Optional[SerializedList] = Field(default=None, description="Photo URLs")
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def check_coordinates(self) -> "DestinationCreate":
        _check_coordinate_pair(self)
        return self


class DestinationUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    activities: Optional[SerializedList] = None
    photos: Optional[SerializedList] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        return reject_null(v, "name")

    @model_validator(mode="after")
    def check_coordinates(self) -> "DestinationUpdate":
        _check_coordinate_pair(self)
        return self


class DestinationResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    activities: Optional[str] = None
    photos: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: datetime
    updated_at: datetime
