"""Packing item request and response schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, PositiveInt, field_validator

from app.schemas.common import CamelModel, reject_null


class PackingItemCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    amount: PositiveInt = 1
    trip_id: uuid.UUID


class PackingItemUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[PositiveInt] = None
    trip_id: Optional[uuid.UUID] = None

    @field_validator("name", "amount", "trip_id")
    @classmethod
    def not_null(cls, v, info):
        return reject_null(v, info.field_name)


class PackingItemResponse(CamelModel):
    id: uuid.UUID
    name: str
    amount: int
    trip_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
