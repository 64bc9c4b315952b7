"""
TripPlanner Backend: Diary Entry & Tag Schemas
================================================

Tags are referenced on entry creation either by id (an existing tag of the
same user) or by name (created on the fly if the user does not have it).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CamelModel, reject_null


class TagReference(CamelModel):
    id: Optional[uuid.UUID] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)

    @model_validator(mode="after")
    def check_reference(self) -> "TagReference":
        if self.id is None and self.name is None:
            raise ValueError("A tag needs an id or a name")
        return self


class DiaryEntryCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = ""
    tags: List[TagReference] = Field(default_factory=list)


class DiaryEntryUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def not_null(cls, v, info):
        return reject_null(v, info.field_name)


class TagResponse(CamelModel):
    id: uuid.UUID
    name: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class DiaryEntryResponse(CamelModel):
    id: uuid.UUID
    title: str
    content: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class DiaryEntryWithTagsResponse(DiaryEntryResponse):
    tags: List[TagResponse] = Field(default_factory=list)
