"""
TripPlanner Backend: Diary Service
====================================

What:  Per-user diary entries and tags.
How:   Entry creation runs as separate repository calls:
           1. insert the entry
           2. create the tags referenced only by name
           3. look up every referenced tag of the user (by id or name)
           4. link the found tags to the entry
       A failure between steps leaves the earlier steps committed.
Who:   Called by the diary route handlers.
"""

import logging
import uuid
from typing import List, Union

from app.exceptions import NotFoundError
from app.repositories.diary_repository import DiaryEntryRepository, TagRepository
from app.schemas.diary import (
    DiaryEntryCreate,
    DiaryEntryResponse,
    DiaryEntryUpdate,
    DiaryEntryWithTagsResponse,
    TagResponse,
)
from app.services.common import database_errors, parse_uuid

logger = logging.getLogger(__name__)

DiaryEntryOut = Union[DiaryEntryResponse, DiaryEntryWithTagsResponse]


class DiaryService:
    def __init__(self, entries: DiaryEntryRepository, tags: TagRepository):
        self._entries = entries
        self._tags = tags

    async def _require_entry(self, entry_id: uuid.UUID, user_id: uuid.UUID, message: str) -> None:
        with database_errors(message, diary_entry_id=str(entry_id)):
            entry = await self._entries.get_of_user(entry_id, user_id)
        if entry is None:
            raise NotFoundError(resource="diary entry", resource_id=str(entry_id))

    async def list_tags(self, user_id: str) -> List[TagResponse]:
        uid = parse_uuid(user_id, "user")
        with database_errors("Error retrieving tags"):
            tags = await self._tags.list_by_user(uid)
        return [TagResponse.model_validate(t) for t in tags]

    async def list_entries(self, user_id: str, with_relations: bool = True) -> List[DiaryEntryOut]:
        uid = parse_uuid(user_id, "user")
        with database_errors("Error retrieving diary entries"):
            entries = await self._entries.list_by_user(uid, with_relations)
        model = DiaryEntryWithTagsResponse if with_relations else DiaryEntryResponse
        return [model.model_validate(e) for e in entries]

    async def create_entry(self, user_id: str, payload: DiaryEntryCreate) -> DiaryEntryWithTagsResponse:
        uid = parse_uuid(user_id, "user")
        tag_ids = [t.id for t in payload.tags if t.id is not None]
        tag_names = [t.name for t in payload.tags if t.id is None and t.name]

        with database_errors("Error creating diary entry"):
            entry = await self._entries.create_for_user(
                uid, payload.model_dump(exclude={"tags"})
            )
            if tag_names:
                await self._tags.create_for_user(uid, tag_names)
            if tag_ids or tag_names:
                tags = await self._tags.list_by_names_or_ids(tag_names, tag_ids, uid)
                await self._entries.associate_tags(entry.id, [t.id for t in tags])
            created = await self._entries.get_of_user(entry.id, uid, with_relations=True)

        if created is None:
            raise NotFoundError(resource="diary entry", resource_id=str(entry.id))
        logger.info("Diary entry %s created with %d tag(s)", created.id, len(created.tags))
        return DiaryEntryWithTagsResponse.model_validate(created)

    async def update_entry(
        self, user_id: str, entry_id: str, payload: DiaryEntryUpdate
    ) -> DiaryEntryResponse:
        uid = parse_uuid(user_id, "user")
        eid = parse_uuid(entry_id, "diary entry")
        await self._require_entry(eid, uid, "Error updating diary entry")
        with database_errors("Error updating diary entry", diary_entry_id=entry_id):
            entry = await self._entries.update_of_user(eid, uid, payload.model_dump(exclude_unset=True))
        if entry is None:
            raise NotFoundError(resource="diary entry", resource_id=entry_id)
        return DiaryEntryResponse.model_validate(entry)

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        uid = parse_uuid(user_id, "user")
        eid = parse_uuid(entry_id, "diary entry")
        await self._require_entry(eid, uid, "Error deleting diary entry")
        with database_errors("Error deleting diary entry", diary_entry_id=entry_id):
            await self._entries.delete_of_user(eid, uid)
