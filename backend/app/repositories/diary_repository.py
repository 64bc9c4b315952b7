"""
TripPlanner Backend: Diary Entry & Tag Repositories
=====================================================

What:  Per-user persistence for diary entries and the tags attached to them.
How:   Every query is filtered by user_id; an entry or tag of one user is
       invisible to every other user, including for updates and deletes.
"""

import logging
import uuid
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import delete, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.models.common import utcnow
from app.models.diary import DiaryEntry, Tag, diary_entry_to_tag

logger = logging.getLogger(__name__)


class TagRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_by_user(self, user_id: uuid.UUID) -> List[Tag]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Tag).where(Tag.user_id == user_id).order_by(Tag.name)
            )
            return list(result.scalars().all())

    async def create_for_user(self, user_id: uuid.UUID, names: Iterable[str]) -> List[Tag]:
        """Create the named tags the user does not have yet; returns only the new ones."""
        wanted = list(dict.fromkeys(name for name in names if name))
        if not wanted:
            return []

        async with self._session_factory() as session:
            existing = await session.execute(
                select(Tag.name).where(Tag.user_id == user_id, Tag.name.in_(wanted))
            )
            known = set(existing.scalars().all())
            created = [Tag(user_id=user_id, name=name) for name in wanted if name not in known]
            session.add_all(created)
            await session.commit()

        logger.debug("Created %d tag(s) for user %s", len(created), user_id)
        return created

    async def list_by_names_or_ids(
        self,
        names: Iterable[str],
        ids: Iterable[uuid.UUID],
        user_id: uuid.UUID,
    ) -> List[Tag]:
        names = list(names)
        ids = list(ids)
        if not names and not ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(Tag).where(
                    Tag.user_id == user_id,
                    or_(Tag.name.in_(names), Tag.id.in_(ids)),
                )
            )
            return list(result.scalars().all())


class DiaryEntryRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _select(self, with_relations: bool):
        stmt = select(DiaryEntry)
        if with_relations:
            stmt = stmt.options(selectinload(DiaryEntry.tags))
        return stmt

    async def list_by_user(
        self, user_id: uuid.UUID, with_relations: bool = True
    ) -> List[DiaryEntry]:
        stmt = (
            self._select(with_relations)
            .where(DiaryEntry.user_id == user_id)
            .order_by(DiaryEntry.created_at)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_of_user(
        self, entry_id: uuid.UUID, user_id: uuid.UUID, with_relations: bool = False
    ) -> Optional[DiaryEntry]:
        stmt = self._select(with_relations).where(
            DiaryEntry.id == entry_id, DiaryEntry.user_id == user_id
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def create_for_user(self, user_id: uuid.UUID, data: Mapping[str, Any]) -> DiaryEntry:
        async with self._session_factory() as session:
            entry = DiaryEntry(user_id=user_id, **data)
            session.add(entry)
            await session.commit()
            return entry

    async def update_of_user(
        self, entry_id: uuid.UUID, user_id: uuid.UUID, data: Mapping[str, Any]
    ) -> Optional[DiaryEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(DiaryEntry).where(
                    DiaryEntry.id == entry_id, DiaryEntry.user_id == user_id
                )
            )
            entry = result.scalar_one_or_none()
            if entry is None:
                return None
            for key, value in data.items():
                setattr(entry, key, value)
            entry.updated_at = utcnow()
            await session.commit()
            return entry

    async def delete_of_user(self, entry_id: uuid.UUID, user_id: uuid.UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(
                delete(DiaryEntry).where(
                    DiaryEntry.id == entry_id, DiaryEntry.user_id == user_id
                )
            )
            await session.commit()

    async def associate_tags(self, entry_id: uuid.UUID, tag_ids: Iterable[uuid.UUID]) -> None:
        """Link tags to an entry; pairs that are already linked are skipped."""
        wanted = list(dict.fromkeys(tag_ids))
        if not wanted:
            return
        async with self._session_factory() as session:
            existing = await session.execute(
                select(diary_entry_to_tag.c.tag_id).where(
                    diary_entry_to_tag.c.diary_entry_id == entry_id,
                    diary_entry_to_tag.c.tag_id.in_(wanted),
                )
            )
            linked = set(existing.scalars().all())
            rows = [
                {"diary_entry_id": entry_id, "tag_id": tag_id}
                for tag_id in wanted
                if tag_id not in linked
            ]
            if rows:
                await session.execute(insert(diary_entry_to_tag), rows)
            await session.commit()
