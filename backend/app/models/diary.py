"""
TripPlanner Backend: Diary Entry & Tag Models
===============================================

What:  ORM models for `diary_entries`, `tags` and the `diary_entry_to_tag`
       join table.
Why:   Travellers keep a per-user diary; entries are labelled with tags
       the same user owns.
How:   user_id is a plain UUID column. Accounts are managed outside this
       service, so there is no users table to reference.
"""

import uuid
from typing import List

from sqlalchemy import Column, ForeignKey, String, Table, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.common import TimestampMixin, UUIDPrimaryKeyMixin


diary_entry_to_tag = Table(
    "diary_entry_to_tag",
    Base.metadata,
    Column(
        "diary_entry_id",
        Uuid,
        ForeignKey("diary_entries.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Uuid,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Tag(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tags_user_id_name"),
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class DiaryEntry(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "diary_entries"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    tags: Mapped[List[Tag]] = relationship(
        secondary=diary_entry_to_tag,
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<DiaryEntry(id={self.id}, title='{self.title}')>"
