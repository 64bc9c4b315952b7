"""
TripPlanner Backend: Trip SQLAlchemy Model
============================================

What:  ORM model for the `trips` table.
Who:   TripRepository for CRUD and search; Alembic for schema management.

Table Design Rationale:
    - start_date / end_date: DATE columns, a trip is planned in calendar days
    - participants: TEXT holding a JSON-encoded list of names. The encoding
      happens at the repository edge (see app.utils.serialized_list)
    - packing_items / trip_to_destinations cascade on delete, both in the
      database (ON DELETE CASCADE) and in the ORM (passive_deletes)
"""

from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.common import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.packing_item import PackingItem
    from app.models.trip_to_destination import TripToDestination


class Trip(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A planned journey with a date range, participants and packing list."""

    __tablename__ = "trips"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    participants: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Relationships ─────────────────────────────────────────────────────
    # lazy="raise": relations are only available when a repository asked for
    # them with with_relations=True; accidental lazy loads fail loudly
    trip_to_destinations: Mapped[List["TripToDestination"]] = relationship(
        back_populates="trip",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    packing_items: Mapped[List["PackingItem"]] = relationship(
        back_populates="trip",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Trip(id={self.id}, name='{self.name}')>"
