"""
TripPlanner Backend: Packing Item SQLAlchemy Model
====================================================

What:  ORM model for the `packing_items` table. Each item belongs to exactly
       one trip and is deleted together with it.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.common import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.trip import Trip


class PackingItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "packing_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default=text("1"),
    )
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("trips.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    trip: Mapped["Trip"] = relationship(back_populates="packing_items", lazy="raise")

    def __repr__(self) -> str:
        return f"<PackingItem(id={self.id}, name='{self.name}', amount={self.amount})>"
