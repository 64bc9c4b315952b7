"""
TripPlanner Backend: Destination SQLAlchemy Model
===================================================

What:  ORM model for the `destinations` table.

Columns:
    - activities / photos: TEXT holding JSON-encoded lists
    - latitude / longitude: optional, a destination without coordinates
      cannot be used for a fuel-station lookup
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.common import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.trip_to_destination import TripToDestination


class Destination(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A place that can be visited on one or more trips."""

    __tablename__ = "destinations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    activities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photos: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    trip_to_destinations: Mapped[List["TripToDestination"]] = relationship(
        back_populates="destination",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}')>"
