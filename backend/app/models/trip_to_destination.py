"""
TripPlanner Backend: Trip/Destination Association Model
=========================================================

What:  ORM model for the `trip_to_destinations` association table.
Why:   A destination visited on a trip has its own date window inside the
       trip's range, so the many-to-many link is a full entity.
How:   Composite primary key (trip_id, destination_id) makes a pair unique;
       both foreign keys cascade on delete.
"""

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.common import utcnow

if TYPE_CHECKING:
    from app.models.destination import Destination
    from app.models.trip import Trip


class TripToDestination(Base):
    __tablename__ = "trip_to_destinations"

    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("trips.id", ondelete="CASCADE"),
        primary_key=True,
    )
    destination_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("destinations.id", ondelete="CASCADE"),
        primary_key=True,
    )
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    trip: Mapped["Trip"] = relationship(back_populates="trip_to_destinations", lazy="raise")
    destination: Mapped["Destination"] = relationship(
        back_populates="trip_to_destinations", lazy="raise"
    )

    def __repr__(self) -> str:
        return (
            f"<TripToDestination(trip_id={self.trip_id}, "
            f"destination_id={self.destination_id})>"
        )
