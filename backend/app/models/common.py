"""
TripPlanner Backend: Shared Column Definitions
================================================

What:  Mixins for the UUID primary key and the created/updated timestamps.
Why:   Trips, destinations, packing items, tags and diary entries all carry
       the same identifier and audit columns.
How:   Declarative mixins; subclasses pick them up through normal inheritance.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UUIDPrimaryKeyMixin:
    # Generated in Python so SQLite and PostgreSQL behave the same; the
    # migration additionally sets gen_random_uuid() as the server default
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
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
