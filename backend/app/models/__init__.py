# Models package init
"""
Importing this package registers every table with Base.metadata, which
Alembic and the test suite rely on.
"""

from app.models.destination import Destination
from app.models.diary import DiaryEntry, Tag, diary_entry_to_tag
from app.models.packing_item import PackingItem
from app.models.trip import Trip
from app.models.trip_to_destination import TripToDestination

__all__ = [
    "Destination",
    "DiaryEntry",
    "PackingItem",
    "Tag",
    "Trip",
    "TripToDestination",
    "diary_entry_to_tag",
]
