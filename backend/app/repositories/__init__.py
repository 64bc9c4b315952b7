# Repositories package init
"""
TripPlanner Backend: Repository Layer
=======================================

What:  ORM query layer, one repository per entity.
Why:   Services stay free of SQL; repositories stay free of HTTP.
How:   Each repository is built once with the async_sessionmaker and opens a
       short-lived session per method call.

Repository Inventory:
    - TripRepository:                CRUD, search, trips by destination
    - DestinationRepository:         CRUD
    - TripToDestinationRepository:   association add/update/remove/list
    - PackingItemRepository:         CRUD, per-trip listing and bulk delete
    - TagRepository:                 per-user tags
    - DiaryEntryRepository:          per-user diary entries and tag links
"""

from app.repositories.destination_repository import DestinationRepository
from app.repositories.diary_repository import DiaryEntryRepository, TagRepository
from app.repositories.packing_item_repository import PackingItemRepository
from app.repositories.trip_repository import TripRepository
from app.repositories.trip_to_destination_repository import TripToDestinationRepository

__all__ = [
    "DestinationRepository",
    "DiaryEntryRepository",
    "PackingItemRepository",
    "TagRepository",
    "TripRepository",
    "TripToDestinationRepository",
]
