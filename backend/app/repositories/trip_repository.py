"""
TripPlanner Backend: Trip Repository
======================================

What:  Persistence for trips, including name/date search and the lookup of
       trips visiting a given destination.
Who:   TripService, DestinationService and PackingItemService (existence
       checks).

Relations (with_relations=True):
    trip_to_destinations -> destination, and packing_items, all loaded with
    selectinload so each relation costs one extra query regardless of the
    number of trips.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Sequence, Union

from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from app.models.trip import Trip
from app.models.trip_to_destination import TripToDestination
from app.repositories.base import SQLAlchemyRepository
from app.utils.date_utils import to_calendar_date

logger = logging.getLogger(__name__)


class TripRepository(SQLAlchemyRepository[Trip]):
    model = Trip
    serialized_list_fields = ("participants",)
    date_fields = ("start_date", "end_date")

    def relation_options(self) -> Sequence[LoaderOption]:
        return (
            selectinload(Trip.trip_to_destinations).selectinload(TripToDestination.destination),
            selectinload(Trip.packing_items),
        )

    async def search(
        self,
        name_query: Optional[str] = None,
        start_date: Union[date, str, None] = None,
        end_date: Union[date, str, None] = None,
        with_relations: bool = False,
    ) -> List[Trip]:
        """
        Find trips by name substring and/or date window.

        The name match is case-sensitive and treats %, _ and the escape
        character in the query literally. With both dates given, only trips
        lying entirely inside [start_date, end_date] match. With one date,
        the corresponding bound alone is applied. Trips with a NULL date
        never satisfy a date condition on that column.
        """
        stmt = self.select_stmt(with_relations)

        if name_query:
            stmt = stmt.where(Trip.name.contains(name_query, autoescape=True))

        start = to_calendar_date(start_date)
        end = to_calendar_date(end_date)
        if start and end:
            stmt = stmt.where(Trip.start_date >= start, Trip.end_date <= end)
        elif start:
            stmt = stmt.where(Trip.start_date >= start)
        elif end:
            stmt = stmt.where(Trip.end_date <= end)

        async with self._session_factory() as session:
            result = await session.execute(stmt.order_by(Trip.created_at))
            trips = list(result.scalars().all())

        logger.debug(
            "Trip search query=%r start=%s end=%s matched %d",
            name_query, start, end, len(trips),
        )
        return trips

    async def list_by_destination(
        self, destination_id: uuid.UUID, with_relations: bool = False
    ) -> List[Trip]:
        """
        Trips that have an association with the destination.

        With relations, each trip's trip_to_destinations holds only the
        association for this destination (with its destination loaded), and
        packing items are loaded too.
        """
        links_destination = TripToDestination.destination_id == destination_id
        stmt = self.select_stmt(False).where(Trip.trip_to_destinations.any(links_destination))
        if with_relations:
            stmt = stmt.options(
                selectinload(Trip.trip_to_destinations.and_(links_destination))
                .selectinload(TripToDestination.destination),
                selectinload(Trip.packing_items),
            )

        async with self._session_factory() as session:
            result = await session.execute(stmt.order_by(Trip.created_at))
            return list(result.scalars().all())
