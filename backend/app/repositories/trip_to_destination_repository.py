"""
TripPlanner Backend: Trip/Destination Association Repository
==============================================================

What:  Adds, re-dates and removes the link between a trip and a destination.
Why:   The association carries its own date window, so it is managed on its
       own rather than through the Trip or Destination collections.

Error translation (add):
    duplicate (trip, destination) pair    -> ConflictError     (409)
    trip or destination does not exist    -> NotFoundError     (404)
    any other integrity failure           -> propagates unchanged
"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Union

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.exceptions import ConflictError, NotFoundError
from app.models.common import utcnow
from app.models.trip_to_destination import TripToDestination
from app.repositories.errors import IntegrityViolation, classify_integrity_error
from app.utils.date_utils import to_calendar_date

logger = logging.getLogger(__name__)

DateInput = Union[date, str, None]


class TripToDestinationRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def add(
        self,
        trip_id: uuid.UUID,
        destination_id: uuid.UUID,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> TripToDestination:
        link = TripToDestination(
            trip_id=trip_id,
            destination_id=destination_id,
            start_date=to_calendar_date(start_date),
            end_date=to_calendar_date(end_date),
        )
        async with self._session_factory() as session:
            session.add(link)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                violation = classify_integrity_error(exc)
                context = {"trip_id": str(trip_id), "destination_id": str(destination_id)}
                if violation is IntegrityViolation.UNIQUE:
                    raise ConflictError(
                        message="This destination is already associated with the trip",
                        context=context,
                    ) from exc
                if violation is IntegrityViolation.FOREIGN_KEY:
                    raise NotFoundError(
                        resource="trip or destination",
                        message="Trip or destination not found",
                        context=context,
                    ) from exc
                raise

        logger.info("Destination %s added to trip %s", destination_id, trip_id)
        return link

    async def update(
        self,
        trip_id: uuid.UUID,
        destination_id: uuid.UUID,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> Optional[TripToDestination]:
        """
        Change the date window of an existing association.

        Only the dates that are given are written; None leaves the stored
        value as it is. Returns None when the pair is not associated.
        """
        async with self._session_factory() as session:
            link = await session.get(TripToDestination, (trip_id, destination_id))
            if link is None:
                return None
            if start_date is not None:
                link.start_date = to_calendar_date(start_date)
            if end_date is not None:
                link.end_date = to_calendar_date(end_date)
            link.updated_at = utcnow()
            await session.commit()
            return link

    async def remove(self, trip_id: uuid.UUID, destination_id: uuid.UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(
                delete(TripToDestination).where(
                    TripToDestination.trip_id == trip_id,
                    TripToDestination.destination_id == destination_id,
                )
            )
            await session.commit()

    async def list_trips_for_destination(self, destination_id: uuid.UUID) -> List[TripToDestination]:
        stmt = (
            select(TripToDestination)
            .where(TripToDestination.destination_id == destination_id)
            .options(selectinload(TripToDestination.trip))
            .order_by(TripToDestination.created_at)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def list_destinations_for_trip(self, trip_id: uuid.UUID) -> List[TripToDestination]:
        stmt = (
            select(TripToDestination)
            .where(TripToDestination.trip_id == trip_id)
            .options(selectinload(TripToDestination.destination))
            .order_by(TripToDestination.created_at)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())
