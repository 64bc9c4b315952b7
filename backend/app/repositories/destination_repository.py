"""Persistence for destinations; relations are the trip associations with their trips."""

from typing import Sequence

from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from app.models.destination import Destination
from app.models.trip_to_destination import TripToDestination
from app.repositories.base import SQLAlchemyRepository


class DestinationRepository(SQLAlchemyRepository[Destination]):
    model = Destination
    serialized_list_fields = ("activities", "photos")

    def relation_options(self) -> Sequence[LoaderOption]:
        return (
            selectinload(Destination.trip_to_destinations).selectinload(TripToDestination.trip),
        )
