"""
TripPlanner Backend: Service Helpers
======================================

Shared pieces of the service contract:

    parse_uuid()       path identifiers → UUID, or a 400 with a message naming
                       the resource ("Invalid trip id format. ...")
    database_errors()  wraps one repository call; application errors pass
                       through untouched, anything else is logged with its
                       stack and re-raised as DatabaseError carrying the
                       per-operation message ("Error creating trip")
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

from app.exceptions import DatabaseError, TripPlannerError, ValidationError

logger = logging.getLogger(__name__)


def parse_uuid(value: str, resource: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(
            message=f"Invalid {resource} id format. Please provide a valid UUID.",
            field=f"{resource} id",
            context={"value": str(value)},
        ) from None


@contextmanager
def database_errors(message: str, **context: Any) -> Iterator[None]:
    try:
        yield
    except TripPlannerError:
        raise
    except Exception as e:
        logger.error("%s: %s", message, str(e), exc_info=True)
        raise DatabaseError(
            message=message,
            context={**context, "original_error": type(e).__name__},
        ) from e
