"""
TripPlanner Backend: Shared Schema Building Blocks
====================================================

What:  Base model configuration and reusable field types for all schemas.
Why:   The JSON contract is camelCase (startDate, tripToDestinations) while
       Python attributes are snake_case. Both spellings are accepted on input.
How:   CamelModel sets an alias generator; FastAPI serializes responses by
       alias, so every response is camelCase without per-field aliases.
"""

from datetime import date
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, Field
from pydantic.alias_generators import to_camel

from app.utils.date_utils import to_calendar_date

END_BEFORE_START_MESSAGE = "End date must be after or equal to start date"


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


def _calendar_date(value: Any) -> Any:
    # Datetime strings ("2023-06-16T10:00:00Z") are cut to the day;
    # anything that is not date-like is left for pydantic to reject
    if isinstance(value, (str, date)):
        return to_calendar_date(value)
    return value


CalendarDate = Annotated[Optional[date], BeforeValidator(_calendar_date)]

# A list of strings, or a string that already holds the serialized list
SerializedList = Union[List[str], str]


def ensure_date_order(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError(END_BEFORE_START_MESSAGE)


def reject_null(value: Any, field: str) -> Any:
    if value is None:
        raise ValueError(f"{field} must not be null")
    return value


class ErrorResponse(BaseModel):
    """
    Error body shared by every non-2xx response.

    Example:
        {"errors": ["Trip not found"]}
    """
    errors: List[str] = Field(description="Human-readable error messages")
