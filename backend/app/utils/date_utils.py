"""
TripPlanner Backend: Date Helpers
===================================

What:  Conversions between the date representations the API accepts
       (date, datetime, ISO strings) and the calendar dates stored in DATE
       columns.
Why:   Trip and association windows are whole days; a time-of-day component
       sent by a client must never shift the stored day.
How:   The date component is taken as given. No timezone conversion is made.
"""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def to_calendar_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Reduce a date-like value to its calendar date.

    Accepts date objects, datetime objects (time and tzinfo are dropped) and
    ISO 8601 strings ("2023-06-16" or "2023-06-16T10:00:00Z").

    Raises:
        ValueError: The string is not an ISO 8601 date or datetime.
        TypeError:  The value is of an unsupported type.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        try:
            return date.fromisoformat(text)
        except ValueError:
            # datetime.fromisoformat accepts a trailing "Z" since Python 3.11
            return datetime.fromisoformat(text).date()
    raise TypeError(f"Unsupported date value of type {type(value).__name__}")

