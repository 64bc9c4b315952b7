"""
Classification of IntegrityError by driver error code.

Error messages differ between drivers and versions; the codes do not. Only
the two cases callers act on are recognised, anything else is UNKNOWN and
the original exception should propagate.
"""

import enum

from sqlalchemy.exc import IntegrityError


class IntegrityViolation(enum.Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    UNKNOWN = "unknown"


# PostgreSQL SQLSTATE classes
_PG_UNIQUE = "23505"
_PG_FOREIGN_KEY = "23503"

# SQLite extended result codes
_SQLITE_PRIMARYKEY = 1555
_SQLITE_UNIQUE = 2067
_SQLITE_FOREIGNKEY = 787


def _driver_errors(exc: IntegrityError):
    orig = exc.orig
    while orig is not None:
        yield orig
        orig = orig.__cause__


def classify_integrity_error(exc: IntegrityError) -> IntegrityViolation:
    for err in _driver_errors(exc):
        sqlstate = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if sqlstate == _PG_UNIQUE:
            return IntegrityViolation.UNIQUE
        if sqlstate == _PG_FOREIGN_KEY:
            return IntegrityViolation.FOREIGN_KEY

        code = getattr(err, "sqlite_errorcode", None)
        if code in (_SQLITE_PRIMARYKEY, _SQLITE_UNIQUE):
            return IntegrityViolation.UNIQUE
        if code == _SQLITE_FOREIGNKEY:
            return IntegrityViolation.FOREIGN_KEY

    return IntegrityViolation.UNKNOWN
