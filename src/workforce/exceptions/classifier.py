"""
Classify raw document-store failures into normalized (code, http_status) pairs.

The repository never lets a backend exception escape; it asks this module what
the failure *means* and raises a RepositoryError carrying the answer. Two
sources of information are used, most specific first:

1. The SQLSTATE reported by PostgreSQL drivers (`sqlstate` on psycopg 3,
   `pgcode` on psycopg2).
2. The exception type plus keywords in the driver message (SQLite, others).
"""

import asyncio
import logging
from enum import Enum
from typing import NamedTuple

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    NoResultFound,
    OperationalError,
)

from .base import WorkforceError

logger = logging.getLogger(__name__)


class StoreErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    ABORTED = "ABORTED"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    UNAVAILABLE = "UNAVAILABLE"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


STATUS_BY_CODE = {
    StoreErrorCode.NOT_FOUND: 404,
    StoreErrorCode.ALREADY_EXISTS: 409,
    StoreErrorCode.FAILED_PRECONDITION: 400,
    StoreErrorCode.ABORTED: 409,
    StoreErrorCode.DEADLINE_EXCEEDED: 504,
    StoreErrorCode.UNAVAILABLE: 503,
    StoreErrorCode.RESOURCE_EXHAUSTED: 429,
    StoreErrorCode.PERMISSION_DENIED: 403,
    StoreErrorCode.INTERNAL: 500,
    StoreErrorCode.UNKNOWN: 500,
}


class Classification(NamedTuple):
    code: str
    http_status: int


def _classification(code: StoreErrorCode) -> Classification:
    return Classification(code.value, STATUS_BY_CODE[code])


# SQLSTATE -> code. Exact codes first, then two-character classes.
SQLSTATE_EXACT = {
    "23505": StoreErrorCode.ALREADY_EXISTS,     # unique_violation
    "40001": StoreErrorCode.ABORTED,            # serialization_failure
    "40P01": StoreErrorCode.ABORTED,            # deadlock_detected
    "42501": StoreErrorCode.PERMISSION_DENIED,  # insufficient_privilege
    "57014": StoreErrorCode.DEADLINE_EXCEEDED,  # query_canceled (statement_timeout)
}

SQLSTATE_CLASS = {
    "08": StoreErrorCode.UNAVAILABLE,           # connection exception
    "23": StoreErrorCode.FAILED_PRECONDITION,   # integrity constraint violation
    "28": StoreErrorCode.PERMISSION_DENIED,     # invalid authorization
    "40": StoreErrorCode.ABORTED,               # transaction rollback
    "53": StoreErrorCode.RESOURCE_EXHAUSTED,    # insufficient resources
    "57": StoreErrorCode.UNAVAILABLE,           # operator intervention
}


def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _sqlstate_of(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _classify_sqlstate(sqlstate: str) -> StoreErrorCode | None:
    code = SQLSTATE_EXACT.get(sqlstate) or SQLSTATE_CLASS.get(sqlstate[:2])
    if code is None:
        logger.warning("classifier.unknown_sqlstate", extra={"sqlstate": sqlstate})
    return code


def _classify_from_message(exc: DBAPIError) -> StoreErrorCode:
    """
    Message-based fallback for drivers without SQLSTATE (SQLite, ...).
    """
    normalized = str(exc.orig if exc.orig is not None else exc).lower()

    if isinstance(exc, IntegrityError):
        if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
            return StoreErrorCode.ALREADY_EXISTS
        return StoreErrorCode.FAILED_PRECONDITION

    if _match_any(normalized, ["timeout", "timed out"]):
        return StoreErrorCode.DEADLINE_EXCEEDED

    if _match_any(normalized, ["permission denied", "access denied", "readonly database", "read-only"]):
        return StoreErrorCode.PERMISSION_DENIED

    if isinstance(exc, OperationalError):
        if _match_any(normalized, ["locked", "deadlock", "could not serialize"]):
            return StoreErrorCode.ABORTED
        return StoreErrorCode.UNAVAILABLE

    logger.debug("classifier.unclassified_dbapi_error", extra={"error_type": type(exc).__name__})
    return StoreErrorCode.INTERNAL


def classify_store_error(exc: BaseException) -> Classification:
    """
    Return the normalized (code, http_status) for a failure raised while
    talking to the store.

    Already-normalized application errors keep their own code and status.
    """
    if isinstance(exc, WorkforceError):
        return Classification(exc.code, exc.http_status)

    if isinstance(exc, NoResultFound):
        return _classification(StoreErrorCode.NOT_FOUND)

    if isinstance(exc, DBAPIError):
        sqlstate = _sqlstate_of(exc)
        if sqlstate:
            code = _classify_sqlstate(sqlstate)
            if code is not None:
                return _classification(code)
        return _classification(_classify_from_message(exc))

    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return _classification(StoreErrorCode.DEADLINE_EXCEEDED)

    if isinstance(exc, ConnectionError):
        return _classification(StoreErrorCode.UNAVAILABLE)

    return _classification(StoreErrorCode.UNKNOWN)


def describe_store_error(exc: BaseException) -> str:
    """
    Underlying message of a failure, without SQLAlchemy's statement/params
    suffix (those may contain document values).
    """
    if isinstance(exc, WorkforceError):
        return exc.message
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc) or type(exc).__name__
