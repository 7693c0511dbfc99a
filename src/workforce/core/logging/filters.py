# workforce/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter: stamps `record.request_id` from a contextvar set by
  RequestIDMiddleware, so `%(request_id)s` never raises KeyError. A contextvar
  (not threading.local) keeps the id attached across awaits.
- RedactFilter: masks sensitive `extra=` attributes before formatting.
  Employee contact fields (email, phone) count as sensitive.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the id for the current context; keep the token for reset_request_id()."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Every record leaves with a `request_id`: the one passed via `extra`,
    else the context's, else "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "email",
        "phone",
    }

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
        return True
