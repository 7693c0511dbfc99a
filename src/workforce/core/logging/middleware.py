# workforce/core/logging/middleware.py
"""
RequestIDMiddleware: one correlation id per HTTP request.

An incoming `X-Request-ID` is reused when it looks like an opaque token
(letters, digits, '-', '_', '.', at most 128 chars); otherwise a UUID4 is
generated. The id is stored in the logging contextvar for the duration of the
request and echoed back in the `X-Request-ID` response header.

Register it last so it wraps every other middleware, error responses included.
"""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_request_id(header_value: str | None) -> str:
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
