# workforce/api/v1/error_handlers.py
"""
Outermost error translation: any error leaving a route becomes one JSON response.

- ValidationError (request pipeline)      -> 400 {"error": message}
- RepositoryError / ServiceError          -> exc.http_status {"message", "code"}
- anything else, including None or values
  that are not exceptions at all           -> 500 {"message": "An unexpected error occurred",
                                                   "code": "UNKNOWN_ERROR"}

Known errors go through FastAPI exception handlers. Everything else escapes
the router and is caught by ErrorHandlingMiddleware, so the server never
re-raises. Every error is logged exactly once, as "Error: <message>".
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from workforce.exceptions.base import WorkforceError, ValidationError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred"
UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
NULL_ERROR_MESSAGE = "null or undefined error received"


def _error_message(error: object) -> str:
    if isinstance(error, WorkforceError):
        return error.message
    message = getattr(error, "message", None)
    if message is None and isinstance(error, BaseException):
        message = str(error) or type(error).__name__
    return str(message)


def resolve_error(error: object | None) -> tuple[int, dict]:
    """
    Log `error` and return the (status_code, body) it should be answered with.

    Never raises, whatever `error` is.
    """
    if error is None:
        logger.error("Error: %s", NULL_ERROR_MESSAGE)
        return 500, {"message": UNKNOWN_ERROR_MESSAGE, "code": UNKNOWN_ERROR_CODE}

    message = _error_message(error)

    if isinstance(error, WorkforceError):
        # Client-caused outcomes are expected; keep stack traces for server-side ones.
        level = logging.WARNING if error.http_status < 500 else logging.ERROR
        logger.log(level, "Error: %s", message, extra={"code": error.code, "http_status": error.http_status})
        return error.http_status, error.to_payload()

    exc_info = error if isinstance(error, BaseException) else None
    logger.error("Error: %s", message, exc_info=exc_info)
    return 500, {"message": UNKNOWN_ERROR_MESSAGE, "code": UNKNOWN_ERROR_CODE}


# Most specific first: pipeline rejections keep their own body shape.

async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """400 {"error": "..."} for payloads rejected by the request pipeline."""
    logger.warning(
        "Error: %s",
        exc.message,
        extra={"method": request.method, "path": request.url.path, "violations": len(exc.violations)},
    )
    return JSONResponse(status_code=exc.http_status, content={"error": exc.message})


async def workforce_error_handler(request: Request, exc: WorkforceError) -> JSONResponse:
    status_code, body = resolve_error(exc)
    return JSONResponse(status_code=status_code, content=body)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns errors no exception handler claimed into the generic 500 response."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            status_code, body = resolve_error(exc)
            return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Call from the app factory."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(WorkforceError, workforce_error_handler)
    app.add_middleware(ErrorHandlingMiddleware)
