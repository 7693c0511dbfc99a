"""
Turn raw store failures into RepositoryError at the repository boundary.

    async with store_error_handler(f"Failed to fetch documents from {collection}"):
        ... store operations ...

Whatever escapes the block is classified (see classifier.py) and re-raised as

    RepositoryError("<context>: <underlying message>", code, http_status)

with the original exception chained as __cause__. Rollback is not handled here:
the repository's `session.begin()` block rolls back on the way out.
"""
import logging
from contextlib import asynccontextmanager

from .base import RepositoryError
from .classifier import classify_store_error, describe_store_error

logger = logging.getLogger(__name__)


def to_repository_error(exc: BaseException, context: str, code: str | None = None) -> RepositoryError:
    """
    Build the normalized RepositoryError for `exc`.

    - message: `context` plus the underlying message
    - code: `code` when given (e.g. TRANSACTION_FAILED), else the classified code
    - http_status: always the classified status (500 when nothing is derivable)
    """
    classification = classify_store_error(exc)
    error = RepositoryError(
        f"{context}: {describe_store_error(exc)}",
        code or classification.code,
        classification.http_status,
    )

    # Client-level outcomes (404, 409, ...) are expected; server-side ones are not.
    level = logging.INFO if classification.http_status < 500 else logging.WARNING
    logger.log(
        level,
        "mapper.store_error",
        extra={
            "context": context,
            "code": error.code,
            "http_status": error.http_status,
            "error_type": type(exc).__name__,
        },
    )
    return error


@asynccontextmanager
async def store_error_handler(context: str, *, code: str | None = None):
    """
    Re-raise any failure inside the block as a RepositoryError (see module docstring).
    """
    try:
        yield
    except Exception as exc:
        raise to_repository_error(exc, context, code) from exc
