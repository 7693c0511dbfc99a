
# workforce/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py          # App-level errors (RepositoryError, ServiceError, ValidationError, ...)
# │   ├── classifier.py    # Backend failure -> normalized (code, http_status)
# │   └── mapper.py        # Async context manager wrapping store calls into RepositoryError

from .base import (
    WorkforceError,
    RepositoryError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

__all__ = [
    "WorkforceError",
    "RepositoryError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
]
