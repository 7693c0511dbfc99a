"""
Models of the workforce API.

- StoredDocument: the SQLAlchemy row behind every document of the store.
- DocumentSnapshot: what the repository hands back from reads.
- Branch, Employee: typed entities built by the services from snapshots.

    from workforce.models import Branch, Employee, DocumentSnapshot
"""

from .document import StoredDocument, DocumentSnapshot
from .branch import Branch
from .employee import Employee

__all__ = [
    "StoredDocument",
    "DocumentSnapshot",
    "Branch",
    "Employee",
]
