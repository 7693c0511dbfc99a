"""
Session-bound document operations.

`Transaction` is the handle passed to `DocumentRepository.run_transaction()`
callbacks. Everything done through one handle runs on one AsyncSession inside
one database transaction: reads see a consistent view of what the transaction
already wrote, and writes (set/update/delete) stay pending until the
surrounding `session.begin()` block commits.

The repository's own single-call operations reuse these methods on a
short-lived session, so there is exactly one implementation of each store
operation.
"""
import logging
from typing import Any, Iterable, NamedTuple, Sequence

from sqlalchemy import select, delete
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from workforce.models.document import StoredDocument, DocumentSnapshot

logger = logging.getLogger(__name__)


class FieldValuePair(NamedTuple):
    """One equality filter: documents whose `field_name` equals `field_value`."""

    field_name: str
    field_value: Any


FieldFilters = Sequence[FieldValuePair | tuple[str, Any]]


def matches_filters(data: dict[str, Any], filters: FieldFilters) -> bool:
    """
    True when `data` satisfies every pair (logical AND).
    A missing field never matches, not even a None filter value.
    """
    for field_name, field_value in filters:
        if field_name not in data or data[field_name] != field_value:
            return False
    return True


class Transaction:
    """Document operations bound to one AsyncSession / database transaction."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _load(self, collection: str, document_id: str) -> StoredDocument | None:
        # Primary key order is (collection, id)
        return await self._session.get(StoredDocument, (collection, document_id))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, collection: str, document_id: str) -> DocumentSnapshot | None:
        """Return the document, or None when it does not exist."""
        row = await self._load(collection, document_id)
        return row.to_snapshot() if row is not None else None

    async def query(self, collection: str, filters: FieldFilters = ()) -> list[DocumentSnapshot]:
        """
        Return the documents of `collection` matching all `filters`, ordered by id.

        Equality is evaluated on the decoded JSON data, so numbers and strings
        never compare equal (1 != "1").
        """
        result = await self._session.execute(
            select(StoredDocument)
            .where(StoredDocument.collection == collection)
            .order_by(StoredDocument.id)
        )
        snapshots = [row.to_snapshot() for row in result.scalars().all()]
        if filters:
            snapshots = [s for s in snapshots if matches_filters(s.data, filters)]

        logger.debug(
            "transaction.query",
            extra={"collection": collection, "filter_fields": [f[0] for f in filters], "count": len(snapshots)},
        )
        return snapshots

    # ------------------------------------------------------------------
    # Writes (pending until commit)
    # ------------------------------------------------------------------

    async def set(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Create the document or replace all of its fields."""
        row = await self._load(collection, document_id)
        if row is None:
            self._session.add(StoredDocument(collection=collection, id=document_id, data=dict(data)))
        else:
            row.data = dict(data)
        await self._session.flush()

    async def update(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """
        Merge `data` into an existing document; other fields keep their value.

        Raises:
            NoResultFound: the document does not exist (nothing to update).
        """
        row = await self._load(collection, document_id)
        if row is None:
            raise NoResultFound(f"No document to update: {collection}/{document_id}")
        # Assign a new dict so the JSON column is flagged as modified.
        row.data = {**(row.data or {}), **data}
        await self._session.flush()

    async def delete(self, collection: str, document_id: str) -> None:
        """Remove the document. Removing a missing document is a no-op."""
        await self.delete_many(collection, [document_id])

    async def delete_many(self, collection: str, document_ids: Iterable[str]) -> int:
        """Remove the listed documents in one statement; returns how many ids were given."""
        ids = list(document_ids)
        if not ids:
            return 0
        await self._session.execute(
            delete(StoredDocument)
            .where(StoredDocument.collection == collection)
            .where(StoredDocument.id.in_(ids))
            .execution_options(synchronize_session="fetch")
        )
        return len(ids)
