"""
Generic document repository over named collections.

Every public method:
- opens its own AsyncSession from the injected factory (one unit of work),
- runs inside `session.begin()` so writes commit atomically or roll back,
- re-raises any backend failure as a normalized RepositoryError via
  `store_error_handler` (message = context prefix + underlying message).

`delete` and `delete_by_filter` accept an optional Transaction; when given,
they enqueue their writes on it instead of opening a session of their own,
and the commit happens when `run_transaction` finishes.
"""
import logging
import secrets
import string
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workforce.exceptions.base import NotFoundError
from workforce.exceptions.mapper import store_error_handler
from workforce.models.document import DocumentSnapshot
from .transaction import Transaction, FieldFilters

logger = logging.getLogger(__name__)

T = TypeVar("T")

AUTO_ID_LENGTH = 20
_AUTO_ID_ALPHABET = string.ascii_letters + string.digits


def generate_document_id() -> str:
    """Random 20-character alphanumeric id for documents created without one."""
    return "".join(secrets.choice(_AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))


class DocumentRepository:
    """
    CRUD, filtered batch delete and transactions against the document store.

    The repository holds no entity state; it only keeps the session factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[Transaction]:
        """Short-lived session + transaction; commits on clean exit."""
        async with self.session_factory() as session:
            async with session.begin():
                yield Transaction(session)

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, collection: str, data: dict[str, Any], document_id: str | None = None) -> str:
        """
        Store `data` as a new document and return its id.

        With `document_id` this is an upsert: an existing document at that id
        is replaced as a whole. Without it a fresh id is generated.
        """
        logger.debug(
            "repo.create.start",
            extra={"collection": collection, "provided_keys": sorted(data.keys()), "explicit_id": document_id is not None},
        )
        start = time.perf_counter()
        new_id = generate_document_id() if document_id is None else document_id

        async with store_error_handler(f"Failed to create document in {collection}"):
            async with self._unit_of_work() as tx:
                await tx.set(collection, new_id, data)

        logger.info(
            "repo.create.success",
            extra={"collection": collection, "id": new_id, "duration_ms": int((time.perf_counter() - start) * 1000)},
        )
        return new_id

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_all(self, collection: str) -> list[DocumentSnapshot]:
        """All documents of `collection`; an empty collection yields []."""
        async with store_error_handler(f"Failed to fetch documents from {collection}"):
            async with self._unit_of_work() as tx:
                documents = await tx.query(collection)

        logger.debug("repo.get_all.success", extra={"collection": collection, "count": len(documents)})
        return documents

    async def get_by_id(self, collection: str, document_id: str) -> DocumentSnapshot:
        """
        Fetch one document.

        Raises:
            NotFoundError: code DOC_NOT_FOUND when no document has that id.
            RepositoryError: the read itself failed.
        """
        async with store_error_handler(f"Failed to fetch document {document_id} from {collection}"):
            async with self._unit_of_work() as tx:
                document = await tx.get(collection, document_id)

        # Raised outside the handler so the domain error is not re-wrapped
        if document is None:
            logger.info("repo.get_by_id.not_found", extra={"collection": collection, "id": document_id})
            raise NotFoundError(f"Document not found in {collection} with id {document_id}", "DOC_NOT_FOUND")

        return document

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """
        Merge `data` into the document. No existence pre-check: a document that
        is missing at write time fails with code NOT_FOUND (404).
        """
        start = time.perf_counter()
        async with store_error_handler(f"Failed to update document {document_id} in {collection}"):
            async with self._unit_of_work() as tx:
                await tx.update(collection, document_id, data)

        logger.info(
            "repo.update.success",
            extra={
                "collection": collection,
                "id": document_id,
                "updated_fields": sorted(data.keys()),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, collection: str, document_id: str, transaction: Transaction | None = None) -> None:
        """Remove one document (no-op when absent); enqueued on `transaction` if given."""
        async with store_error_handler(f"Failed to delete document {document_id} from {collection}"):
            if transaction is not None:
                await transaction.delete(collection, document_id)
            else:
                async with self._unit_of_work() as tx:
                    await tx.delete(collection, document_id)

        logger.info(
            "repo.delete.success",
            extra={"collection": collection, "id": document_id, "in_transaction": transaction is not None},
        )

    async def delete_by_filter(
        self,
        collection: str,
        filters: FieldFilters,
        transaction: Transaction | None = None,
    ) -> int:
        """
        Delete every document matching all `(field, value)` pairs; returns the count.

        Inside a transaction the matches are read through it and the deletes are
        enqueued; otherwise the read and the batch delete share one short-lived
        transaction. Zero matches is not an error.
        """
        async with store_error_handler(f"Failed to delete documents from {collection} by field-value pairs"):
            if transaction is not None:
                deleted = await self._delete_matching(transaction, collection, filters)
            else:
                async with self._unit_of_work() as tx:
                    deleted = await self._delete_matching(tx, collection, filters)

        logger.info(
            "repo.delete_by_filter.success",
            extra={
                "collection": collection,
                "filter_fields": [pair[0] for pair in filters],
                "deleted": deleted,
                "in_transaction": transaction is not None,
            },
        )
        return deleted

    @staticmethod
    async def _delete_matching(tx: Transaction, collection: str, filters: FieldFilters) -> int:
        matches = await tx.query(collection, filters)
        return await tx.delete_many(collection, [doc.id for doc in matches])

    # =================================================================================================================
    # Transactions
    # =================================================================================================================

    async def run_transaction(self, operation: Callable[[Transaction], Awaitable[T]]) -> T:
        """
        Run `operation(transaction)` and commit everything it did atomically.

        Any failure (inside the operation or at commit) rolls back and is
        raised as RepositoryError(code="TRANSACTION_FAILED").
        """
        start = time.perf_counter()
        async with store_error_handler("Transaction failed", code="TRANSACTION_FAILED"):
            async with self._unit_of_work() as tx:
                result = await operation(tx)

        logger.debug("repo.transaction.committed", extra={"duration_ms": int((time.perf_counter() - start) * 1000)})
        return result
