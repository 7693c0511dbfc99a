"""
Typed facade over the DocumentRepository for one collection.

Subclasses bind a collection name, a pydantic entity model and the code used
when an entity is missing:

    class BranchService(EntityService[Branch]):
        collection = "branches"
        entity_model = Branch
        entity_label = "Branch"
        not_found_code = "BRANCH_NOT_FOUND"

Services keep no entity state. Mutations are submit-and-refetch: update
returns what the store holds after the write, never a locally patched copy.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, ClassVar, Generic, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as EntityValidationError

from workforce.exceptions.base import NotFoundError, RepositoryError, ServiceError
from workforce.models.document import DocumentSnapshot
from workforce.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)

EntityType = TypeVar("EntityType", bound=BaseModel)

# Codes the repository uses for a missing document
_STORE_NOT_FOUND_CODES = {"DOC_NOT_FOUND", "NOT_FOUND"}


class EntityService(Generic[EntityType]):
    collection: ClassVar[str]
    entity_model: ClassVar[Type[BaseModel]]
    entity_label: ClassVar[str] = "Entity"
    not_found_code: ClassVar[str] = "DOC_NOT_FOUND"

    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    def to_entity(self, snapshot: DocumentSnapshot) -> EntityType:
        """
        Store-assigned id merged with the document's fields.

        Raises:
            ServiceError: code MALFORMED_DOCUMENT (500) when the stored fields
                do not form a valid entity.
        """
        try:
            return self.entity_model.model_validate({**snapshot.data, "id": snapshot.id})
        except EntityValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            logger.error(
                "service.malformed_document",
                extra={"collection": self.collection, "id": snapshot.id, "invalid_fields": fields},
            )
            raise ServiceError(
                f"Malformed {self.entity_label.lower()} document {snapshot.id} in {self.collection}: "
                f"invalid fields {', '.join(fields)}",
                "MALFORMED_DOCUMENT",
                500,
            ) from exc

    @staticmethod
    def _without_id(data: dict[str, Any]) -> dict[str, Any]:
        # The id addresses the document; it is never stored as a field
        return {key: value for key, value in data.items() if key != "id"}

    @asynccontextmanager
    async def _entity_not_found(self, entity_id: str):
        """Re-tag store-level not-found errors with this entity's code."""
        try:
            yield
        except RepositoryError as exc:
            if exc.code not in _STORE_NOT_FOUND_CODES:
                raise
            logger.info(
                "service.not_found",
                extra={"collection": self.collection, "id": entity_id, "code": self.not_found_code},
            )
            raise NotFoundError(
                f"{self.entity_label} with id {entity_id} not found",
                self.not_found_code,
            ) from exc

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self) -> list[EntityType]:
        documents = await self.repository.get_all(self.collection)
        return [self.to_entity(document) for document in documents]

    async def get_by_id(self, entity_id: str) -> EntityType:
        async with self._entity_not_found(entity_id):
            document = await self.repository.get_by_id(self.collection, entity_id)
        return self.to_entity(document)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: dict[str, Any]) -> EntityType:
        """Create and echo the input with its new id (no re-read)."""
        fields = self._without_id(data)
        new_id = await self.repository.create(self.collection, fields)
        return self.entity_model.model_validate({**fields, "id": new_id})

    async def update(self, entity_id: str, data: dict[str, Any]) -> EntityType:
        """
        Existence check, field-merge update, then re-read.

        The three steps are separate round-trips; a concurrent delete between
        them surfaces as a not-found error from the update or the re-read.
        """
        async with self._entity_not_found(entity_id):
            await self.repository.get_by_id(self.collection, entity_id)
            await self.repository.update(self.collection, entity_id, self._without_id(data))
            document = await self.repository.get_by_id(self.collection, entity_id)
        return self.to_entity(document)

    async def delete(self, entity_id: str) -> None:
        async with self._entity_not_found(entity_id):
            await self.repository.get_by_id(self.collection, entity_id)
            await self.repository.delete(self.collection, entity_id)
