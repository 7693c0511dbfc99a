from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from workforce.database.base import Base


class StoredDocument(Base):
    """
    One schemaless document of the store.

    A document is addressed by (collection, id); its fields live in `data`
    as a JSON object. Collections are implicit: a collection exists as long as
    at least one row carries its name.
    """
    __tablename__ = "documents"

    # Collection name (e.g. "branches", "employees")
    collection: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )

    # Document id, unique within its collection
    id: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
    )

    # Field data of the document (never contains the id itself)
    data: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def to_snapshot(self) -> "DocumentSnapshot":
        return DocumentSnapshot(id=self.id, data=dict(self.data or {}))

    def __repr__(self) -> str:
        return f"<StoredDocument(collection={self.collection!r}, id={self.id!r})>"


@dataclass(frozen=True)
class DocumentSnapshot:
    """Detached, read-only view of a document as returned by the repository."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, field_name: str, default: Any = None) -> Any:
        return self.data.get(field_name, default)
