"""
Repository layer: the only code that talks to the document store.

Usage:
    from workforce.repositories import DocumentRepository, Transaction
"""

from .document_repository import DocumentRepository, generate_document_id
from .transaction import Transaction, FieldValuePair, matches_filters

__all__ = [
    "DocumentRepository",
    "Transaction",
    "FieldValuePair",
    "generate_document_id",
    "matches_filters",
]
