"""
Document Store - Audition Judging Platform
judging/store/base.py

Storage contract consumed by the repositories: named collections of
JSON-compatible documents, filtered by field equality. Every document carries
an ``id`` and an ``organization_id``.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Mapping, Optional


class DocumentStore(ABC):
    """Abstract document store."""

    REQUIRED_FIELDS = ("id", "organization_id")

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return a document by ID regardless of owner, or None."""

    @abstractmethod
    def find(self, collection: str, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Return every document whose fields equal all ``filters`` values."""

    @abstractmethod
    def insert(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new document. Raises DuplicateEntityException on ID clash."""

    @abstractmethod
    def upsert(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Create or fully replace the document with ``doc['id']``."""

    @abstractmethod
    def update(
        self, collection: str, doc_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Merge ``fields`` into an existing document. Returns None if absent."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete one document. Returns True if it existed."""

    @abstractmethod
    def delete_where(self, collection: str, filters: Mapping[str, Any]) -> int:
        """Delete every matching document and return how many were removed."""

    @contextmanager
    def transaction(self) -> Generator["DocumentStore", None, None]:
        """
        Group writes so they commit or roll back together.

        Backends without transactions run the block as-is.
        """
        yield self

    def ping(self) -> bool:
        """Check the backend is reachable."""
        return True

    def _check_document(self, doc: Mapping[str, Any]) -> None:
        missing = [f for f in self.REQUIRED_FIELDS if not doc.get(f)]
        if missing:
            raise ValueError(f"Document is missing required fields: {', '.join(missing)}")
