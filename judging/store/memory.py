"""
In-Memory Document Store - Audition Judging Platform
judging/store/memory.py

Process-local backend for development and tests. Documents are deep-copied in
and out so callers never share mutable state with the store.
"""

import copy
import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Mapping, Optional

from judging.core.exceptions import DuplicateEntityException
from judging.store.base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Dict-of-dicts store guarded by a re-entrant lock."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _matches(doc: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        return all(doc.get(field) == value for field, value in filters.items())

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find(self, collection: str, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                copy.deepcopy(doc)
                for doc in self._collection(collection).values()
                if self._matches(doc, filters)
            ]

    def insert(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._check_document(doc)
        with self._lock:
            docs = self._collection(collection)
            if doc["id"] in docs:
                raise DuplicateEntityException(f"{collection} document {doc['id']} already exists")
            docs[doc["id"]] = copy.deepcopy(doc)
            return copy.deepcopy(doc)

    def upsert(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._check_document(doc)
        with self._lock:
            self._collection(collection)[doc["id"]] = copy.deepcopy(doc)
            return copy.deepcopy(doc)

    def update(
        self, collection: str, doc_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            if doc is None:
                return None
            doc.update(copy.deepcopy(dict(fields)))
            return copy.deepcopy(doc)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._collection(collection).pop(doc_id, None) is not None

    def delete_where(self, collection: str, filters: Mapping[str, Any]) -> int:
        with self._lock:
            docs = self._collection(collection)
            doomed = [doc_id for doc_id, doc in docs.items() if self._matches(doc, filters)]
            for doc_id in doomed:
                del docs[doc_id]
            return len(doomed)

    @contextmanager
    def transaction(self) -> Generator["InMemoryDocumentStore", None, None]:
        """Hold the lock for the block and restore a snapshot on error."""
        with self._lock:
            snapshot = copy.deepcopy(self._collections)
            try:
                yield self
            except BaseException:
                self._collections = snapshot
                raise

    def clear(self) -> None:
        with self._lock:
            self._collections.clear()
