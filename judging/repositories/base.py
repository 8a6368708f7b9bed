"""
Base Repository - Audition Judging Platform
judging/repositories/base.py

Tenant-scoped access to one document collection. A repository cannot be built
without a TenantContext, and every query, insert and delete it issues carries
the organization filter.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import NAMESPACE_URL, uuid4, uuid5

from judging.core.exceptions import (
    CrossTenantAccessException,
    EntityNotFoundException,
)
from judging.core.tenant import TenantContext
from judging.store.base import DocumentStore


class TenantRepository:
    """Base repository bound to one organization."""

    COLLECTION: str = ""
    ENTITY_NAME: str = "Document"

    def __init__(self, store: DocumentStore, tenant: TenantContext):
        if not isinstance(tenant, TenantContext):
            raise TypeError("A TenantContext is required to build a repository")
        self.store = store
        self.tenant = tenant

    @property
    def organization_id(self) -> str:
        return self.tenant.organization_id

    # ------------------------------------------------------------------
    # Scoped primitives
    # ------------------------------------------------------------------

    def _scoped(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        scoped = dict(filters or {})
        scoped["organization_id"] = self.organization_id
        return scoped

    def _find(self, **filters: Any) -> List[Dict[str, Any]]:
        return self.store.find(self.COLLECTION, self._scoped(filters))

    def _get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """Fetch by ID; a document owned by another organization is an access error."""
        doc = self.store.get(self.COLLECTION, doc_id)
        if doc is None:
            return None
        if doc.get("organization_id") != self.organization_id:
            raise CrossTenantAccessException(self.ENTITY_NAME, doc_id)
        return doc

    def _require(self, doc_id: str) -> Dict[str, Any]:
        doc = self._get(doc_id)
        if doc is None:
            raise EntityNotFoundException(self.ENTITY_NAME, doc_id)
        return doc

    def _insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return self.store.insert(self.COLLECTION, self._scoped(doc))

    def _upsert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return self.store.upsert(self.COLLECTION, self._scoped(doc))

    def _update(self, doc_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        self._require(doc_id)
        fields = {k: v for k, v in fields.items() if k not in ("id", "organization_id")}
        return self.store.update(self.COLLECTION, doc_id, fields)

    def _delete(self, doc_id: str) -> bool:
        if self._get(doc_id) is None:
            return False
        return self.store.delete(self.COLLECTION, doc_id)

    def _delete_where(self, **filters: Any) -> int:
        return self.store.delete_where(self.COLLECTION, self._scoped(filters))

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    @staticmethod
    def new_id() -> str:
        return str(uuid4())

    def derived_id(self, *parts: str) -> str:
        """Deterministic ID for a natural key inside this organization."""
        key = "|".join([self.COLLECTION, self.organization_id, *parts])
        return str(uuid5(NAMESPACE_URL, key))

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)
