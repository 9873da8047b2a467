# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team / User / Ticket collections on top of the DocumentStore.

Every operation is one read-validate-mutate-write pass under the store lock:
the document is re-read from disk, validated, changed, and written back in
full. Nothing is cached between calls.
"""

from typing import Any, Mapping, Optional

from ticketdesk.core.errors import NotFoundError, StorageError, ValidationError
from ticketdesk.core.logging import get_logger
from ticketdesk.metrics import ENTITIES_STORED, ENTITY_OPERATIONS, VALIDATION_VIOLATIONS
from ticketdesk.models.domain import Document
from ticketdesk.repositories.document_store import DocumentStore
from ticketdesk.services.validation import CREATE, UPDATE, sanitize, validate

logger = get_logger(__name__)


def next_id(entities: list[dict[str, Any]]) -> int:
    """Max existing integer id plus one, or 1 for an empty collection."""
    ids = [e["id"] for e in entities if isinstance(e.get("id"), int)]
    return max(ids, default=0) + 1


class EntityRepository:
    """Generic CRUD over one collection of the document."""

    collection: str = ""
    label: str = ""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # ── Read ──

    def list_all(self) -> list[dict[str, Any]]:
        return list(self._store.load().collection(self.collection))

    # ── Write ──

    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        fields = sanitize(self.collection, fields)
        with self._store.lock:
            document = self._store.load()
            self._check(fields, document, CREATE, operation="create")

            entities = document.collection(self.collection)
            entity = {**fields, "id": next_id(entities)}
            entities.append(entity)
            self._persist(document, operation="create")

        logger.info("%s created id=%s", self.label, entity["id"])
        return entity

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> dict[str, Any]:
        fields = sanitize(self.collection, fields)
        with self._store.lock:
            document = self._store.load()
            self._check(fields, document, UPDATE, operation="update", entity_id=entity_id)

            entities = document.collection(self.collection)
            index = self._index_of(entities, entity_id, operation="update")
            current = entities[index]
            merged = {**current, **fields, "id": current["id"]}
            entities[index] = merged
            self._persist(document, operation="update")

        logger.info("%s updated id=%s fields=%s", self.label, entity_id, sorted(fields))
        return merged

    def delete(self, entity_id: int) -> dict[str, Any]:
        with self._store.lock:
            document = self._store.load()
            entities = document.collection(self.collection)
            index = self._index_of(entities, entity_id, operation="delete")
            removed = entities.pop(index)
            self._persist(document, operation="delete")

        logger.info("%s deleted id=%s", self.label, entity_id)
        return removed

    # ── Internal ──

    def _check(self, fields: Mapping[str, Any], document: Document, mode: str,
               operation: str, entity_id: Optional[int] = None) -> None:
        violations = validate(self.collection, fields, document, mode, entity_id)
        if not violations:
            return
        for v in violations:
            VALIDATION_VIOLATIONS.labels(collection=self.collection, field=v.field).inc()
        ENTITY_OPERATIONS.labels(
            collection=self.collection, operation=operation, outcome="invalid"
        ).inc()
        logger.info("%s %s rejected: %d violation(s)", self.label, operation, len(violations))
        raise ValidationError(violations)

    def _index_of(self, entities: list[dict[str, Any]], entity_id: int, operation: str) -> int:
        for index, entity in enumerate(entities):
            if entity.get("id") == entity_id:
                return index
        ENTITY_OPERATIONS.labels(
            collection=self.collection, operation=operation, outcome="not_found"
        ).inc()
        raise NotFoundError(f"{self.label} not found")

    def _persist(self, document: Document, operation: str) -> None:
        try:
            self._store.save(document)
        except StorageError:
            ENTITY_OPERATIONS.labels(
                collection=self.collection, operation=operation, outcome="error"
            ).inc()
            raise
        ENTITY_OPERATIONS.labels(
            collection=self.collection, operation=operation, outcome="ok"
        ).inc()
        ENTITIES_STORED.labels(collection=self.collection).set(
            len(document.collection(self.collection))
        )


class TeamRepository(EntityRepository):
    collection = "teams"
    label = "Team"


class UserRepository(EntityRepository):
    collection = "users"
    label = "User"


class TicketRepository(EntityRepository):
    collection = "tickets"
    label = "Ticket"
