# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection: wire the store and the repositories.
Tests swap the store with ``app.dependency_overrides[get_document_store]``.
"""

from fastapi import Depends

from ticketdesk.core.config import settings
from ticketdesk.repositories import (
    DocumentStore,
    TeamRepository,
    TicketRepository,
    UserRepository,
)

# ── Singleton store (one file, one lock per process) ──
_store = DocumentStore(settings.DATA_FILE)


# ── FastAPI dependency functions ──
def get_document_store() -> DocumentStore:
    return _store


def get_team_repository(
    store: DocumentStore = Depends(get_document_store),
) -> TeamRepository:
    return TeamRepository(store)


def get_user_repository(
    store: DocumentStore = Depends(get_document_store),
) -> UserRepository:
    return UserRepository(store)


def get_ticket_repository(
    store: DocumentStore = Depends(get_document_store),
) -> TicketRepository:
    return TicketRepository(store)
