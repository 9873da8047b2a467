# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package: re-exports the store and the entity repositories."""
from ticketdesk.repositories.document_store import DocumentStore
from ticketdesk.repositories.entity_repository import (
    EntityRepository,
    TeamRepository,
    TicketRepository,
    UserRepository,
)

__all__ = [
    "DocumentStore",
    "EntityRepository",
    "TeamRepository",
    "TicketRepository",
    "UserRepository",
]
