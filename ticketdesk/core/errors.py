# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy shared by the store, the validator and the repositories.
The HTTP layer maps each kind to a status code; nothing below it retries.
"""

from ticketdesk.models.domain import Violation


class TicketDeskError(Exception):
    """Base class for every error the service raises on purpose."""


class ValidationError(TicketDeskError):
    """One or more field-level violations. Nothing was written."""

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = list(violations)
        super().__init__(
            "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        )


class NotFoundError(TicketDeskError):
    """No entity with the requested id exists in the target collection."""


class StorageError(TicketDeskError):
    """The backing document could not be read or written."""
