# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Ticket CRUD endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ticketdesk.controllers.common import parse_entity_id
from ticketdesk.core.dependencies import get_ticket_repository
from ticketdesk.repositories import TicketRepository
from ticketdesk.schemas import ERROR_RESPONSES, NOT_FOUND_RESPONSE, TicketOut

router = APIRouter(tags=["Tickets"], responses=ERROR_RESPONSES)


def _ticket_id(raw: str) -> int:
    return parse_entity_id(raw, "ticketId", "Ticket ID must be an integer")


@router.get("/tickets", responses={200: {"model": list[TicketOut]}})
def list_tickets(repo: TicketRepository = Depends(get_ticket_repository)):
    return repo.list_all()


@router.post("/tickets", status_code=201, responses={201: {"model": TicketOut}})
def create_ticket(
    payload: dict[str, Any] = Body(...),
    repo: TicketRepository = Depends(get_ticket_repository),
):
    return repo.create(payload)


@router.put(
    "/tickets/{ticket_id}",
    responses={200: {"model": TicketOut}, **NOT_FOUND_RESPONSE},
)
def update_ticket(
    ticket_id: str,
    payload: dict[str, Any] = Body(...),
    repo: TicketRepository = Depends(get_ticket_repository),
):
    """Partial update: only the provided fields change."""
    return repo.update(_ticket_id(ticket_id), payload)


@router.delete(
    "/tickets/{ticket_id}",
    responses={200: {"model": TicketOut}, **NOT_FOUND_RESPONSE},
)
def delete_ticket(
    ticket_id: str,
    repo: TicketRepository = Depends(get_ticket_repository),
):
    return repo.delete(_ticket_id(ticket_id))
