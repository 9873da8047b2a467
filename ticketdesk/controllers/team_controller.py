# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team CRUD endpoints.
Thin HTTP layer: delegates ALL logic to TeamRepository. Errors are mapped
to responses by the exception handlers registered in main.py.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ticketdesk.controllers.common import parse_entity_id
from ticketdesk.core.dependencies import get_team_repository
from ticketdesk.repositories import TeamRepository
from ticketdesk.schemas import ERROR_RESPONSES, NOT_FOUND_RESPONSE, TeamOut

router = APIRouter(tags=["Teams"], responses=ERROR_RESPONSES)


def _team_id(raw: str) -> int:
    return parse_entity_id(raw, "teamId", "Team ID must be an integer")


@router.get("/teams", responses={200: {"model": list[TeamOut]}})
def list_teams(repo: TeamRepository = Depends(get_team_repository)):
    """List every team in storage order."""
    return repo.list_all()


@router.post("/teams", status_code=201, responses={201: {"model": TeamOut}})
def create_team(
    payload: dict[str, Any] = Body(...),
    repo: TeamRepository = Depends(get_team_repository),
):
    """Create a team; the id is assigned by the server."""
    return repo.create(payload)


@router.put(
    "/teams/{team_id}",
    responses={200: {"model": TeamOut}, **NOT_FOUND_RESPONSE},
)
def update_team(
    team_id: str,
    payload: dict[str, Any] = Body(...),
    repo: TeamRepository = Depends(get_team_repository),
):
    """Merge the given fields into an existing team."""
    return repo.update(_team_id(team_id), payload)


@router.delete(
    "/teams/{team_id}",
    responses={200: {"model": TeamOut}, **NOT_FOUND_RESPONSE},
)
def delete_team(
    team_id: str,
    repo: TeamRepository = Depends(get_team_repository),
):
    """Delete a team and return it as it was."""
    return repo.delete(_team_id(team_id))
