# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: User CRUD endpoints.
Thin HTTP layer: delegates ALL logic to UserRepository.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ticketdesk.controllers.common import parse_entity_id
from ticketdesk.core.dependencies import get_user_repository
from ticketdesk.repositories import UserRepository
from ticketdesk.schemas import ERROR_RESPONSES, NOT_FOUND_RESPONSE, UserOut

router = APIRouter(tags=["Users"], responses=ERROR_RESPONSES)


def _user_id(raw: str) -> int:
    return parse_entity_id(raw, "userId", "User ID must be an integer")


@router.get("/users", responses={200: {"model": list[UserOut]}})
def list_users(repo: UserRepository = Depends(get_user_repository)):
    return repo.list_all()


@router.post("/users", status_code=201, responses={201: {"model": UserOut}})
def create_user(
    payload: dict[str, Any] = Body(...),
    repo: UserRepository = Depends(get_user_repository),
):
    """Create a user with a unique Gmail address, phone number and employee id."""
    return repo.create(payload)


@router.put(
    "/users/{user_id}",
    responses={200: {"model": UserOut}, **NOT_FOUND_RESPONSE},
)
def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    repo: UserRepository = Depends(get_user_repository),
):
    return repo.update(_user_id(user_id), payload)


@router.delete(
    "/users/{user_id}",
    responses={200: {"model": UserOut}, **NOT_FOUND_RESPONSE},
)
def delete_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
):
    return repo.delete(_user_id(user_id))
