# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas: API contract definitions.
Used ONLY at the controller (HTTP) boundary and for OpenAPI docs.
Entities travel as plain dicts so stored values are returned untouched.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ticketdesk.models.domain import Violation


# ── Entity shapes ──

class TeamOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    members: list[str]


class UserOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    firstName: str
    lastName: str
    emailId: str
    phno: str
    employeeId: int
    designation: str
    teamId: int


class TicketOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    title: str
    description: str
    team: str
    status: str
    assignee: str
    reporter: str


# ── Error bodies ──

class ValidationErrorResponse(BaseModel):
    errors: list[Violation]


class MessageResponse(BaseModel):
    message: str


ERROR_RESPONSES = {
    400: {"model": ValidationErrorResponse, "description": "Validation failed"},
    500: {"model": MessageResponse, "description": "Data file could not be read or written"},
}
NOT_FOUND_RESPONSE = {
    404: {"model": MessageResponse, "description": "Entity not found"},
}


class ReadinessResponse(BaseModel):
    status: str
    service: str
    collections: Optional[dict[str, int]] = None
    error: Optional[str] = None
