# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: pure data structures, NO FastAPI dependency.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

COLLECTIONS: tuple[str, ...] = ("teams", "users", "tickets")


class Document(BaseModel):
    """The whole persisted dataset. Unknown top-level keys are carried through."""

    model_config = ConfigDict(extra="allow")

    teams: list[dict[str, Any]] = Field(default_factory=list)
    users: list[dict[str, Any]] = Field(default_factory=list)
    tickets: list[dict[str, Any]] = Field(default_factory=list)

    def collection(self, name: str) -> list[dict[str, Any]]:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection '{name}'")
        return getattr(self, name)


class Violation(BaseModel):
    """A single field-rule failure."""

    field: str
    message: str
    value: Any = None
