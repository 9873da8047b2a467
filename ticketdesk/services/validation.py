# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: field and cross-entity validation for teams, users and tickets.

``validate`` is a pure function of the candidate fields and a document
snapshot; it never touches storage or HTTP. Each entity kind is described by
a static schema mapping field name to a ``FieldRule``:

* unknown fields short-circuit everything else;
* a missing field is a violation on create and skipped on update;
* a present field must pass the rule's base predicate, and only then are the
  rule's additional checks run, all failures being reported.

Rules flagged ``trim`` strip surrounding whitespace from string values before
any check runs; ``sanitize`` applies the same trimming so callers store exactly
what was validated. Uniqueness compares the trimmed candidate with stored
values, with no case folding, and ignores the entity being updated.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from ticketdesk.models.domain import Document, Violation

CREATE = "create"
UPDATE = "update"
MODES = (CREATE, UPDATE)

_DIGITS = re.compile(r"[0-9]+")


@dataclass
class Snapshot:
    """Document state the checks run against, minus the entity being updated."""

    document: Document
    entity_id: Optional[int] = None

    def others(self, collection: str) -> list[dict[str, Any]]:
        return [
            e for e in self.document.collection(collection)
            if self.entity_id is None or e.get("id") != self.entity_id
        ]


Check = Callable[[Any, Snapshot], Optional[str]]


@dataclass(frozen=True)
class FieldRule:
    """Base predicate plus the checks that only make sense once it holds."""

    accepts: Callable[[Any], bool]
    message: str
    update_message: Optional[str] = None
    checks: tuple[Check, ...] = field(default_factory=tuple)
    trim: bool = False

    def message_for(self, mode: str) -> str:
        if mode == UPDATE and self.update_message:
            return self.update_message
        return self.message

    def clean(self, value: Any) -> Any:
        if self.trim and isinstance(value, str):
            return value.strip()
        return value


# ── Predicates ──

def is_filled_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _unique_in(collection: str, key: str, message: str) -> Check:
    def check(value: Any, snapshot: Snapshot) -> Optional[str]:
        if any(e.get(key) == value for e in snapshot.others(collection)):
            return message
        return None
    return check


def _gmail_address(value: str, snapshot: Snapshot) -> Optional[str]:
    if not value.endswith("@gmail.com"):
        return "Email must be a Gmail address"
    return None


def _ten_digits(value: str, snapshot: Snapshot) -> Optional[str]:
    if len(value) != 10:
        return "Phone number must be 10 digits"
    return None


def _only_digits(value: str, snapshot: Snapshot) -> Optional[str]:
    if not _DIGITS.fullmatch(value):
        return "Phone number must contain only digits"
    return None


def _members_unclaimed(members: list, snapshot: Snapshot) -> Optional[str]:
    claimed = [m for team in snapshot.others("teams") for m in team.get("members") or []]
    duplicates = [m for m in members if m in claimed]
    if duplicates:
        return f"Members {', '.join(str(m) for m in duplicates)} are already in other teams"
    return None


def _members_filled(members: list, snapshot: Snapshot) -> Optional[str]:
    if not all(is_filled_string(m) for m in members):
        return "All members must be non-empty strings"
    return None


def _required_text(label: str) -> FieldRule:
    return FieldRule(
        accepts=is_filled_string,
        message=f"{label} is required",
        update_message=f"{label} is required if provided",
        trim=True,
    )


def _ticket_text(label: str) -> FieldRule:
    return FieldRule(
        accepts=is_filled_string,
        message=f"{label} is required and cannot be empty",
        update_message=f"{label} cannot be empty",
        trim=True,
    )


# ── Schemas ──

TEAM_SCHEMA: dict[str, FieldRule] = {
    "name": FieldRule(
        accepts=is_filled_string,
        message="Team name is required",
        update_message="Team name is required if provided",
        trim=True,
        checks=(_unique_in("teams", "name", "Team name already exists"),),
    ),
    "members": FieldRule(
        accepts=lambda v: isinstance(v, list),
        message="Members should be an array",
        checks=(_members_unclaimed, _members_filled),
    ),
}

USER_SCHEMA: dict[str, FieldRule] = {
    "firstName": _required_text("First name"),
    "lastName": _required_text("Last name"),
    "emailId": FieldRule(
        accepts=is_email,
        message="Invalid email format",
        trim=True,
        checks=(
            _gmail_address,
            _unique_in("users", "emailId", "Email ID already exists"),
        ),
    ),
    "phno": FieldRule(
        accepts=lambda v: isinstance(v, str),
        message="Phone number must be 10 digits",
        trim=True,
        checks=(
            _ten_digits,
            _only_digits,
            _unique_in("users", "phno", "Phone number already exists"),
        ),
    ),
    "employeeId": FieldRule(
        accepts=is_integer,
        message="Employee ID must be an integer",
        checks=(_unique_in("users", "employeeId", "Employee ID already exists"),),
    ),
    "designation": _required_text("Designation"),
    # Not checked against the teams collection.
    "teamId": FieldRule(accepts=is_integer, message="Team ID must be an integer"),
}

TICKET_SCHEMA: dict[str, FieldRule] = {
    "title": _ticket_text("Title"),
    "description": _ticket_text("Description"),
    # Free text, not a reference to a team's name or id.
    "team": _ticket_text("Team"),
    "status": _ticket_text("Status"),
    "assignee": _ticket_text("Assignee"),
    "reporter": _ticket_text("Reporter"),
}

SCHEMAS: dict[str, dict[str, FieldRule]] = {
    "teams": TEAM_SCHEMA,
    "users": USER_SCHEMA,
    "tickets": TICKET_SCHEMA,
}


def sanitize(kind: str, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``fields`` with trimmed rules applied; unknown fields pass through."""
    schema = SCHEMAS[kind]
    return {
        name: schema[name].clean(value) if name in schema else value
        for name, value in fields.items()
    }


def validate(
    kind: str,
    fields: Mapping[str, Any],
    document: Document,
    mode: str = CREATE,
    entity_id: Optional[int] = None,
) -> list[Violation]:
    """Return every violation for ``fields`` against ``document``; empty means valid."""
    if kind not in SCHEMAS:
        raise KeyError(f"Unknown entity kind '{kind}'")
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}")

    schema = SCHEMAS[kind]
    unknown = [name for name in fields if name not in schema]
    if unknown:
        return [
            Violation(field=name, message="Invalid field", value=fields[name])
            for name in unknown
        ]

    snapshot = Snapshot(document=document, entity_id=entity_id)
    violations: list[Violation] = []
    for name, rule in schema.items():
        if name not in fields:
            if mode == CREATE:
                violations.append(Violation(field=name, message=rule.message_for(mode)))
            continue
        value = rule.clean(fields[name])
        if not rule.accepts(value):
            violations.append(Violation(field=name, message=rule.message_for(mode), value=value))
            continue
        for check in rule.checks:
            message = check(value, snapshot)
            if message:
                violations.append(Violation(field=name, message=message, value=value))
    return violations
