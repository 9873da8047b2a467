# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Helpers shared by the entity controllers."""

import re

from ticketdesk.core.errors import ValidationError
from ticketdesk.models.domain import Violation

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_entity_id(raw: str, field: str, message: str) -> int:
    """Turn a path segment into an id, or fail the request with a 400."""
    if not _INT_PATTERN.fullmatch(raw):
        raise ValidationError([Violation(field=field, message=message, value=raw)])
    return int(raw)
