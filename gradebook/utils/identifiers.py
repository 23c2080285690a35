"""Identifier validation shared by every public report operation."""
from typing import Any

from gradebook.exceptions import InvalidIdentifierError


def validate_identifier(value: Any, field: str = "id") -> int:
    """
    Normalize a learner/course/assessment id to a positive int.

    Accepts ints and strings of ASCII digits ("42"). Rejects bools, floats,
    None, zero, negatives and anything else with InvalidIdentifierError.
    """
    if isinstance(value, bool):
        raise InvalidIdentifierError(field, value)

    if isinstance(value, int):
        normalized = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped.isascii() or not stripped.isdigit():
            raise InvalidIdentifierError(field, value)
        normalized = int(stripped)
    else:
        raise InvalidIdentifierError(field, value)

    if normalized <= 0:
        raise InvalidIdentifierError(field, value)
    return normalized
