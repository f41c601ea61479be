"""
Property classifier — sorts payload keys into missing / forbidden / unrecognized.

The three checks are independent pure functions. ``classify`` runs them in
the order the routes report them and raises the first non-empty category.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from bisbis.errors import ForbiddenField, MissingRequiredField, UnrecognizedField


def find_missing(payload: Mapping[str, Any], allowed: Sequence[str]) -> list[str]:
    """Allow-listed names with no key in the payload. An explicit null is present."""
    return [name for name in allowed if name not in payload]


def find_forbidden(payload: Mapping[str, Any], forbidden: Sequence[str]) -> list[str]:
    """Forbid-listed names present as keys, whatever their value."""
    return [name for name in forbidden if name in payload]


def find_unrecognized(
    payload: Mapping[str, Any],
    allowed: Sequence[str],
    forbidden: Sequence[str],
) -> list[str]:
    """Payload keys in neither list, in payload order."""
    return [key for key in payload if key not in allowed and key not in forbidden]


def classify(
    payload: Mapping[str, Any],
    allowed: Sequence[str],
    forbidden: Sequence[str],
    *,
    require_all: bool,
    where: str = "",
) -> None:
    """
    Raise on the first failing category: missing (only when ``require_all``),
    then forbidden, then unrecognized.

    ``where`` is appended to messages for nested objects, e.g.
    " at index 2 of orderItems array".
    """
    if require_all:
        missing = find_missing(payload, allowed)
        if missing:
            raise MissingRequiredField(
                f"Bad Request. Required properties are missing{where}: {', '.join(missing)}"
            )

    forbidden_found = find_forbidden(payload, forbidden)
    if forbidden_found:
        raise ForbiddenField(
            "Unprocessable Entity. The following properties cannot be included "
            f"in the request{where}: {', '.join(forbidden_found)}"
        )

    unrecognized = find_unrecognized(payload, allowed, forbidden)
    if unrecognized:
        raise UnrecognizedField(
            f"Bad Request. Unrecognized properties{where or ' in request'}: {', '.join(unrecognized)}"
        )
