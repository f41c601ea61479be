"""
Update composer — turns a validated payload into an ordered change list.

The result follows the declared field order, not payload order, so the
statement built from it is deterministic. ``None`` means there is nothing
to write.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

Change = tuple[str, Any]


def compose_update(
    payload: Mapping[str, Any],
    mutable_fields: Sequence[str],
    cleaners: Optional[Mapping[str, Callable[[Any], Any]]] = None,
) -> Optional[list[Change]]:
    """
    Return ``[(field, value), ...]`` for each mutable field present in the
    payload, or ``None`` when no mutable field is present.

    Keys outside ``mutable_fields`` are ignored here; forbidden and
    unrecognized keys must already have been rejected.
    """
    cleaners = cleaners or {}
    changes: list[Change] = []
    for field in mutable_fields:
        if field not in payload:
            continue
        value = payload[field]
        if field in cleaners:
            value = cleaners[field](value)
        changes.append((field, value))
    return changes or None


def apply_changes(record: Mapping[str, Any], changes: Sequence[Change]) -> dict[str, Any]:
    """Return a copy of ``record`` with ``changes`` merged in."""
    updated = dict(record)
    updated.update(changes)
    return updated
