"""
Inbound payloads as a mapping of field name to tagged JSON value.

Validators never inspect raw Python types directly; they ask the payload for
the JSON kind of a field and compare it against a ``JsonKind``. This keeps
``True`` from passing as a number and ``None`` from passing as "absent".
"""

from __future__ import annotations

import json
import math
import sys
from enum import Enum
from typing import Any, Iterator, Mapping

from bisbis.errors import TypeOrConstraintViolation


class JsonKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    ABSENT = "absent"


def kind_of(value: Any) -> JsonKind:
    """Classify a decoded JSON value. bool subclasses int, so it is tested first."""
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def is_integer_number(value: Any) -> bool:
    """True for JSON numbers with no fractional part (2 and 2.0 alike)."""
    if kind_of(value) is not JsonKind.NUMBER:
        return False
    if isinstance(value, int):
        return True
    return value.is_integer()


class Payload(Mapping[str, Any]):
    """Read-only view over a decoded JSON object."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Payload({self._data!r})"

    def has(self, name: str) -> bool:
        return name in self._data

    def kind(self, name: str) -> JsonKind:
        if name not in self._data:
            return JsonKind.ABSENT
        return kind_of(self._data[name])

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


def _reject_constant(name: str) -> float:
    # json.loads accepts NaN / Infinity by default; strict JSON does not.
    raise ValueError(f"invalid JSON constant {name}")


def parse_payload(raw: bytes | str) -> Payload:
    """
    Decode a request body into a Payload.

    An empty body is an empty object. Anything that is not a JSON object
    is rejected as a TypeOrConstraintViolation, and so is a body that is
    not valid UTF-8.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        if not raw.strip():
            return Payload()
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:  # includes UnicodeDecodeError
        raise TypeOrConstraintViolation(
            "Bad Request. Request body must be valid JSON"
        ) from exc
    if kind_of(data) is not JsonKind.OBJECT:
        raise TypeOrConstraintViolation(
            "Bad Request. Request body must be a JSON object"
        )
    return Payload(data)


def is_finite_number(value: Any) -> bool:
    """
    Finite as a double sees it. json decodes long integer literals as
    arbitrary-size ints; one beyond the float range counts as infinite.
    """
    if kind_of(value) is not JsonKind.NUMBER:
        return False
    if isinstance(value, int):
        return abs(value) <= sys.float_info.max
    return math.isfinite(value)
