"""Typed results of a core operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from bisbis.errors import GatewayError


@dataclass(frozen=True)
class Success:
    value: Any = None
    status_code: int = 200


@dataclass(frozen=True)
class Rejected:
    """Validation or existence check failed; nothing was written."""

    error: GatewayError


@dataclass(frozen=True)
class Failed:
    """The store failed; any partial write has been rolled back."""

    error: GatewayError


Outcome = Union[Success, Rejected, Failed]
