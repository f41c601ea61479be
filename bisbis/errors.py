"""
Gateway error kinds.

Every rejection or failure produced by the core is one of these. The HTTP
layer renders them as plain text using the attached status code.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class: carries the error kind, HTTP status and plain-text detail."""

    kind: str = "GatewayError"
    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.detail!r})"


class MalformedIdentifier(GatewayError):
    kind = "MalformedIdentifier"
    status_code = 400


class MissingRequiredField(GatewayError):
    kind = "MissingRequiredField"
    status_code = 400


class TypeOrConstraintViolation(GatewayError):
    kind = "TypeOrConstraintViolation"
    status_code = 400


class UnrecognizedField(GatewayError):
    kind = "UnrecognizedField"
    status_code = 400


class ForbiddenField(GatewayError):
    kind = "ForbiddenField"
    status_code = 422


class NotFound(GatewayError):
    kind = "NotFound"
    status_code = 404


class StoreFailure(GatewayError):
    kind = "StoreFailure"
    status_code = 500
