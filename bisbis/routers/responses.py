"""Request-body dependency and outcome → HTTP response rendering."""

from __future__ import annotations

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from bisbis.payload import Payload, parse_payload
from bisbis.services.outcomes import Outcome, Success


async def get_payload(request: Request) -> Payload:
    """FastAPI dependency: the raw JSON body as a Payload (empty body → {})."""
    return parse_payload(await request.body())


def render(outcome: Outcome) -> Response:
    """
    Success with a value → JSON; Success without one → empty body.
    Rejected / Failed → plain-text detail with the error's status code.
    """
    if isinstance(outcome, Success):
        if outcome.value is None:
            return Response(status_code=outcome.status_code)
        return JSONResponse(
            content=jsonable_encoder(outcome.value),
            status_code=outcome.status_code,
        )
    return PlainTextResponse(outcome.error.detail, status_code=outcome.error.status_code)
