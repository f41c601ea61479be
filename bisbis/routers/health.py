"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from bisbis import __version__
from bisbis.database import get_store
from bisbis.store.base import Store, StoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def welcome() -> str:
    return "Welcome to BISBIS Server"


@router.get("/health")
async def health() -> dict:
    """Liveness probe — returns 200 if the process is running."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready(store: Store = Depends(get_store)) -> JSONResponse:
    """
    Readiness probe — checks store connectivity.
    Returns 200 with {"db": "ok"} when ready, or 503 with {"db": "error"}.
    """
    try:
        await store.ping()
    except StoreError as exc:
        logger.warning("Store check failed: %s", exc)
        return JSONResponse(content={"db": "error"}, status_code=503)
    return JSONResponse(content={"db": "ok"}, status_code=200)
