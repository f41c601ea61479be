"""
BISBIS — FastAPI application entry point.
Lifespan: optionally create tables → verify connectivity → dispose engine on shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from bisbis import __version__
from bisbis.config import settings
from bisbis.database import check_db_connectivity, engine
from bisbis.errors import GatewayError
from bisbis.models import Base
from bisbis.routers import health, orders, ratings, restaurants

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create tables if CREATE_TABLES_ON_STARTUP is set (idempotent).
    2. Verify DB connectivity.
    """
    logger.info("Starting BISBIS gateway (env=%s)", settings.app_env)

    if settings.create_tables_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified.")

    ok = await check_db_connectivity()
    if not ok:
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    yield

    logger.info("Shutting down BISBIS gateway.")
    await engine.dispose()


app = FastAPI(
    title="BISBIS",
    description="Validating data gateway for restaurants, dishes, ratings and orders.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(restaurants.router)
app.include_router(ratings.router)
app.include_router(orders.router)


# ── Exception handlers ───────────────────────────────────────────────────────


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
    """Errors raised outside a pipeline (e.g. an unparseable body)."""
    logger.info("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.detail)
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Plain-text 500 for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return PlainTextResponse("Internal Server Error", status_code=500)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bisbis.main:app", host=settings.server_host, port=settings.server_port)
