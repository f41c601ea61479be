"""
create_tables.py — idempotent table creation script.
Run this before starting the gateway for the first time, or after schema changes.
Safe to run multiple times (create_all skips existing tables).

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio

from bisbis.database import engine
from bisbis.models import Base  # noqa: F401 — triggers model registration


async def main() -> None:
    """Create restaurants, ratings and orders tables."""
    print("Creating tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("  ✓ restaurants, ratings, orders ready")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
