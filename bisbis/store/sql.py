"""SqlStore — the Store capability over an SQLAlchemy AsyncSession."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bisbis.store import statements
from bisbis.store.base import StoreError
from bisbis.store.statements import Statement

logger = logging.getLogger(__name__)


class SqlStore:
    """
    Executes the statements in ``bisbis.store.statements`` on one session.

    Writes are only made durable by ``transaction()``; the session's
    implicit transaction is committed there or rolled back on error.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _run(self, statement: Statement) -> Result:
        try:
            return await self._session.execute(text(statement.sql), statement.params)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Statement failed: %s", exc)
            raise StoreError(str(exc)) from exc

    async def ping(self) -> None:
        await self._run(Statement("SELECT 1"))

    async def _rollback(self) -> None:
        try:
            await self._session.rollback()
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Rollback failed: %s", exc)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SqlStore"]:
        try:
            yield self
            await self._session.commit()
        except (SQLAlchemyError, OSError) as exc:
            # COMMIT itself failed (serialization failure, lost connection)
            logger.error("Commit failed: %s", exc)
            await self._rollback()
            raise StoreError(str(exc)) from exc
        except Exception:
            await self._rollback()
            raise

    # ── Reads ────────────────────────────────────────────────────────────────

    async def fetch_restaurant(self, restaurant_id: int) -> Optional[dict[str, Any]]:
        result = await self._run(statements.select_restaurant(restaurant_id))
        row = result.fetchone()
        return dict(row._mapping) if row else None

    async def fetch_restaurant_for_update(self, restaurant_id: int) -> Optional[dict[str, Any]]:
        result = await self._run(statements.select_restaurant(restaurant_id, for_update=True))
        row = result.fetchone()
        return dict(row._mapping) if row else None

    async def list_restaurants(self, cuisine: Optional[str] = None) -> list[dict[str, Any]]:
        result = await self._run(statements.select_restaurants(cuisine))
        return [dict(r._mapping) for r in result.fetchall()]

    async def fetch_dishes(self, restaurant_id: int) -> Optional[list[dict[str, Any]]]:
        result = await self._run(statements.select_dishes(restaurant_id))
        row = result.fetchone()
        if not row:
            return None
        return list(row.dishes or [])

    # ── Restaurants ──────────────────────────────────────────────────────────

    async def insert_restaurant(self, name: str, is_kosher: bool, cuisines: list[str]) -> int:
        result = await self._run(statements.insert_restaurant(name, is_kosher, cuisines))
        return result.scalar_one()

    async def update_restaurant(
        self, restaurant_id: int, changes: Sequence[tuple[str, Any]]
    ) -> None:
        await self._run(
            statements.build_update(
                "restaurants", statements.RESTAURANT_COLUMNS, changes, restaurant_id
            )
        )

    async def delete_restaurant(self, restaurant_id: int) -> None:
        await self._run(statements.delete_restaurant(restaurant_id))

    async def write_dishes(
        self,
        restaurant_id: int,
        dishes: list[dict[str, Any]],
        next_dish_id: Optional[int] = None,
    ) -> None:
        await self._run(
            statements.update_dishes(restaurant_id, json.dumps(dishes), next_dish_id)
        )

    # ── Ratings ──────────────────────────────────────────────────────────────

    async def insert_rating(self, restaurant_id: int, rating: float) -> int:
        result = await self._run(statements.insert_rating(restaurant_id, rating))
        return result.scalar_one()

    async def delete_ratings(self, restaurant_id: int) -> None:
        await self._run(statements.delete_ratings(restaurant_id))

    async def recompute_average_rating(self, restaurant_id: int) -> None:
        await self._run(statements.recompute_average_rating(restaurant_id))

    # ── Orders ───────────────────────────────────────────────────────────────

    async def insert_order(self, restaurant_id: int, order_items: list[dict[str, Any]]) -> int:
        result = await self._run(statements.insert_order(restaurant_id, json.dumps(order_items)))
        return result.scalar_one()

    async def delete_orders(self, restaurant_id: int) -> None:
        await self._run(statements.delete_orders(restaurant_id))
