"""
Mutation orchestrator — every write the gateway performs, each one atomic.

Multi-statement sequences (cascading restaurant delete, rating insert plus
average recompute, dish-list read-modify-write under a row lock) run inside
a single store transaction. A StoreError anywhere rolls the whole sequence back and comes
out as a ``Failed(StoreFailure)`` outcome; nothing is retried.
"""

from __future__ import annotations

import functools
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Sequence

from bisbis.errors import GatewayError, NotFound, StoreFailure
from bisbis.services.composer import Change, apply_changes
from bisbis.services.existence import find_dish
from bisbis.services.normalizer import OrderItem
from bisbis.services.outcomes import Failed, Outcome, Rejected, Success
from bisbis.store.base import Store, StoreError

logger = logging.getLogger(__name__)


def _as_outcome(
    method: Callable[..., Awaitable[Outcome]],
) -> Callable[..., Awaitable[Outcome]]:
    """Turn a StoreFailure into Failed and any other gateway error into Rejected."""

    @functools.wraps(method)
    async def wrapper(self: "MutationOrchestrator", *args: Any, **kwargs: Any) -> Outcome:
        try:
            return await method(self, *args, **kwargs)
        except StoreFailure as exc:
            return Failed(exc)
        except GatewayError as exc:
            return Rejected(exc)

    return wrapper


class MutationOrchestrator:
    """Sequences writes against one Store with all-or-nothing semantics."""

    def __init__(self, store: Store) -> None:
        self._store = store

    @asynccontextmanager
    async def _atomic(self, failure_message: str) -> AsyncIterator[Store]:
        try:
            async with self._store.transaction():
                yield self._store
        except StoreError as exc:
            logger.error("%s (rolled back): %s", failure_message, exc)
            raise StoreFailure(f"Internal Server Error. {failure_message}") from exc

    # ── Restaurants ──────────────────────────────────────────────────────────

    @_as_outcome
    async def create_restaurant(self, name: str, is_kosher: bool, cuisines: list[str]) -> Outcome:
        async with self._atomic("Unable to add new restaurant") as store:
            restaurant_id = await store.insert_restaurant(name, is_kosher, cuisines)
        logger.info("Created restaurant %s", restaurant_id)
        return Success(status_code=201)

    @_as_outcome
    async def update_restaurant(self, restaurant_id: int, changes: Sequence[Change]) -> Outcome:
        async with self._atomic("Unable to update restaurant") as store:
            await store.update_restaurant(restaurant_id, changes)
        return Success()

    @_as_outcome
    async def delete_restaurant(self, restaurant_id: int) -> Outcome:
        """Ratings, then orders, then the restaurant row, in one transaction."""
        async with self._atomic("Unable to delete restaurant") as store:
            await store.delete_ratings(restaurant_id)
            await store.delete_orders(restaurant_id)
            await store.delete_restaurant(restaurant_id)
        logger.info("Deleted restaurant %s with its ratings and orders", restaurant_id)
        return Success(status_code=204)

    # ── Dishes ───────────────────────────────────────────────────────────────

    @staticmethod
    async def _locked_dishes(store: Store, restaurant_id: int) -> dict[str, Any]:
        """
        Re-read the restaurant with its row locked. The dish list is read,
        modified and written back as a whole, so a concurrent writer must
        wait for this transaction to end.
        """
        row = await store.fetch_restaurant_for_update(restaurant_id)
        if row is None:
            raise NotFound("The restaurant with the specified id was not found")
        row["dishes"] = list(row["dishes"] or [])
        return row

    @_as_outcome
    async def add_dish(
        self, restaurant_id: int, name: str, description: str, price: float
    ) -> Outcome:
        """
        Append a dish under the restaurant's next dish id and advance the
        counter. Ids are never decremented, so deleted ids are never reused.
        """
        async with self._atomic("Unable to add new dish") as store:
            row = await self._locked_dishes(store, restaurant_id)
            next_dish_id = row["next_dish_id"]
            new_dish = {
                "id": str(next_dish_id),
                "name": name,
                "description": description,
                "price": price,
            }
            await store.write_dishes(restaurant_id, [*row["dishes"], new_dish], next_dish_id + 1)
        return Success(status_code=201)

    @_as_outcome
    async def update_dish(
        self, restaurant_id: int, dish_id: str, changes: Sequence[Change]
    ) -> Outcome:
        async with self._atomic("Unable to update dish") as store:
            row = await self._locked_dishes(store, restaurant_id)
            location = find_dish(row["dishes"], dish_id)
            location.dishes[location.index] = apply_changes(location.dish, changes)
            await store.write_dishes(restaurant_id, location.dishes)
        return Success()

    @_as_outcome
    async def delete_dish(self, restaurant_id: int, dish_id: str) -> Outcome:
        async with self._atomic("Unable to delete dish") as store:
            row = await self._locked_dishes(store, restaurant_id)
            location = find_dish(row["dishes"], dish_id)
            del location.dishes[location.index]
            await store.write_dishes(restaurant_id, location.dishes)
        return Success(status_code=204)

    # ── Ratings ──────────────────────────────────────────────────────────────

    @_as_outcome
    async def add_rating(self, restaurant_id: int, rating: float) -> Outcome:
        """Insert the rating, then recompute the average including it."""
        async with self._atomic("Unable to add new rating") as store:
            await store.insert_rating(restaurant_id, rating)
            await store.recompute_average_rating(restaurant_id)
        return Success()

    # ── Orders ───────────────────────────────────────────────────────────────

    @_as_outcome
    async def add_order(self, restaurant_id: int, order_items: Sequence[OrderItem]) -> Outcome:
        async with self._atomic("Unable to add new order") as store:
            order_id = await store.insert_order(
                restaurant_id, [item.to_json() for item in order_items]
            )
        return Success({"orderId": order_id})
