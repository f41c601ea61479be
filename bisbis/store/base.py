"""
Store capability — everything the core needs from the relational store.

Components receive a ``Store`` explicitly; nothing reaches for a global
connection. ``SqlStore`` is the production implementation.
"""

from __future__ import annotations

from typing import Any, AsyncContextManager, Optional, Protocol, Sequence


class StoreError(Exception):
    """Any persistence-layer failure (driver error, lost connection, ...)."""


class Store(Protocol):
    """
    Rows are plain dicts keyed by column name:
      restaurants: id, name, average_rating, is_kosher, cuisines, dishes, next_dish_id
      dishes (inside restaurants.dishes): id, name, description, price
    """

    async def ping(self) -> None: ...

    def transaction(self) -> AsyncContextManager[Any]:
        """Begin on enter, commit on clean exit, roll back on any exception."""
        ...

    async def fetch_restaurant(self, restaurant_id: int) -> Optional[dict[str, Any]]: ...

    async def fetch_restaurant_for_update(self, restaurant_id: int) -> Optional[dict[str, Any]]:
        """Like fetch_restaurant, but the row stays locked until the transaction ends."""
        ...

    async def list_restaurants(self, cuisine: Optional[str] = None) -> list[dict[str, Any]]: ...

    async def fetch_dishes(self, restaurant_id: int) -> Optional[list[dict[str, Any]]]: ...

    async def insert_restaurant(self, name: str, is_kosher: bool, cuisines: list[str]) -> int: ...

    async def update_restaurant(
        self, restaurant_id: int, changes: Sequence[tuple[str, Any]]
    ) -> None: ...

    async def delete_restaurant(self, restaurant_id: int) -> None: ...

    async def write_dishes(
        self,
        restaurant_id: int,
        dishes: list[dict[str, Any]],
        next_dish_id: Optional[int] = None,
    ) -> None: ...

    async def insert_rating(self, restaurant_id: int, rating: float) -> int: ...

    async def delete_ratings(self, restaurant_id: int) -> None: ...

    async def recompute_average_rating(self, restaurant_id: int) -> None: ...

    async def insert_order(self, restaurant_id: int, order_items: list[dict[str, Any]]) -> int: ...

    async def delete_orders(self, restaurant_id: int) -> None: ...
