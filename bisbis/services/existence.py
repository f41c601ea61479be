"""
Existence checkers — resolve referenced restaurants and dishes in the store.

Syntactic problems raise MalformedIdentifier (400); a well-formed id with
no matching record raises NotFound (404). Store errors propagate as
StoreError for the pipeline to report.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

from bisbis.errors import MalformedIdentifier, NotFound
from bisbis.store.base import Store

_DIGITS = re.compile(r"[0-9]+")

# Ids are INTEGER columns; anything larger cannot exist.
MAX_ID = 2**31 - 1


@dataclass
class DishLocation:
    """A restaurant's dish list and the position of the requested dish in it."""

    dishes: list[dict[str, Any]]
    index: int

    @property
    def dish(self) -> dict[str, Any]:
        return self.dishes[self.index]


def parse_route_id(raw: str, label: str = "id") -> int:
    """A path segment must be all ASCII digits and at least 1."""
    if not _DIGITS.fullmatch(raw) or int(raw) < 1:
        raise MalformedIdentifier(f"Bad Request. {label} must be a positive integer")
    return int(raw)


async def require_restaurant(store: Store, restaurant_id: int, label: str = "id") -> dict[str, Any]:
    """Return the restaurant row or raise NotFound."""
    row = None
    if restaurant_id <= MAX_ID:
        row = await store.fetch_restaurant(restaurant_id)
    if row is None:
        raise NotFound(f"The restaurant with the specified {label} was not found")
    return row


def find_dish(dishes: list[dict[str, Any]], dish_id: str) -> DishLocation:
    """Linear scan of a menu for a dish with this id."""
    for index, dish in enumerate(dishes):
        if dish.get("id") == dish_id:
            return DishLocation(dishes=dishes, index=index)

    raise NotFound(
        f"A dish with id {dish_id} was not found in the specified restaurant's menu"
    )


async def locate_dish(store: Store, restaurant_id: int, dish_id: str) -> DishLocation:
    dishes = await store.fetch_dishes(restaurant_id)
    if dishes is None:
        raise NotFound("The restaurant with the specified id was not found")
    return find_dish(dishes, dish_id)


async def require_dishes_on_menu(
    store: Store, restaurant_id: int, dish_ids: Iterable[int]
) -> None:
    """Every ordered dish id must be on the restaurant's current menu."""
    dishes = await store.fetch_dishes(restaurant_id) or []
    on_menu = {int(dish["id"]) for dish in dishes}
    missing = [str(d) for d in dish_ids if d not in on_menu]
    if missing:
        raise NotFound(
            "Unable to process the order. The following dishIds were not found "
            f"in the specified restaurant's menu: {', '.join(missing)}"
        )
