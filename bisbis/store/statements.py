"""
SQL statements. Every client-supplied value travels as a named bind
parameter; SQL text is built only from the constants in this module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class Statement:
    sql: str
    params: dict[str, Any] = field(default_factory=dict)


# Payload field name → column name. Only these columns can appear in a SET clause.
RESTAURANT_COLUMNS: dict[str, str] = {
    "name": "name",
    "isKosher": "is_kosher",
    "cuisines": "cuisines",
}

_RESTAURANT_SELECT = """
    SELECT id, name, average_rating, is_kosher, cuisines, dishes, next_dish_id
    FROM restaurants
"""


def build_update(
    table: str,
    columns: Mapping[str, str],
    changes: Sequence[tuple[str, Any]],
    key_value: Any,
    key_column: str = "id",
) -> Statement:
    """
    ``UPDATE <table> SET col = :col, ... WHERE <key_column> = :pk``.

    Column order follows ``changes``. A field with no entry in ``columns``
    is a programming error and raises ValueError.
    """
    if not changes:
        raise ValueError("build_update needs at least one change")

    assignments: list[str] = []
    params: dict[str, Any] = {}
    for field_name, value in changes:
        try:
            column = columns[field_name]
        except KeyError:
            raise ValueError(f"{field_name!r} is not an updatable column of {table}") from None
        assignments.append(f"{column} = :{column}")
        params[column] = value
    params["pk"] = key_value

    return Statement(
        f"UPDATE {table} SET {', '.join(assignments)} WHERE {key_column} = :pk",
        params,
    )


# ── Restaurants ──────────────────────────────────────────────────────────────


def select_restaurant(restaurant_id: int, for_update: bool = False) -> Statement:
    """``for_update`` locks the row until the transaction ends."""
    sql = _RESTAURANT_SELECT + "WHERE id = :pk"
    if for_update:
        sql += " FOR UPDATE"
    return Statement(sql, {"pk": restaurant_id})


def select_restaurants(cuisine: str | None = None) -> Statement:
    if cuisine is None:
        return Statement(_RESTAURANT_SELECT + "ORDER BY id ASC")
    return Statement(
        _RESTAURANT_SELECT + "WHERE :cuisine = ANY(cuisines) ORDER BY id ASC",
        {"cuisine": cuisine},
    )


def select_dishes(restaurant_id: int) -> Statement:
    return Statement("SELECT dishes FROM restaurants WHERE id = :pk", {"pk": restaurant_id})


def insert_restaurant(name: str, is_kosher: bool, cuisines: list[str]) -> Statement:
    return Statement(
        """
        INSERT INTO restaurants (name, is_kosher, cuisines)
        VALUES (:name, :is_kosher, :cuisines)
        RETURNING id
        """,
        {"name": name, "is_kosher": is_kosher, "cuisines": cuisines},
    )


def delete_restaurant(restaurant_id: int) -> Statement:
    return Statement("DELETE FROM restaurants WHERE id = :pk", {"pk": restaurant_id})


def update_dishes(restaurant_id: int, dishes_json: str, next_dish_id: int | None = None) -> Statement:
    """``dishes_json`` is the already-serialised JSONB value."""
    if next_dish_id is None:
        return Statement(
            "UPDATE restaurants SET dishes = :dishes WHERE id = :pk",
            {"dishes": dishes_json, "pk": restaurant_id},
        )
    return Statement(
        "UPDATE restaurants SET dishes = :dishes, next_dish_id = :next_dish_id WHERE id = :pk",
        {"dishes": dishes_json, "next_dish_id": next_dish_id, "pk": restaurant_id},
    )


# ── Ratings ──────────────────────────────────────────────────────────────────


def insert_rating(restaurant_id: int, rating: float) -> Statement:
    return Statement(
        "INSERT INTO ratings (restaurant_id, rating) VALUES (:restaurant_id, :rating) RETURNING id",
        {"restaurant_id": restaurant_id, "rating": rating},
    )


def delete_ratings(restaurant_id: int) -> Statement:
    return Statement("DELETE FROM ratings WHERE restaurant_id = :pk", {"pk": restaurant_id})


def recompute_average_rating(restaurant_id: int) -> Statement:
    return Statement(
        """
        UPDATE restaurants
        SET average_rating = (
            SELECT AVG(rating) FROM ratings WHERE restaurant_id = :pk
        )
        WHERE id = :pk
        """,
        {"pk": restaurant_id},
    )


# ── Orders ───────────────────────────────────────────────────────────────────


def insert_order(restaurant_id: int, order_items_json: str) -> Statement:
    return Statement(
        """
        INSERT INTO orders (restaurant_id, order_items)
        VALUES (:restaurant_id, :order_items)
        RETURNING id
        """,
        {"restaurant_id": restaurant_id, "order_items": order_items_json},
    )


def delete_orders(restaurant_id: int) -> Statement:
    return Statement("DELETE FROM orders WHERE restaurant_id = :pk", {"pk": restaurant_id})
