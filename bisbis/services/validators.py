"""
Field validators — per-entity type and constraint checks.

Each validator looks only at fields present in the payload; presence on
creation is the classifier's job. Checks are fail-fast and run in a fixed
order, so the first violation found is the one reported.
"""

from __future__ import annotations

from typing import Any, Callable

from bisbis.errors import (
    GatewayError,
    MalformedIdentifier,
    MissingRequiredField,
    TypeOrConstraintViolation,
)
from bisbis.payload import JsonKind, Payload, is_finite_number, is_integer_number, kind_of
from bisbis.services.classifier import classify
from bisbis.services.normalizer import OrderItem
from bisbis.utils.rounding import round_to_dp

# ── Field lists ──────────────────────────────────────────────────────────────

RESTAURANT_FIELDS = ("name", "isKosher", "cuisines")
RESTAURANT_FORBIDDEN = ("id", "averageRating", "dishes", "nextDishId")

DISH_FIELDS = ("name", "description", "price")
DISH_FORBIDDEN = ("id",)

RATING_FIELDS = ("restaurantId", "rating")
RATING_FORBIDDEN = ("id",)

ORDER_FIELDS = ("restaurantId", "orderItems")
ORDER_FORBIDDEN = ("id",)
ORDER_ITEM_FIELDS = ("dishId", "amount")

RATING_MIN = 0.0
RATING_MAX = 5.0


# ── Value cleaners applied after validation, before persistence ──────────────


def _dedupe_cuisines(cuisines: list[str]) -> list[str]:
    return list(dict.fromkeys(cuisines))  # deduplicate preserving order


RESTAURANT_CLEANERS: dict[str, Callable[[Any], Any]] = {"cuisines": _dedupe_cuisines}
DISH_CLEANERS: dict[str, Callable[[Any], Any]] = {"price": lambda p: round_to_dp(p, 2)}


# ── Primitive checks ─────────────────────────────────────────────────────────


def _is_non_empty_string(value: Any) -> bool:
    return kind_of(value) is JsonKind.STRING and len(value.strip()) > 0


def check_positive_integer(
    value: Any,
    label: str,
    *,
    error: type[GatewayError] = TypeOrConstraintViolation,
) -> int:
    """Number, mathematically integral, >= 1. Returns the value as int."""
    if not is_finite_number(value):
        raise error(f"Bad Request. {label} must be a number")
    if not is_integer_number(value) or value < 1:
        raise error(f"Bad Request. {label} must be a positive integer")
    return int(value)


# ── Restaurants ──────────────────────────────────────────────────────────────


def validate_restaurant_fields(payload: Payload) -> None:
    """name → isKosher → cuisines."""
    if payload.has("name") and not _is_non_empty_string(payload["name"]):
        raise TypeOrConstraintViolation("Bad Request. name must be a non-empty string")

    if payload.has("isKosher") and payload.kind("isKosher") is not JsonKind.BOOLEAN:
        raise TypeOrConstraintViolation("Bad Request. isKosher must be a boolean")

    if payload.has("cuisines"):
        cuisines = payload["cuisines"]
        if payload.kind("cuisines") is not JsonKind.ARRAY or not all(
            _is_non_empty_string(c) for c in cuisines
        ):
            raise TypeOrConstraintViolation(
                "Bad Request. cuisines must be an array of non-empty strings"
            )
        if len(cuisines) == 0:
            raise TypeOrConstraintViolation(
                "Bad Request. cuisines must contain at least one value"
            )


# ── Dishes ───────────────────────────────────────────────────────────────────


def validate_dish_fields(payload: Payload) -> None:
    """name → description → price."""
    if payload.has("name") and not _is_non_empty_string(payload["name"]):
        raise TypeOrConstraintViolation("Bad Request. name must be a non-empty string")

    if payload.has("description") and payload.kind("description") is not JsonKind.STRING:
        raise TypeOrConstraintViolation("Bad Request. description must be a string")

    if payload.has("price"):
        price = payload["price"]
        if not is_finite_number(price) or price < 0:
            raise TypeOrConstraintViolation(
                "Bad Request. price must be a number greater than or equal to 0"
            )


# ── Ratings / orders ─────────────────────────────────────────────────────────


def validate_restaurant_id_field(payload: Payload) -> int:
    """restaurantId in a request body: required, positive integer."""
    if not payload.has("restaurantId"):
        raise MissingRequiredField("Bad Request. Required properties are missing: restaurantId")
    return check_positive_integer(
        payload["restaurantId"], "restaurantId", error=MalformedIdentifier
    )


def validate_rating(payload: Payload) -> float:
    if not payload.has("rating"):
        raise MissingRequiredField("Bad Request. Required properties are missing: rating")
    rating = payload["rating"]
    if not is_finite_number(rating) or not RATING_MIN <= rating <= RATING_MAX:
        raise TypeOrConstraintViolation("Bad Request. rating must be a number between 0 and 5")
    return float(rating)


def validate_order_items(payload: Payload) -> list[OrderItem]:
    """
    orderItems must be a non-empty array of {dishId, amount} objects with
    positive integer values. Messages name the offending index.
    """
    items = payload.get("orderItems")
    if payload.kind("orderItems") is not JsonKind.ARRAY or len(items) == 0:
        raise TypeOrConstraintViolation("Bad Request. orderItems must be a non-empty array")

    validated: list[OrderItem] = []
    for i, item in enumerate(items):
        where = f" at index {i} of orderItems array"
        if kind_of(item) is not JsonKind.OBJECT:
            raise TypeOrConstraintViolation(
                f"Bad Request. Item{where} must be an object. "
                "Please ensure each item is formatted correctly"
            )
        classify(item, ORDER_ITEM_FIELDS, (), require_all=True, where=where)
        dish_id = check_positive_integer(item["dishId"], f"dishId property{where}")
        amount = check_positive_integer(item["amount"], f"amount property{where}")
        validated.append(OrderItem(dish_id=dish_id, amount=amount))
    return validated
