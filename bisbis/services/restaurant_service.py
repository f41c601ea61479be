"""
Restaurant and dish operations.

Each operation declares its pipeline, runs it, then hands the composed
changes to the MutationOrchestrator. Order of steps: identifiers,
payload classification, field validation, existence, then the write.
"""

from __future__ import annotations

import logging
from typing import Optional

from bisbis.errors import StoreFailure
from bisbis.payload import Payload
from bisbis.schemas.restaurant import DishRead, RestaurantDetail, RestaurantSummary
from bisbis.services import steps
from bisbis.services.composer import compose_update
from bisbis.services.orchestrator import MutationOrchestrator
from bisbis.services.outcomes import Failed, Outcome, Success
from bisbis.services.pipeline import Pipeline, RequestContext
from bisbis.services.validators import (
    DISH_CLEANERS,
    DISH_FIELDS,
    DISH_FORBIDDEN,
    RESTAURANT_CLEANERS,
    RESTAURANT_FIELDS,
    RESTAURANT_FORBIDDEN,
    validate_dish_fields,
    validate_restaurant_fields,
)
from bisbis.store.base import Store, StoreError

logger = logging.getLogger(__name__)

# ── Pipelines ────────────────────────────────────────────────────────────────

GET_RESTAURANT = Pipeline(
    "get_restaurant",
    steps.parse_restaurant_route_id,
    steps.restaurant_exists,
    failure_message="Unable to get restaurant",
)

CREATE_RESTAURANT = Pipeline(
    "create_restaurant",
    steps.classify_payload(RESTAURANT_FIELDS, RESTAURANT_FORBIDDEN, require_all=True),
    steps.validate_fields(validate_restaurant_fields),
)

UPDATE_RESTAURANT = Pipeline(
    "update_restaurant",
    steps.parse_restaurant_route_id,
    steps.classify_payload(RESTAURANT_FIELDS, RESTAURANT_FORBIDDEN, require_all=False),
    steps.validate_fields(validate_restaurant_fields),
    steps.restaurant_exists,
    failure_message="Unable to validate id",
)

DELETE_RESTAURANT = Pipeline(
    "delete_restaurant",
    steps.parse_restaurant_route_id,
    steps.restaurant_exists,
    failure_message="Unable to validate id",
)

LIST_DISHES = Pipeline(
    "list_dishes",
    steps.parse_restaurant_route_id,
    steps.restaurant_exists,
    failure_message="Unable to get dishes",
)

ADD_DISH = Pipeline(
    "add_dish",
    steps.parse_restaurant_route_id,
    steps.classify_payload(DISH_FIELDS, DISH_FORBIDDEN, require_all=True),
    steps.validate_fields(validate_dish_fields),
    steps.restaurant_exists,
    failure_message="Unable to validate id",
)

UPDATE_DISH = Pipeline(
    "update_dish",
    steps.parse_restaurant_route_id,
    steps.parse_dish_route_id,
    steps.classify_payload(DISH_FIELDS, DISH_FORBIDDEN, require_all=False),
    steps.validate_fields(validate_dish_fields),
    steps.restaurant_exists,
    steps.dish_on_menu,
    failure_message="Unable to check if restaurant menu contains the specified dish",
)

DELETE_DISH = Pipeline(
    "delete_dish",
    steps.parse_restaurant_route_id,
    steps.parse_dish_route_id,
    steps.restaurant_exists,
    steps.dish_on_menu,
    failure_message="Unable to check if restaurant menu contains the specified dish",
)


# ── Reads ────────────────────────────────────────────────────────────────────


async def list_restaurants(store: Store, cuisine: Optional[str] = None) -> Outcome:
    """All restaurants ordered by id, optionally only those serving ``cuisine``."""
    try:
        rows = await store.list_restaurants(cuisine)
    except StoreError as exc:
        logger.error("Failed to list restaurants: %s", exc)
        return Failed(StoreFailure("Internal Server Error. Unable to get restaurants"))
    return Success([RestaurantSummary.from_row(r) for r in rows])


async def get_restaurant(store: Store, raw_id: str) -> Outcome:
    ctx = RequestContext(store=store, params={"id": raw_id})
    stopped = await GET_RESTAURANT.run(ctx)
    if stopped is not None:
        return stopped
    return Success(RestaurantDetail.from_row(ctx.restaurant))


async def list_dishes(store: Store, raw_id: str) -> Outcome:
    ctx = RequestContext(store=store, params={"id": raw_id})
    stopped = await LIST_DISHES.run(ctx)
    if stopped is not None:
        return stopped
    return Success([DishRead.from_json(d) for d in ctx.restaurant.get("dishes") or []])


# ── Restaurant writes ────────────────────────────────────────────────────────


async def create_restaurant(store: Store, payload: Payload) -> Outcome:
    ctx = RequestContext(store=store, payload=payload)
    stopped = await CREATE_RESTAURANT.run(ctx)
    if stopped is not None:
        return stopped

    values = dict(compose_update(payload, RESTAURANT_FIELDS, RESTAURANT_CLEANERS))
    return await MutationOrchestrator(store).create_restaurant(
        values["name"], values["isKosher"], values["cuisines"]
    )


async def update_restaurant(store: Store, raw_id: str, payload: Payload) -> Outcome:
    """Partial update. A payload with no mutable field is a successful no-op."""
    ctx = RequestContext(store=store, payload=payload, params={"id": raw_id})
    stopped = await UPDATE_RESTAURANT.run(ctx)
    if stopped is not None:
        return stopped

    changes = compose_update(payload, RESTAURANT_FIELDS, RESTAURANT_CLEANERS)
    if changes is None:
        return Success()
    return await MutationOrchestrator(store).update_restaurant(ctx.restaurant_id, changes)


async def delete_restaurant(store: Store, raw_id: str) -> Outcome:
    ctx = RequestContext(store=store, params={"id": raw_id})
    stopped = await DELETE_RESTAURANT.run(ctx)
    if stopped is not None:
        return stopped
    return await MutationOrchestrator(store).delete_restaurant(ctx.restaurant_id)


# ── Dish writes ──────────────────────────────────────────────────────────────


async def add_dish(store: Store, raw_id: str, payload: Payload) -> Outcome:
    ctx = RequestContext(store=store, payload=payload, params={"id": raw_id})
    stopped = await ADD_DISH.run(ctx)
    if stopped is not None:
        return stopped

    values = dict(compose_update(payload, DISH_FIELDS, DISH_CLEANERS))
    return await MutationOrchestrator(store).add_dish(
        ctx.restaurant_id, values["name"], values["description"], values["price"]
    )


async def update_dish(store: Store, raw_id: str, raw_dish_id: str, payload: Payload) -> Outcome:
    ctx = RequestContext(
        store=store, payload=payload, params={"id": raw_id, "dishId": raw_dish_id}
    )
    stopped = await UPDATE_DISH.run(ctx)
    if stopped is not None:
        return stopped

    changes = compose_update(payload, DISH_FIELDS, DISH_CLEANERS)
    if changes is None:
        return Success()
    return await MutationOrchestrator(store).update_dish(ctx.restaurant_id, ctx.dish_id, changes)


async def delete_dish(store: Store, raw_id: str, raw_dish_id: str) -> Outcome:
    ctx = RequestContext(store=store, params={"id": raw_id, "dishId": raw_dish_id})
    stopped = await DELETE_DISH.run(ctx)
    if stopped is not None:
        return stopped
    return await MutationOrchestrator(store).delete_dish(ctx.restaurant_id, ctx.dish_id)
