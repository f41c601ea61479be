"""
Reusable pipeline steps.

Factories return named step functions so pipelines read as a declaration
and rejections log which step stopped them.
"""

from __future__ import annotations

from typing import Callable, Sequence

from bisbis.payload import Payload
from bisbis.services import existence, validators
from bisbis.services.classifier import classify
from bisbis.services.pipeline import RequestContext, Step


def classify_payload(
    allowed: Sequence[str],
    forbidden: Sequence[str],
    *,
    require_all: bool,
) -> Step:
    def step(ctx: RequestContext) -> None:
        classify(ctx.payload, allowed, forbidden, require_all=require_all)

    step.__name__ = "classify_payload"
    return step


def validate_fields(validator: Callable[[Payload], object]) -> Step:
    def step(ctx: RequestContext) -> None:
        validator(ctx.payload)

    step.__name__ = validator.__name__
    return step


# ── Identifiers ──────────────────────────────────────────────────────────────


def parse_restaurant_route_id(ctx: RequestContext) -> None:
    ctx.restaurant_id = existence.parse_route_id(ctx.params["id"], "id")


def parse_dish_route_id(ctx: RequestContext) -> None:
    ctx.dish_id = str(existence.parse_route_id(ctx.params["dishId"], "dishId"))


def read_body_restaurant_id(ctx: RequestContext) -> None:
    ctx.restaurant_id = validators.validate_restaurant_id_field(ctx.payload)


def read_rating(ctx: RequestContext) -> None:
    ctx.rating = validators.validate_rating(ctx.payload)


def read_order_items(ctx: RequestContext) -> None:
    ctx.order_items = validators.validate_order_items(ctx.payload)


# ── Existence ────────────────────────────────────────────────────────────────


async def restaurant_exists(ctx: RequestContext) -> None:
    ctx.restaurant = await existence.require_restaurant(ctx.store, ctx.restaurant_id, "id")


async def body_restaurant_exists(ctx: RequestContext) -> None:
    ctx.restaurant = await existence.require_restaurant(
        ctx.store, ctx.restaurant_id, "restaurantId"
    )


async def dish_on_menu(ctx: RequestContext) -> None:
    ctx.dish = await existence.locate_dish(ctx.store, ctx.restaurant_id, ctx.dish_id)


async def ordered_dishes_on_menu(ctx: RequestContext) -> None:
    await existence.require_dishes_on_menu(
        ctx.store, ctx.restaurant_id, [item.dish_id for item in ctx.order_items]
    )
