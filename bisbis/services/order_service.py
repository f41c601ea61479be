"""
Order placement.

Items are validated one index at a time, every dish must be on the
restaurant's current menu, and duplicate dishes are merged before the
single insert.
"""

from __future__ import annotations

import logging

from bisbis.payload import Payload
from bisbis.services import steps
from bisbis.services.normalizer import merge_order_items
from bisbis.services.orchestrator import MutationOrchestrator
from bisbis.services.outcomes import Outcome
from bisbis.services.pipeline import Pipeline, RequestContext
from bisbis.services.validators import ORDER_FIELDS, ORDER_FORBIDDEN
from bisbis.store.base import Store

logger = logging.getLogger(__name__)

ADD_ORDER = Pipeline(
    "add_order",
    steps.classify_payload(ORDER_FIELDS, ORDER_FORBIDDEN, require_all=True),
    steps.read_body_restaurant_id,
    steps.read_order_items,
    steps.body_restaurant_exists,
    steps.ordered_dishes_on_menu,
    failure_message="Unable to check if restaurant menu contains all ordered dishes",
)


async def add_order(store: Store, payload: Payload) -> Outcome:
    ctx = RequestContext(store=store, payload=payload)
    stopped = await ADD_ORDER.run(ctx)
    if stopped is not None:
        return stopped

    items = merge_order_items(ctx.order_items)
    if len(items) < len(ctx.order_items):
        logger.debug(
            "Merged %d order lines into %d for restaurant %s",
            len(ctx.order_items), len(items), ctx.restaurant_id,
        )
    return await MutationOrchestrator(store).add_order(ctx.restaurant_id, items)
