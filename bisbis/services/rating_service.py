"""Rating submission: validate, confirm the restaurant, insert + recompute average."""

from __future__ import annotations

from bisbis.payload import Payload
from bisbis.services import steps
from bisbis.services.orchestrator import MutationOrchestrator
from bisbis.services.outcomes import Outcome
from bisbis.services.pipeline import Pipeline, RequestContext
from bisbis.services.validators import RATING_FIELDS, RATING_FORBIDDEN
from bisbis.store.base import Store

ADD_RATING = Pipeline(
    "add_rating",
    steps.classify_payload(RATING_FIELDS, RATING_FORBIDDEN, require_all=True),
    steps.read_body_restaurant_id,
    steps.read_rating,
    steps.body_restaurant_exists,
    failure_message="Unable to validate restaurantId",
)


async def add_rating(store: Store, payload: Payload) -> Outcome:
    ctx = RequestContext(store=store, payload=payload)
    stopped = await ADD_RATING.run(ctx)
    if stopped is not None:
        return stopped
    return await MutationOrchestrator(store).add_rating(ctx.restaurant_id, ctx.rating)
