"""
Request pipeline — the ordered checks an operation runs before it writes.

A pipeline is a declared tuple of steps. Each step reads and enriches a
``RequestContext``; raising a GatewayError stops the pipeline with a
``Rejected`` outcome, raising StoreError stops it with ``Failed``.
Steps never write to the store.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

from bisbis.errors import GatewayError, StoreFailure
from bisbis.payload import Payload
from bisbis.services.existence import DishLocation
from bisbis.services.normalizer import OrderItem
from bisbis.services.outcomes import Failed, Outcome, Rejected
from bisbis.store.base import Store, StoreError

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Inputs of one request plus whatever the steps resolve along the way."""

    store: Store
    payload: Payload = field(default_factory=Payload)
    params: dict[str, str] = field(default_factory=dict)

    restaurant_id: Optional[int] = None
    restaurant: Optional[dict[str, Any]] = None
    dish_id: Optional[str] = None
    dish: Optional[DishLocation] = None
    rating: Optional[float] = None
    order_items: list[OrderItem] = field(default_factory=list)


Step = Callable[[RequestContext], Union[None, Awaitable[None]]]


class Pipeline:
    """
    Runs ``steps`` in declared order, stopping at the first failure.

    ``run`` returns ``None`` when every step passed, otherwise the
    Rejected/Failed outcome of the step that stopped it.
    """

    def __init__(self, name: str, *steps: Step, failure_message: str = "Unable to validate request") -> None:
        self.name = name
        self.steps = steps
        self.failure_message = failure_message

    def __repr__(self) -> str:
        return f"Pipeline({self.name!r}, steps={self.step_names})"

    @property
    def step_names(self) -> list[str]:
        return [getattr(s, "__name__", repr(s)) for s in self.steps]

    async def run(self, ctx: RequestContext) -> Optional[Outcome]:
        for step in self.steps:
            try:
                result = step(ctx)
                if inspect.isawaitable(result):
                    await result
            except GatewayError as exc:
                logger.info(
                    "%s rejected at %s: %s",
                    self.name, getattr(step, "__name__", step), exc.detail,
                )
                return Rejected(exc)
            except StoreError as exc:
                logger.error("%s failed at %s: %s", self.name, getattr(step, "__name__", step), exc)
                return Failed(StoreFailure(f"Internal Server Error. {self.failure_message}"))
        return None
