"""Orders router — POST /order places an order and returns its id."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from bisbis.database import get_store
from bisbis.payload import Payload
from bisbis.routers.responses import get_payload, render
from bisbis.services import order_service
from bisbis.store.base import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/order", tags=["orders"])


@router.post("")
async def add_order(
    payload: Payload = Depends(get_payload),
    store: Store = Depends(get_store),
) -> Response:
    """
    Body: {"restaurantId": <id>, "orderItems": [{"dishId": <id>, "amount": <n>}, ...]}.
    Returns {"orderId": <id>}.
    """
    return render(await order_service.add_order(store, payload))
