"""Ratings router — POST /ratings adds a rating and refreshes the average."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from bisbis.database import get_store
from bisbis.payload import Payload
from bisbis.routers.responses import get_payload, render
from bisbis.services import rating_service
from bisbis.store.base import Store

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("")
async def add_rating(
    payload: Payload = Depends(get_payload),
    store: Store = Depends(get_store),
) -> Response:
    """
    Body: {"restaurantId": <positive int>, "rating": <0..5>}.
    The insert and the average recompute commit together or not at all.
    """
    return render(await rating_service.add_rating(store, payload))
