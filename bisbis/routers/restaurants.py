"""
Restaurants router — restaurants and their menus.

Endpoints:
  GET    /restaurants[?cuisine=X]                — list, optionally by cuisine
  GET    /restaurants/{id}                       — one restaurant with dishes
  POST   /restaurants                            — create (201)
  PUT    /restaurants/{id}                       — partial update
  DELETE /restaurants/{id}                       — delete with ratings and orders (204)
  GET    /restaurants/{id}/dishes                — menu
  POST   /restaurants/{id}/dishes                — add dish (201)
  PUT    /restaurants/{id}/dishes/{dishId}       — partial dish update
  DELETE /restaurants/{id}/dishes/{dishId}       — remove dish (204)

Path ids arrive as raw strings; the services validate them so malformed
ids get the gateway's own 400 rather than a framework 422.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from bisbis.database import get_store
from bisbis.payload import Payload
from bisbis.routers.responses import get_payload, render
from bisbis.services import restaurant_service
from bisbis.store.base import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("")
async def list_restaurants(
    cuisine: Optional[str] = Query(default=None),
    store: Store = Depends(get_store),
) -> Response:
    return render(await restaurant_service.list_restaurants(store, cuisine or None))


@router.get("/{restaurant_id}")
async def get_restaurant(restaurant_id: str, store: Store = Depends(get_store)) -> Response:
    return render(await restaurant_service.get_restaurant(store, restaurant_id))


@router.post("")
async def create_restaurant(
    payload: Payload = Depends(get_payload),
    store: Store = Depends(get_store),
) -> Response:
    return render(await restaurant_service.create_restaurant(store, payload))


@router.put("/{restaurant_id}")
async def update_restaurant(
    restaurant_id: str,
    payload: Payload = Depends(get_payload),
    store: Store = Depends(get_store),
) -> Response:
    """Only the fields present are written; an empty body is a 200 no-op."""
    return render(await restaurant_service.update_restaurant(store, restaurant_id, payload))


@router.delete("/{restaurant_id}")
async def delete_restaurant(restaurant_id: str, store: Store = Depends(get_store)) -> Response:
    return render(await restaurant_service.delete_restaurant(store, restaurant_id))


# ── Dishes ───────────────────────────────────────────────────────────────────


@router.get("/{restaurant_id}/dishes")
async def list_dishes(restaurant_id: str, store: Store = Depends(get_store)) -> Response:
    return render(await restaurant_service.list_dishes(store, restaurant_id))


@router.post("/{restaurant_id}/dishes")
async def add_dish(
    restaurant_id: str,
    payload: Payload = Depends(get_payload),
    store: Store = Depends(get_store),
) -> Response:
    return render(await restaurant_service.add_dish(store, restaurant_id, payload))


@router.put("/{restaurant_id}/dishes/{dish_id}")
async def update_dish(
    restaurant_id: str,
    dish_id: str,
    payload: Payload = Depends(get_payload),
    store: Store = Depends(get_store),
) -> Response:
    return render(
        await restaurant_service.update_dish(store, restaurant_id, dish_id, payload)
    )


@router.delete("/{restaurant_id}/dishes/{dish_id}")
async def delete_dish(
    restaurant_id: str,
    dish_id: str,
    store: Store = Depends(get_store),
) -> Response:
    return render(await restaurant_service.delete_dish(store, restaurant_id, dish_id))
