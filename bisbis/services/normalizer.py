"""Order normalizer — merges line items that reference the same dish."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class OrderItem:
    dish_id: int
    amount: int

    def to_json(self) -> dict[str, int]:
        return {"dishId": self.dish_id, "amount": self.amount}


def merge_order_items(items: Iterable[OrderItem]) -> list[OrderItem]:
    """
    Sum amounts per dish_id. The first occurrence of a dish fixes its
    position; later occurrences are folded into it and dropped.
    """
    merged: dict[int, int] = {}
    for item in items:
        merged[item.dish_id] = merged.get(item.dish_id, 0) + item.amount
    return [OrderItem(dish_id=d, amount=a) for d, a in merged.items()]
