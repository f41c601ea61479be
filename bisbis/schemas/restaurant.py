"""Pydantic read models for restaurants and dishes (camelCase on the wire)."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bisbis.utils.rounding import round_to_dp


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DishRead(_CamelModel):
    """A menu entry. ``id`` is the string form of the per-restaurant counter."""

    id: str
    name: str
    description: str
    price: float

    @classmethod
    def from_json(cls, dish: Mapping[str, Any]) -> "DishRead":
        return cls(
            id=str(dish["id"]),
            name=dish["name"],
            description=dish["description"],
            price=dish["price"],
        )


class RestaurantSummary(_CamelModel):
    """Row returned by GET /restaurants. averageRating is null until rated."""

    id: str
    name: str
    average_rating: Optional[float] = None
    is_kosher: bool
    cuisines: list[str] = Field(default_factory=list)

    @staticmethod
    def _fields_from_row(row: Mapping[str, Any]) -> dict[str, Any]:
        average = row.get("average_rating")
        return {
            "id": str(row["id"]),
            "name": row["name"],
            # Stored at full precision; exposed at 2 dp.
            "average_rating": round_to_dp(average, 2) if average is not None else None,
            "is_kosher": row["is_kosher"],
            "cuisines": list(row.get("cuisines") or []),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RestaurantSummary":
        return cls(**cls._fields_from_row(row))


class RestaurantDetail(RestaurantSummary):
    """GET /restaurants/{id} — the summary plus the menu."""

    dishes: list[DishRead] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RestaurantDetail":
        return cls(
            **cls._fields_from_row(row),
            dishes=[DishRead.from_json(d) for d in row.get("dishes") or []],
        )
