"""Pydantic schemas package."""

from bisbis.schemas.restaurant import DishRead, RestaurantDetail, RestaurantSummary

__all__ = ["DishRead", "RestaurantDetail", "RestaurantSummary"]
