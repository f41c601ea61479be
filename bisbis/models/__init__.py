"""SQLAlchemy ORM models package."""

from bisbis.database import Base
from bisbis.models.restaurant import Restaurant
from bisbis.models.rating import Rating
from bisbis.models.order import Order

__all__ = ["Base", "Restaurant", "Rating", "Order"]
