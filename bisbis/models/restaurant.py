"""Restaurant ORM model. The menu lives inline as a JSONB array."""

from sqlalchemy import ARRAY, Boolean, Column, Double, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from bisbis.database import Base


class Restaurant(Base):
    """
    A restaurant and its menu.

    dishes holds {"id", "name", "description", "price"} objects; dish ids
    are the string form of next_dish_id at insertion time. next_dish_id only
    ever increases, so a deleted dish's id is never handed out again.
    average_rating is derived from ratings and never written by clients.
    """

    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    average_rating = Column(Double, nullable=True)
    is_kosher = Column(Boolean, nullable=False)
    cuisines = Column(ARRAY(Text), nullable=False, server_default="{}")

    dishes = Column(JSONB, nullable=False, server_default="[]")
    next_dish_id = Column(Integer, nullable=False, server_default="1")

    # Relationships
    ratings = relationship("Rating", back_populates="restaurant")
    orders = relationship("Order", back_populates="restaurant")
