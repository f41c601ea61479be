"""Order ORM model — immutable once created."""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from bisbis.database import Base


class Order(Base):
    """
    A placed order. order_items is a JSONB array of {"dishId", "amount"}
    with at most one entry per dishId (duplicates are merged before insert).
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    order_items = Column(JSONB, nullable=False)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="orders")
