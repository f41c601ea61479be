"""Rating ORM model — append-only; feeds restaurants.average_rating."""

from sqlalchemy import Column, Double, ForeignKey, Integer
from sqlalchemy.orm import relationship

from bisbis.database import Base


class Rating(Base):
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    rating = Column(Double, nullable=False)  # 0..5 inclusive

    # Relationships
    restaurant = relationship("Restaurant", back_populates="ratings")
