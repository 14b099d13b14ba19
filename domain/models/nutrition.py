"""
Food diary models: one daily_nutrition row per user and date, with its meals.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Float,
    Date,
    DateTime,
    ForeignKey,
    Uuid,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base
from domain.helpers import utcnow


class DailyNutrition(Base):
    """Per-day totals; recomputed from the meals whenever they change"""

    __tablename__ = "daily_nutrition"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_nutrition_user_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    total_calories = Column(Integer, nullable=False, default=0)
    total_protein = Column(Integer, nullable=False, default=0)
    total_carbs = Column(Integer, nullable=False, default=0)
    total_fats = Column(Integer, nullable=False, default=0)
    water_intake = Column(Integer, nullable=False, default=0)

    # Relationships
    user = relationship("User", back_populates="daily_nutrition")
    meals = relationship(
        "Meal", back_populates="daily_nutrition", cascade="all, delete-orphan"
    )


class Meal(Base):
    """A logged food; macros are already multiplied by the quantity"""

    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_type = Column(Text, nullable=False)
    food_item_name = Column(Text, nullable=False)
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fats = Column(Float, nullable=False, default=0)
    quantity = Column(Float, nullable=False, default=1)
    nutrition_id = Column(
        Integer, ForeignKey("daily_nutrition.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    daily_nutrition = relationship("DailyNutrition", back_populates="meals")
    user = relationship("User", back_populates="meals")


class RecentMeal(Base):
    """Distinct foods a user has logged, for quick re-selection"""

    __tablename__ = "recent_meals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    food_item_name = Column(Text, nullable=False)
    meal_type = Column(Text)
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fats = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="recent_meals")
