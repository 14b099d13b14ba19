"""
Recipe and meal plan models.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Uuid,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base
from domain.enums import GoalType, ApprovalStatus
from domain.helpers import utcnow


class RecipeMeal(Base):
    """Admin-authored recipe; ingredients are a JSON array of {name, quantity, unit}"""

    __tablename__ = "recipe_meals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Integer, nullable=False, default=0)
    carbs = Column(Integer, nullable=False, default=0)
    fats = Column(Integer, nullable=False, default=0)
    ingredients = Column(Text, nullable=False, default="[]")
    instructions = Column(Text)
    serving_size = Column(Text)
    image_base64 = Column(Text)

    # Relationships
    plan_links = relationship(
        "MealPlanMeal", back_populates="recipe_meal", cascade="all, delete-orphan"
    )


class MealPlan(Base):
    """Curated set of recipes with denormalised nutrition totals"""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    total_calories = Column(Integer, nullable=False, default=0)
    total_protein = Column(Integer, nullable=False, default=0)
    total_carbs = Column(Integer, nullable=False, default=0)
    total_fats = Column(Integer, nullable=False, default=0)
    is_premium = Column(Boolean, nullable=False, default=False)
    goal = Column(Text, nullable=False, default=GoalType.WEIGHT_LOSS.value)

    # Relationships
    meal_links = relationship(
        "MealPlanMeal",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        order_by="MealPlanMeal.id",
    )
    bookmarks = relationship(
        "UserMealPlan", back_populates="meal_plan", cascade="all, delete-orphan"
    )

    @property
    def recipes(self):
        return [link.recipe_meal for link in self.meal_links if link.recipe_meal]


class MealPlanMeal(Base):
    """Link between a meal plan and one of its recipes"""

    __tablename__ = "meal_plan_meals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_plan_id = Column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False
    )
    recipe_meal_id = Column(
        Integer, ForeignKey("recipe_meals.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    meal_plan = relationship("MealPlan", back_populates="meal_links")
    recipe_meal = relationship("RecipeMeal", back_populates="plan_links")


class UserMealPlan(Base):
    """Bookmark of a meal plan by a user"""

    __tablename__ = "user_meal_plans"
    __table_args__ = (
        UniqueConstraint("user_id", "meal_plan_id", name="uq_user_meal_plan"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    meal_plan_id = Column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="bookmarks")
    meal_plan = relationship("MealPlan", back_populates="bookmarks")


class MealPlanRequest(Base):
    """Request for a personalised meal plan"""

    __tablename__ = "meal_plan_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    dietary_preference = Column(Text, nullable=False)
    comments = Column(Text)
    status = Column(Text, nullable=False, default=ApprovalStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="meal_plan_requests")
