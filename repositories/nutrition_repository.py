"""
Nutrition repositories - daily totals, logged meals and recent foods
"""

from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import DailyNutrition, Meal, RecentMeal


class DailyNutritionRepository(BaseRepository[DailyNutrition]):
    """Repository for daily_nutrition rows"""

    def __init__(self, db: Session):
        super().__init__(db, DailyNutrition)

    def get_for_date(self, user_id: UUID, day: date) -> Optional[DailyNutrition]:
        return (
            self.db.query(DailyNutrition)
            .filter(DailyNutrition.user_id == user_id, DailyNutrition.date == day)
            .first()
        )

    def get_or_create(self, user_id: UUID, day: date) -> DailyNutrition:
        """Fetch the row for the day, creating an empty one if missing (flushes)"""
        record = self.get_for_date(user_id, day)
        if record is None:
            record = DailyNutrition(
                user_id=user_id,
                date=day,
                total_calories=0,
                total_protein=0,
                total_carbs=0,
                total_fats=0,
                water_intake=0,
            )
            self.add(record)
        return record

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> List[DailyNutrition]:
        """Rows with start <= date <= end, oldest first"""
        return (
            self.db.query(DailyNutrition)
            .filter(
                DailyNutrition.user_id == user_id,
                DailyNutrition.date >= start,
                DailyNutrition.date <= end,
            )
            .order_by(DailyNutrition.date.asc())
            .all()
        )

    def latest(self, user_id: UUID, limit: int) -> List[DailyNutrition]:
        """Most recent rows, newest first"""
        return (
            self.db.query(DailyNutrition)
            .filter(DailyNutrition.user_id == user_id)
            .order_by(DailyNutrition.date.desc())
            .limit(limit)
            .all()
        )


class MealRepository(BaseRepository[Meal]):
    """Repository for logged meals"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def list_for_day(self, nutrition_id: int) -> List[Meal]:
        return (
            self.db.query(Meal)
            .filter(Meal.nutrition_id == nutrition_id)
            .order_by(Meal.id.asc())
            .all()
        )

    def get_for_user(self, meal_id: int, user_id: UUID) -> Optional[Meal]:
        return (
            self.db.query(Meal)
            .filter(Meal.id == meal_id, Meal.user_id == user_id)
            .first()
        )


class RecentMealRepository(BaseRepository[RecentMeal]):
    """Repository for the recent foods list"""

    def __init__(self, db: Session):
        super().__init__(db, RecentMeal)

    def list_recent(self, user_id: UUID, limit: int) -> List[RecentMeal]:
        return (
            self.db.query(RecentMeal)
            .filter(RecentMeal.user_id == user_id)
            .order_by(RecentMeal.created_at.desc(), RecentMeal.id.desc())
            .limit(limit)
            .all()
        )

    def has_food(self, user_id: UUID, food_item_name: str) -> bool:
        return (
            self.db.query(func.count(RecentMeal.id))
            .filter(
                RecentMeal.user_id == user_id,
                RecentMeal.food_item_name == food_item_name,
            )
            .scalar()
            or 0
        ) > 0
