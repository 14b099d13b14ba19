"""
Meal plan repositories - plans, their recipe links, bookmarks and requests
"""

from typing import List, Optional, Sequence, Set
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import (
    MealPlan,
    MealPlanMeal,
    MealPlanRequest,
    UserMealPlan,
)
from domain.enums import ApprovalStatus


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plans"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def list_ordered(self) -> List[MealPlan]:
        return (
            self.db.query(MealPlan)
            .options(selectinload(MealPlan.meal_links).selectinload(MealPlanMeal.recipe_meal))
            .order_by(MealPlan.id.asc())
            .all()
        )

    def list_by_ids(self, plan_ids: Sequence[int]) -> List[MealPlan]:
        if not plan_ids:
            return []
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.id.in_(plan_ids))
            .order_by(MealPlan.id.asc())
            .all()
        )

    def replace_meals(self, plan: MealPlan, recipe_ids: Sequence[int]) -> None:
        """Drop every recipe link of the plan and add the given ones (flushes)"""
        self.db.query(MealPlanMeal).filter(
            MealPlanMeal.meal_plan_id == plan.id
        ).delete(synchronize_session=False)
        for recipe_id in recipe_ids:
            self.db.add(MealPlanMeal(meal_plan_id=plan.id, recipe_meal_id=recipe_id))
        self.db.flush()
        self.db.expire(plan, ["meal_links"])


class BookmarkRepository(BaseRepository[UserMealPlan]):
    """Repository for user_meal_plans bookmarks"""

    def __init__(self, db: Session):
        super().__init__(db, UserMealPlan)

    def get(self, user_id: UUID, meal_plan_id: int) -> Optional[UserMealPlan]:
        return (
            self.db.query(UserMealPlan)
            .filter(
                UserMealPlan.user_id == user_id,
                UserMealPlan.meal_plan_id == meal_plan_id,
            )
            .first()
        )

    def plan_ids_for_user(self, user_id: UUID) -> Set[int]:
        rows = (
            self.db.query(UserMealPlan.meal_plan_id)
            .filter(UserMealPlan.user_id == user_id)
            .all()
        )
        return {row[0] for row in rows}


class MealPlanRequestRepository(BaseRepository[MealPlanRequest]):
    """Repository for personalised meal plan requests"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlanRequest)

    def list_pending(self) -> List[MealPlanRequest]:
        return (
            self.db.query(MealPlanRequest)
            .filter(MealPlanRequest.status == ApprovalStatus.PENDING.value)
            .order_by(MealPlanRequest.created_at.asc(), MealPlanRequest.id.asc())
            .all()
        )

    def count_pending(self) -> int:
        return (
            self.db.query(func.count(MealPlanRequest.id))
            .filter(MealPlanRequest.status == ApprovalStatus.PENDING.value)
            .scalar()
            or 0
        )
