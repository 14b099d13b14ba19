"""
Meal plans: browsing, bookmarks, personalised requests and admin curation.
"""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from domain.enums import ApprovalStatus
from domain.helpers import is_blank, preview_words
from domain.models import MealPlan, MealPlanRequest, User, UserMealPlan
from domain.schemas.meal_plan_schemas import MealPlanRequestCreate, MealPlanSaveRequest
from repositories import (
    BookmarkRepository,
    MealPlanRepository,
    MealPlanRequestRepository,
    RecipeMealRepository,
)
from services.recipe_service import RecipeService

logger = logging.getLogger("fitnesshub.meal_plans")

PREMIUM_ONLY_MESSAGE = "This meal plan is available to premium members only."


def _plan_fields(plan: MealPlan) -> Dict[str, Any]:
    return {
        "id": plan.id,
        "name": plan.name,
        "description": plan.description,
        "total_calories": plan.total_calories or 0,
        "total_protein": plan.total_protein or 0,
        "total_carbs": plan.total_carbs or 0,
        "total_fats": plan.total_fats or 0,
        "is_premium": bool(plan.is_premium),
        "goal": plan.goal,
    }


class MealPlanService:
    """Meal plan catalogue for users and admins"""

    @staticmethod
    def is_locked(plan: MealPlan, user: User) -> bool:
        return bool(plan.is_premium) and not user.is_premium

    @staticmethod
    def macro_percentages(carbs: float, protein: float, fats: float) -> Dict[str, float]:
        """Share of each macro in grams, to one decimal"""
        total = (carbs or 0) + (protein or 0) + (fats or 0)
        if total <= 0:
            return {"carbs": 0.0, "protein": 0.0, "fats": 0.0}
        return {
            "carbs": round(carbs / total * 100, 1),
            "protein": round(protein / total * 100, 1),
            "fats": round(fats / total * 100, 1),
        }

    @staticmethod
    def summarize(plan: MealPlan, user: User, bookmarked: bool) -> Dict[str, Any]:
        recipes = plan.recipes
        return {
            **_plan_fields(plan),
            "description_preview": preview_words(plan.description),
            "image_base64": recipes[0].image_base64 if recipes else None,
            "is_recommended": bool(user.goal) and plan.goal == user.goal,
            "is_locked": MealPlanService.is_locked(plan, user),
            "is_bookmarked": bookmarked,
        }

    @staticmethod
    def list_meal_plans(db: Session, user: User) -> List[Dict[str, Any]]:
        plans = MealPlanRepository(db).list_ordered()
        bookmarked = BookmarkRepository(db).plan_ids_for_user(user.id)
        logger.info(f"meal_plans_listed user_id={user.id} count={len(plans)}")
        return [
            MealPlanService.summarize(plan, user, plan.id in bookmarked)
            for plan in plans
        ]

    @staticmethod
    def get_plan(db: Session, plan_id: int) -> MealPlan:
        plan = MealPlanRepository(db).get_by_id(plan_id)
        if not plan:
            raise NotFoundError(f"Meal plan {plan_id} not found")
        return plan

    @staticmethod
    def meal_plan_detail(db: Session, user: User, plan_id: int) -> Dict[str, Any]:
        plan = MealPlanService.get_plan(db, plan_id)
        if MealPlanService.is_locked(plan, user):
            logger.warning(f"meal_plan_locked user_id={user.id} plan_id={plan_id}")
            raise ForbiddenError(PREMIUM_ONLY_MESSAGE)

        bookmarked = BookmarkRepository(db).get(user.id, plan_id) is not None
        return {
            **_plan_fields(plan),
            "is_bookmarked": bookmarked,
            "macro_percentages": MealPlanService.macro_percentages(
                plan.total_carbs or 0, plan.total_protein or 0, plan.total_fats or 0
            ),
            "recipes": [RecipeService.to_dict(recipe) for recipe in plan.recipes],
        }

    @staticmethod
    def toggle_bookmark(db: Session, user: User, plan_id: int) -> Dict[str, Any]:
        MealPlanService.get_plan(db, plan_id)
        repo = BookmarkRepository(db)
        existing = repo.get(user.id, plan_id)
        if existing:
            repo.delete(existing)
        else:
            repo.add(UserMealPlan(user_id=user.id, meal_plan_id=plan_id))
        db.commit()
        logger.info(
            f"meal_plan_bookmark_toggled user_id={user.id} plan_id={plan_id} "
            f"bookmarked={existing is None}"
        )
        return {"meal_plan_id": plan_id, "is_bookmarked": existing is None}

    @staticmethod
    def bookmarked_plans(db: Session, user: User) -> List[Dict[str, Any]]:
        plan_ids = BookmarkRepository(db).plan_ids_for_user(user.id)
        plans = MealPlanRepository(db).list_by_ids(sorted(plan_ids))
        return [MealPlanService.summarize(plan, user, True) for plan in plans]

    @staticmethod
    def request_meal_plan(
        db: Session, user: User, data: MealPlanRequestCreate
    ) -> MealPlanRequest:
        if is_blank(data.dietary_preference):
            raise ServiceValidationError("Please select a dietary preference.")
        request = MealPlanRequestRepository(db).add(
            MealPlanRequest(
                user_id=user.id,
                dietary_preference=data.dietary_preference.strip(),
                comments=(data.comments or "").strip() or None,
                status=ApprovalStatus.PENDING.value,
            )
        )
        db.commit()
        db.refresh(request)
        logger.info(f"meal_plan_requested user_id={user.id} request_id={request.id}")
        return request

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    @staticmethod
    def admin_view(plan: MealPlan) -> Dict[str, Any]:
        return {
            **_plan_fields(plan),
            "recipe_ids": [link.recipe_meal_id for link in plan.meal_links],
        }

    @staticmethod
    def admin_list(db: Session) -> List[Dict[str, Any]]:
        return [MealPlanService.admin_view(p) for p in MealPlanRepository(db).list_ordered()]

    @staticmethod
    def save_meal_plan(
        db: Session, data: MealPlanSaveRequest, plan_id: Optional[int] = None
    ) -> MealPlan:
        """Create a plan, or update plan_id and replace its recipes"""
        if is_blank(data.name):
            raise ServiceValidationError("Please enter a meal plan name.")
        if not data.recipe_ids:
            raise ServiceValidationError("Please add at least one meal.")

        recipes = RecipeMealRepository(db).get_many(data.recipe_ids)
        missing = sorted(set(data.recipe_ids) - {r.id for r in recipes})
        if missing:
            raise NotFoundError(
                "Some selected meals no longer exist", details={"recipe_ids": missing}
            )

        repo = MealPlanRepository(db)
        plan = MealPlan() if plan_id is None else MealPlanService.get_plan(db, plan_id)
        plan.name = data.name.strip()
        plan.description = data.description
        plan.is_premium = not data.is_free
        plan.goal = data.goal.value
        plan.total_calories = sum(r.calories or 0 for r in recipes)
        plan.total_protein = sum(r.protein or 0 for r in recipes)
        plan.total_carbs = sum(r.carbs or 0 for r in recipes)
        plan.total_fats = sum(r.fats or 0 for r in recipes)
        if plan_id is None:
            repo.add(plan)

        repo.replace_meals(plan, [r.id for r in recipes])
        db.commit()
        db.refresh(plan)
        logger.info(
            f"meal_plan_saved plan_id={plan.id} created={plan_id is None} "
            f"recipes={len(recipes)}"
        )
        return plan

    @staticmethod
    def delete_meal_plan(db: Session, plan_id: int) -> None:
        plan = MealPlanService.get_plan(db, plan_id)
        MealPlanRepository(db).delete(plan)
        db.commit()
        logger.info(f"meal_plan_deleted plan_id={plan_id}")

    @staticmethod
    def pending_requests(db: Session) -> List[Dict[str, Any]]:
        return [
            {
                "id": r.id,
                "user_id": r.user_id,
                "username": r.user.username if r.user else None,
                "dietary_preference": r.dietary_preference,
                "comments": r.comments,
                "status": r.status,
                "created_at": r.created_at,
            }
            for r in MealPlanRequestRepository(db).list_pending()
        ]

    @staticmethod
    def pending_request_count(db: Session) -> int:
        return MealPlanRequestRepository(db).count_pending()
