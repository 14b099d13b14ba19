"""
Nutrition business logic: recommended intake, the daily food diary,
water tracking and the nutrition graphs.
"""

from calendar import monthrange
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import ActivityLevel, Gender, GoalType, GraphPeriod, MealType
from domain.models import DailyNutrition, Meal, RecentMeal, User
from domain.schemas.nutrition_schemas import LogFoodRequest
from repositories import (
    DailyNutritionRepository,
    MealRepository,
    RecentMealRepository,
)

logger = logging.getLogger("fitnesshub.nutrition")

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE.value: 1.375,
    ActivityLevel.MODERATELY_ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
    ActivityLevel.SUPER_ACTIVE.value: 1.9,
}

# goal -> (calorie factor applied to TDEE, protein grams per kg of body weight)
GOAL_MULTIPLIERS = {
    GoalType.WEIGHT_LOSS.value: (0.8, 2.0),
    GoalType.MUSCLE_GAIN.value: (1.15, 2.2),
    GoalType.ENDURANCE.value: (1.0, 1.8),
    GoalType.FLEXIBILITY.value: (1.0, 1.6),
    GoalType.GENERAL_FITNESS.value: (1.0, 1.8),
}
DEFAULT_GOAL_MULTIPLIER = (1.0, 1.8)

FAT_CALORIE_SHARE = 0.3
KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fats": 9}

WEEKLY_OVERVIEW_RECORDS = 7
MONTHLY_OVERVIEW_RECORDS = 30
GRAPH_DAYS = 7
GRAPH_MONTHS = 6


def _totals(records: Iterable[Any], prefix: str = "") -> Dict[str, int]:
    """Sum calories/protein/carbs/fats of rows (meals, or daily rows with prefix='total_')"""
    sums = {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fats": 0.0}
    for record in records:
        for key in sums:
            sums[key] += getattr(record, f"{prefix}{key}") or 0
    return {key: int(round(value)) for key, value in sums.items()}


def _shift_month(year: int, month: int, offset: int):
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


class NutritionService:
    """Food diary, water intake and nutrition statistics"""

    # ------------------------------------------------------------------
    # Recommended intake
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_intake(
        weight: float,
        height: float,
        age: int,
        gender: Optional[str],
        activity_level: Optional[str],
        goal: Optional[str],
    ) -> Dict[str, int]:
        """Mifflin-St Jeor BMR scaled by activity, then split into macros by goal"""
        bmr = 10 * weight + 6.25 * height - 5 * age
        bmr += 5 if gender == Gender.MALE.value else -161

        tdee = bmr * ACTIVITY_MULTIPLIERS.get(
            activity_level, ACTIVITY_MULTIPLIERS[ActivityLevel.SEDENTARY.value]
        )
        calorie_factor, protein_per_kg = GOAL_MULTIPLIERS.get(goal, DEFAULT_GOAL_MULTIPLIER)

        calories = tdee * calorie_factor
        protein = weight * protein_per_kg
        fats = calories * FAT_CALORIE_SHARE / KCAL_PER_GRAM["fats"]
        carbs = (
            calories
            - (protein * KCAL_PER_GRAM["protein"] + fats * KCAL_PER_GRAM["fats"])
        ) / KCAL_PER_GRAM["carbs"]

        return {
            "bmr": int(round(bmr)),
            "tdee": int(round(tdee)),
            "calories": int(round(calories)),
            "protein": int(round(protein)),
            "carbs": int(round(carbs)),
            "fats": int(round(fats)),
        }

    @staticmethod
    def recommended_intake(user: User) -> Dict[str, int]:
        if not user.weight or not user.height or not user.age:
            raise ServiceValidationError(
                "Please complete your weight, height and age to get a recommended intake."
            )
        return NutritionService.calculate_intake(
            user.weight,
            user.height,
            user.age,
            user.gender,
            user.activity_level,
            user.goal,
        )

    # ------------------------------------------------------------------
    # Daily diary
    # ------------------------------------------------------------------

    @staticmethod
    def group_meals(meals: Iterable[Meal]) -> Dict[str, List[Meal]]:
        """Bucket meals by diary section; meal_type matches case-insensitively"""
        groups: Dict[str, List[Meal]] = {meal_type.value: [] for meal_type in MealType}
        lookup = {meal_type.value.lower(): meal_type.value for meal_type in MealType}
        for meal in meals:
            section = lookup.get((meal.meal_type or "").strip().lower())
            if section:
                groups[section].append(meal)
        return groups

    @staticmethod
    def _refresh_totals(db: Session, record: DailyNutrition) -> Dict[str, int]:
        meals = MealRepository(db).list_for_day(record.id)
        totals = _totals(meals)
        record.total_calories = totals["calories"]
        record.total_protein = totals["protein"]
        record.total_carbs = totals["carbs"]
        record.total_fats = totals["fats"]
        db.flush()
        return totals

    @staticmethod
    def daily_summary(db: Session, user: User, day: date) -> Dict[str, Any]:
        record = DailyNutritionRepository(db).get_for_date(user.id, day)
        meals: List[Meal] = []
        totals = {"calories": 0, "protein": 0, "carbs": 0, "fats": 0}
        water = 0
        if record is not None:
            meals = MealRepository(db).list_for_day(record.id)
            totals = NutritionService._refresh_totals(db, record)
            water = record.water_intake or 0
            db.commit()

        recommended = None
        remaining = None
        if user.weight and user.height and user.age:
            recommended = NutritionService.recommended_intake(user)
            remaining = recommended["calories"] - totals["calories"]

        logger.info(f"daily_summary_fetched user_id={user.id} date={day} meals={len(meals)}")
        return {
            "date": day,
            "meals": NutritionService.group_meals(meals),
            "totals": totals,
            "water_intake": water,
            "recommended": recommended,
            "remaining_calories": remaining,
        }

    @staticmethod
    def log_food(db: Session, user: User, data: LogFoodRequest) -> Meal:
        """Add a food to the diary for the given date and meal section"""
        record = DailyNutritionRepository(db).get_or_create(user.id, data.date)
        quantity = data.quantity
        meal = Meal(
            meal_type=data.meal_type.value,
            food_item_name=data.food_item_name,
            calories=data.calories * quantity,
            protein=data.protein * quantity,
            carbs=data.carbs * quantity,
            fats=data.fats * quantity,
            quantity=quantity,
            nutrition_id=record.id,
            user_id=user.id,
        )
        MealRepository(db).add(meal)

        recent_repo = RecentMealRepository(db)
        if not recent_repo.has_food(user.id, data.food_item_name):
            recent_repo.add(
                RecentMeal(
                    user_id=user.id,
                    food_item_name=data.food_item_name,
                    meal_type=data.meal_type.value,
                    calories=data.calories,
                    protein=data.protein,
                    carbs=data.carbs,
                    fats=data.fats,
                )
            )

        NutritionService._refresh_totals(db, record)
        db.commit()
        db.refresh(meal)
        logger.info(
            f"food_logged user_id={user.id} date={data.date} meal_type={meal.meal_type} "
            f"food={meal.food_item_name!r} quantity={quantity}"
        )
        return meal

    @staticmethod
    def delete_meal(db: Session, user: User, meal_id: int) -> None:
        meal_repo = MealRepository(db)
        meal = meal_repo.get_for_user(meal_id, user.id)
        if not meal:
            raise NotFoundError(f"Meal {meal_id} not found")
        record = meal.daily_nutrition
        meal_repo.delete(meal)
        if record is not None:
            NutritionService._refresh_totals(db, record)
        db.commit()
        logger.info(f"meal_deleted user_id={user.id} meal_id={meal_id}")

    @staticmethod
    def update_water(db: Session, user: User, day: date, delta: int) -> DailyNutrition:
        """Add or remove glasses of water; the count never drops below zero"""
        record = DailyNutritionRepository(db).get_or_create(user.id, day)
        record.water_intake = max(0, (record.water_intake or 0) + delta)
        db.commit()
        db.refresh(record)
        logger.info(f"water_updated user_id={user.id} date={day} water={record.water_intake}")
        return record

    @staticmethod
    def recent_foods(db: Session, user: User) -> List[RecentMeal]:
        return RecentMealRepository(db).list_recent(user.id, settings.recent_foods_limit)

    # ------------------------------------------------------------------
    # Graphs
    # ------------------------------------------------------------------

    @staticmethod
    def _point(label: str, records: Iterable[DailyNutrition]) -> Dict[str, Any]:
        return {"label": label, **_totals(records, prefix="total_")}

    @staticmethod
    def nutrition_graph(
        db: Session, user: User, period: GraphPeriod, today: date
    ) -> List[Dict[str, Any]]:
        repo = DailyNutritionRepository(db)

        if period == GraphPeriod.DAILY:
            start = today - timedelta(days=GRAPH_DAYS - 1)
            by_day = {r.date: r for r in repo.list_between(user.id, start, today)}
            points = []
            for offset in range(GRAPH_DAYS):
                day = start + timedelta(days=offset)
                record = by_day.get(day)
                points.append(
                    NutritionService._point(day.strftime("%a"), [record] if record else [])
                )
            return points

        if period == GraphPeriod.WEEKLY:
            first = today.replace(day=1)
            last = today.replace(day=monthrange(today.year, today.month)[1])
            # Sunday-started weeks; isoweekday() % 7 gives Sunday=0
            lead = first.isoweekday() % 7
            week_count = (lead + last.day + 6) // 7
            buckets: List[List[DailyNutrition]] = [[] for _ in range(week_count)]
            for record in repo.list_between(user.id, first, last):
                buckets[(lead + record.date.day - 1) // 7].append(record)
            return [
                NutritionService._point(f"Week {index + 1}", bucket)
                for index, bucket in enumerate(buckets)
            ]

        points = []
        for offset in range(GRAPH_MONTHS - 1, -1, -1):
            year, month = _shift_month(today.year, today.month, -offset)
            start = date(year, month, 1)
            end = date(year, month, monthrange(year, month)[1])
            points.append(
                NutritionService._point(
                    start.strftime("%b"), repo.list_between(user.id, start, end)
                )
            )
        return points

    @staticmethod
    def nutrition_overview(
        db: Session, user: User, period: GraphPeriod, today: date
    ) -> Dict[str, int]:
        repo = DailyNutritionRepository(db)
        if period == GraphPeriod.DAILY:
            record = repo.get_for_date(user.id, today)
            return _totals([record] if record else [], prefix="total_")
        limit = (
            WEEKLY_OVERVIEW_RECORDS
            if period == GraphPeriod.WEEKLY
            else MONTHLY_OVERVIEW_RECORDS
        )
        return _totals(repo.latest(user.id, limit), prefix="total_")
