"""
Domain models package - SQLAlchemy ORM models of the hosted tables.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import User
from domain.models.nutrition import DailyNutrition, Meal, RecentMeal
from domain.models.meal_plan import (
    RecipeMeal,
    MealPlan,
    MealPlanMeal,
    UserMealPlan,
    MealPlanRequest,
)
from domain.models.community import Moment, Like, Comment, Report, Article
from domain.models.challenge import (
    Challenge,
    Task,
    ChallengeParticipant,
    ChallengeSubmission,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User
    "User",
    # Nutrition
    "DailyNutrition",
    "Meal",
    "RecentMeal",
    # Recipes and meal plans
    "RecipeMeal",
    "MealPlan",
    "MealPlanMeal",
    "UserMealPlan",
    "MealPlanRequest",
    # Community
    "Moment",
    "Like",
    "Comment",
    "Report",
    "Article",
    # Challenges
    "Challenge",
    "Task",
    "ChallengeParticipant",
    "ChallengeSubmission",
]
