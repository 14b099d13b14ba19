"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.nutrition_repository import (
    DailyNutritionRepository,
    MealRepository,
    RecentMealRepository,
)
from repositories.recipe_repository import RecipeMealRepository
from repositories.meal_plan_repository import (
    MealPlanRepository,
    BookmarkRepository,
    MealPlanRequestRepository,
)
from repositories.moment_repository import (
    MomentRepository,
    LikeRepository,
    CommentRepository,
    ReportRepository,
)
from repositories.article_repository import ArticleRepository
from repositories.challenge_repository import (
    ChallengeRepository,
    TaskRepository,
    ParticipantRepository,
    SubmissionRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "DailyNutritionRepository",
    "MealRepository",
    "RecentMealRepository",
    "RecipeMealRepository",
    "MealPlanRepository",
    "BookmarkRepository",
    "MealPlanRequestRepository",
    "MomentRepository",
    "LikeRepository",
    "CommentRepository",
    "ReportRepository",
    "ArticleRepository",
    "ChallengeRepository",
    "TaskRepository",
    "ParticipantRepository",
    "SubmissionRepository",
]
