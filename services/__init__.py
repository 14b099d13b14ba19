"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.nutrition_service import NutritionService
from services.food_search_service import FoodSearchService
from services.recipe_service import RecipeService
from services.meal_plan_service import MealPlanService
from services.moment_service import MomentService
from services.article_service import ArticleService
from services.moderation_service import ModerationService
from services.challenge_service import ChallengeService
from services.admin_service import AdminService

__all__ = [
    "AuthService",
    "ProfileService",
    "NutritionService",
    "FoodSearchService",
    "RecipeService",
    "MealPlanService",
    "MomentService",
    "ArticleService",
    "ModerationService",
    "ChallengeService",
    "AdminService",
]
