from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import GoalType
from domain.schemas.recipe_schemas import RecipeMealResponse


class MealPlanSaveRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_free: bool = True
    goal: GoalType = GoalType.WEIGHT_LOSS
    recipe_ids: List[int] = Field(default_factory=list)


class MacroPercentages(BaseModel):
    carbs: float = 0.0
    protein: float = 0.0
    fats: float = 0.0


class MealPlanSummary(BaseModel):
    """Meal plan card as listed to an app user"""

    id: int
    name: str
    description: Optional[str] = None
    description_preview: str
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int
    is_premium: bool
    goal: Optional[str] = None
    image_base64: Optional[str] = None
    is_recommended: bool
    is_locked: bool
    is_bookmarked: bool


class MealPlanDetailResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int
    is_premium: bool
    goal: Optional[str] = None
    is_bookmarked: bool
    macro_percentages: MacroPercentages
    recipes: List[RecipeMealResponse]


class AdminMealPlanResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int
    is_premium: bool
    goal: Optional[str] = None
    recipe_ids: List[int]


class BookmarkResponse(BaseModel):
    meal_plan_id: int
    is_bookmarked: bool


class MealPlanRequestCreate(BaseModel):
    dietary_preference: Optional[str] = None
    comments: Optional[str] = Field(None, max_length=1000)


class MealPlanRequestResponse(BaseModel):
    id: int
    user_id: UUID
    username: Optional[str] = None
    dietary_preference: str
    comments: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
