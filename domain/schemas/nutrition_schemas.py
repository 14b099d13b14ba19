from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import date as Date, datetime

from domain.enums import GraphPeriod, MealType
from domain.schemas.profile_schemas import IntakeResponse


class LogFoodRequest(BaseModel):
    """A food picked from search or the recent list; macros are per unit"""

    date: Date
    meal_type: MealType
    food_item_name: str = Field(..., min_length=1, max_length=200)
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fats: float = Field(0, ge=0)
    quantity: float = Field(1, gt=0, le=100)

    @field_validator("meal_type", mode="before")
    @classmethod
    def normalize_meal_type(cls, v):
        if isinstance(v, str):
            for member in MealType:
                if member.value.lower() == v.strip().lower():
                    return member
        return v

    @field_validator("food_item_name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("food_item_name must not be blank")
        return v


class MealResponse(BaseModel):
    id: int
    meal_type: str
    food_item_name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    quantity: float

    model_config = {"from_attributes": True}


class MacroTotals(BaseModel):
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0


class DailySummaryResponse(BaseModel):
    date: Date
    meals: Dict[str, List[MealResponse]]
    totals: MacroTotals
    water_intake: int
    recommended: Optional[IntakeResponse] = None
    remaining_calories: Optional[int] = None


class WaterUpdateRequest(BaseModel):
    date: Date
    delta: int = Field(..., ge=-20, le=20, description="Glasses to add (negative removes)")


class WaterResponse(BaseModel):
    date: Date
    water_intake: int


class RecentFoodResponse(BaseModel):
    food_item_name: str
    meal_type: Optional[str] = None
    calories: float
    protein: float
    carbs: float
    fats: float
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FoodSearchResult(BaseModel):
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    source: str = Field(..., description="'recipe' or 'usda'")
    external_id: Optional[int] = None


class GraphPoint(BaseModel):
    label: str
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0


class NutritionGraphResponse(BaseModel):
    period: GraphPeriod
    points: List[GraphPoint]


class NutritionOverviewResponse(MacroTotals):
    period: GraphPeriod
