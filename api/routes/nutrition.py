"""Food diary, water tracking and nutrition statistics"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.enums import GraphPeriod
from domain.helpers import utcnow
from domain.models import User
from domain.schemas.nutrition_schemas import (
    LogFoodRequest,
    MealResponse,
    DailySummaryResponse,
    WaterUpdateRequest,
    WaterResponse,
    RecentFoodResponse,
    FoodSearchResult,
    NutritionGraphResponse,
    NutritionOverviewResponse,
)
from services.food_search_service import FoodSearchService
from services.nutrition_service import NutritionService

router = APIRouter(prefix="/nutrition", tags=["Nutrition"])
logger = logging.getLogger("fitnesshub.api.nutrition")


def _today(value: Optional[date]) -> date:
    return value or utcnow().date()


@router.get("/days/{day}", response_model=DailySummaryResponse)
def daily_summary(
    day: date,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return NutritionService.daily_summary(db, user, day)


@router.post("/meals", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def log_food(
    payload: LogFoodRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return NutritionService.log_food(db, user, payload)


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    NutritionService.delete_meal(db, user, meal_id)


@router.post("/water", response_model=WaterResponse)
def update_water(
    payload: WaterUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = NutritionService.update_water(db, user, payload.date, payload.delta)
    return WaterResponse(date=record.date, water_intake=record.water_intake)


@router.get("/recent-foods", response_model=List[RecentFoodResponse])
def recent_foods(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return NutritionService.recent_foods(db, user)


@router.get("/foods/search", response_model=List[FoodSearchResult])
def search_foods(
    q: str = Query("", max_length=100, description="Food name to look up"),
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Recipe meals first, then USDA FoodData Central matches"""
    return FoodSearchService.search(db, q)


@router.get("/graph", response_model=NutritionGraphResponse)
def nutrition_graph(
    period: GraphPeriod = GraphPeriod.DAILY,
    today: Optional[date] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    points = NutritionService.nutrition_graph(db, user, period, _today(today))
    return NutritionGraphResponse(period=period, points=points)


@router.get("/overview", response_model=NutritionOverviewResponse)
def nutrition_overview(
    period: GraphPeriod = GraphPeriod.DAILY,
    today: Optional[date] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    totals = NutritionService.nutrition_overview(db, user, period, _today(today))
    return NutritionOverviewResponse(period=period, **totals)
