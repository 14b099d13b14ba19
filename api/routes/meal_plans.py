"""Meal plan catalogue, bookmarks and personalised plan requests"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.models import User
from domain.schemas.meal_plan_schemas import (
    MealPlanSummary,
    MealPlanDetailResponse,
    BookmarkResponse,
    MealPlanRequestCreate,
    MealPlanRequestResponse,
)
from services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/meal-plans", tags=["Meal Plans"])
logger = logging.getLogger("fitnesshub.api.meal_plans")


@router.get("", response_model=List[MealPlanSummary])
def list_meal_plans(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return MealPlanService.list_meal_plans(db, user)


@router.get("/bookmarks", response_model=List[MealPlanSummary])
def bookmarked_plans(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return MealPlanService.bookmarked_plans(db, user)


@router.post(
    "/requests",
    response_model=MealPlanRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def request_meal_plan(
    payload: MealPlanRequestCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    request = MealPlanService.request_meal_plan(db, user, payload)
    return MealPlanRequestResponse(
        id=request.id,
        user_id=request.user_id,
        username=user.username,
        dietary_preference=request.dietary_preference,
        comments=request.comments,
        status=request.status,
        created_at=request.created_at,
    )


@router.get("/{plan_id}", response_model=MealPlanDetailResponse)
def meal_plan_detail(
    plan_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealPlanService.meal_plan_detail(db, user, plan_id)


@router.post("/{plan_id}/bookmark", response_model=BookmarkResponse)
def toggle_bookmark(
    plan_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealPlanService.toggle_bookmark(db, user, plan_id)
