"""Profile routes for the signed-in user"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Any, Dict
import logging

from api.dependencies import get_auth_account, get_current_user, get_db
from domain.mappers import UserMapper
from domain.models import User
from domain.schemas.profile_schemas import (
    UserInfoRequest,
    ProfileUpdateRequest,
    FitnessPreferencesRequest,
    ProfileResponse,
    IntakeResponse,
    SubscriptionRequest,
    SubscriptionResponse,
)
from services.nutrition_service import NutritionService
from services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = logging.getLogger("fitnesshub.api.profile")


@router.put("/user-info", response_model=ProfileResponse)
def save_user_info(
    payload: UserInfoRequest,
    account: Dict[str, Any] = Depends(get_auth_account),
    db: Session = Depends(get_db),
):
    """Onboarding form submitted right after the first sign in"""
    user = ProfileService.save_user_info(
        db, UUID(str(account["user_id"])), account.get("email"), payload
    )
    return UserMapper.to_response(user)


@router.get("", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user)):
    return UserMapper.to_response(user)


@router.patch("", response_model=ProfileResponse)
def edit_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserMapper.to_response(ProfileService.update_profile(db, user, payload))


@router.patch("/fitness-preferences", response_model=ProfileResponse)
def edit_fitness_preferences(
    payload: FitnessPreferencesRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = ProfileService.update_fitness_preferences(db, user, payload)
    return UserMapper.to_response(user)


@router.get("/intake", response_model=IntakeResponse)
def recommended_intake(user: User = Depends(get_current_user)):
    return NutritionService.recommended_intake(user)


@router.post("/subscription", response_model=SubscriptionResponse)
def upgrade_subscription(
    payload: SubscriptionRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProfileService.upgrade_subscription(db, user, payload.plan)
