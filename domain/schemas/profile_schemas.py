from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import datetime
from uuid import UUID

from domain.enums import (
    Gender,
    GoalType,
    FitnessLevel,
    ActivityLevel,
    SubscriptionPlan,
)

# Numbers typed into the app arrive either as ints or as digit strings
WholeNumber = Union[int, str]


class UserInfoRequest(BaseModel):
    """Onboarding form; every field is required (checked by ProfileService)"""

    username: Optional[str] = None
    age: Optional[WholeNumber] = None
    height: Optional[WholeNumber] = Field(None, description="Height in cm")
    weight: Optional[WholeNumber] = Field(None, description="Weight in kg")
    gender: Optional[Gender] = None
    country: Optional[str] = None
    goal: Optional[GoalType] = None
    fitness_level: Optional[FitnessLevel] = None
    activity_level: Optional[ActivityLevel] = None


class ProfileUpdateRequest(BaseModel):
    """Partial update of the personal details shown on the profile screen"""

    username: Optional[str] = None
    age: Optional[WholeNumber] = None
    height: Optional[WholeNumber] = None
    weight: Optional[WholeNumber] = None
    gender: Optional[Gender] = None
    country: Optional[str] = None
    profile_picture: Optional[str] = Field(None, description="Base64 image")


class FitnessPreferencesRequest(BaseModel):
    goal: Optional[GoalType] = None
    fitness_level: Optional[FitnessLevel] = None
    activity_level: Optional[ActivityLevel] = None


class ProfileResponse(BaseModel):
    id: UUID
    email: str
    username: Optional[str] = None
    age: Optional[int] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    gender: Optional[str] = None
    country: Optional[str] = None
    profile_picture: Optional[str] = None
    goal: Optional[str] = None
    fitness_level: Optional[str] = None
    activity_level: Optional[str] = None
    role: int
    is_premium: bool
    bmi: Optional[float] = None
    gender_label: str
    goal_label: str
    fitness_level_label: str
    activity_level_label: str
    created_at: Optional[datetime] = None


class IntakeResponse(BaseModel):
    """Recommended daily intake derived from BMR/TDEE"""

    bmr: int
    tdee: int
    calories: int
    protein: int
    carbs: int
    fats: int


class SubscriptionRequest(BaseModel):
    plan: SubscriptionPlan


class SubscriptionResponse(BaseModel):
    plan: SubscriptionPlan
    amount: int = Field(..., description="Price in minor currency units")
    currency: str
    is_premium: bool


class MomentTile(BaseModel):
    id: int
    image_base64: Optional[str] = None
    caption: Optional[str] = None


class ArticleSummary(BaseModel):
    id: int
    title: str
    image_base64: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PublicProfileResponse(BaseModel):
    """Another user's page: the moment grid is padded with nulls to full rows"""

    user_id: UUID
    username: Optional[str] = None
    profile_picture: Optional[str] = None
    moments: List[Optional[MomentTile]]
    articles: List[ArticleSummary]
