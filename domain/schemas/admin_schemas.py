from pydantic import BaseModel
from typing import Optional
from uuid import UUID

from domain.enums import UserRole


class AdminUserResponse(BaseModel):
    id: UUID
    email: str
    username: Optional[str] = None
    profile_picture: Optional[str] = None
    role: int
    role_label: str
    is_premium: bool


class AdminUserUpdate(BaseModel):
    username: Optional[str] = None
    profile_picture: Optional[str] = None
    role: Optional[UserRole] = None


class DashboardResponse(BaseModel):
    """Counters shown on the admin home screen"""

    total_users: int
    active_challenges: int
    reported_moments: int
    pending_articles: int
    meal_plans: int
    recipe_meals: int
    pending_meal_plan_requests: int
    pending_submissions: int
