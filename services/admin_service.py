from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from domain.enums import ApprovalStatus, UserRole
from domain.models import User
from domain.schemas.admin_schemas import AdminUserUpdate
from repositories import (
    ArticleRepository,
    ChallengeRepository,
    MealPlanRepository,
    MealPlanRequestRepository,
    RecipeMealRepository,
    ReportRepository,
    SubmissionRepository,
    UserRepository,
)

logger = logging.getLogger("fitnesshub.admin")

ROLE_LABELS = {
    UserRole.USER.value: "Normal User",
    UserRole.ADMIN.value: "Admin",
    UserRole.SUPER_ADMIN.value: "Super Admin",
}


class AdminService:
    """User management and dashboard counters for the back-office"""

    @staticmethod
    def role_label(role: Any) -> str:
        return ROLE_LABELS.get(role, "Unknown Role")

    @staticmethod
    def user_view(user: User) -> Dict[str, Any]:
        return {
            "id": user.id,
            "email": user.email,
            "username": user.username,
            "profile_picture": user.profile_picture,
            "role": user.role,
            "role_label": AdminService.role_label(user.role),
            "is_premium": bool(user.is_premium),
        }

    @staticmethod
    def list_users(
        db: Session,
        search: Optional[str] = None,
        sort_by: str = "username",
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        users = UserRepository(db).list_manageable(search, sort_by, descending)
        return [AdminService.user_view(u) for u in users]

    @staticmethod
    def _manageable_user(db: Session, user_id: UUID) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user or user.is_super_admin:
            raise NotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def edit_user(db: Session, actor: User, user_id: UUID, data: AdminUserUpdate) -> Dict[str, Any]:
        user = AdminService._manageable_user(db, user_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("role") is not None:
            if not actor.is_super_admin:
                logger.warning(f"role_change_denied actor_id={actor.id} user_id={user_id}")
                raise ForbiddenError("Only a Super Admin can change user roles.")
            user.role = int(changes["role"])
        if "username" in changes:
            username = (changes["username"] or "").strip()
            if not username:
                raise ServiceValidationError("Username cannot be empty.")
            user.username = username
        if "profile_picture" in changes:
            user.profile_picture = changes["profile_picture"]

        db.commit()
        db.refresh(user)
        logger.info(f"user_edited actor_id={actor.id} user_id={user_id} fields={sorted(changes)}")
        return AdminService.user_view(user)

    @staticmethod
    def delete_user(db: Session, actor: User, user_id: UUID) -> None:
        user = AdminService._manageable_user(db, user_id)
        UserRepository(db).delete(user)
        db.commit()
        logger.info(f"user_deleted actor_id={actor.id} user_id={user_id}")

    @staticmethod
    def dashboard(db: Session, now: datetime) -> Dict[str, int]:
        return {
            "total_users": UserRepository(db).count_manageable(),
            "active_challenges": ChallengeRepository(db).count_active(now),
            "reported_moments": ReportRepository(db).count(),
            "pending_articles": ArticleRepository(db).count_by_status(ApprovalStatus.PENDING),
            "meal_plans": MealPlanRepository(db).count(),
            "recipe_meals": RecipeMealRepository(db).count(),
            "pending_meal_plan_requests": MealPlanRequestRepository(db).count_pending(),
            "pending_submissions": SubmissionRepository(db).count_pending(),
        }
