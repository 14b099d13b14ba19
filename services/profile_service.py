from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import ApprovalStatus, SubscriptionPlan, UserRole
from domain.helpers import is_blank
from domain.models import User
from domain.schemas.profile_schemas import (
    FitnessPreferencesRequest,
    ProfileUpdateRequest,
    UserInfoRequest,
)
from repositories import ArticleRepository, MomentRepository, UserRepository

logger = logging.getLogger("fitnesshub.profile")

# field -> (low, high, message)
BODY_METRIC_RULES = {
    "weight": (30, 300, "Please enter a valid weight between 30kg and 300kg."),
    "height": (50, 250, "Please enter a valid height between 50cm and 250cm."),
    "age": (10, 120, "Please enter a valid age between 10 and 120."),
}

ONBOARDING_REQUIRED = (
    "weight",
    "height",
    "age",
    "gender",
    "goal",
    "fitness_level",
    "activity_level",
)

GRID_COLUMNS = 3


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class ProfileService:
    """Business logic for profile management"""

    @staticmethod
    def parse_body_metric(field: str, value: Any) -> int:
        """Validate weight/height/age: whole number within the allowed range"""
        low, high, message = BODY_METRIC_RULES[field]
        if isinstance(value, bool):
            raise ServiceValidationError(message, details={"field": field})
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and value.strip().isdigit():
            number = int(value.strip())
        else:
            raise ServiceValidationError(message, details={"field": field})
        if number < low or number > high:
            raise ServiceValidationError(message, details={"field": field})
        return number

    @staticmethod
    def calculate_bmi(weight: Optional[float], height: Optional[float]) -> Optional[float]:
        """BMI rounded to one decimal; None when weight or height is unknown"""
        if not weight or not height:
            return None
        meters = height / 100
        return round(weight / (meters * meters), 1)

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            logger.warning(f"profile_not_found user_id={user_id}")
            raise NotFoundError(f"User {user_id} not found")
        logger.info(f"profile_fetched user_id={user_id}")
        return user

    @staticmethod
    def save_user_info(
        db: Session, user_id: UUID, email: Optional[str], data: UserInfoRequest
    ) -> User:
        """Onboarding: update the users row, or insert it when sign up left none"""
        values = data.model_dump()
        if any(is_blank(values.get(field)) for field in ONBOARDING_REQUIRED):
            raise ServiceValidationError("Please fill in all the fields.")

        fields: Dict[str, Any] = {
            field: ProfileService.parse_body_metric(field, values[field])
            for field in BODY_METRIC_RULES
        }
        for field in ("gender", "goal", "fitness_level", "activity_level"):
            fields[field] = _enum_value(values[field])
        for field in ("username", "country"):
            if not is_blank(values.get(field)):
                fields[field] = values[field].strip()

        user_repo = UserRepository(db)
        user = user_repo.get_by_id(user_id)
        created = user is None
        try:
            if created:
                if not email:
                    raise ServiceValidationError("An email address is required to create a profile.")
                user = User(id=user_id, email=email, role=UserRole.USER.value, **fields)
                user_repo.add(user)
            else:
                for key, value in fields.items():
                    setattr(user, key, value)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"user_info_save_failed user_id={user_id} error={str(e)}")
            raise ServiceValidationError("Database integrity error while saving your details")

        db.refresh(user)
        logger.info(f"user_info_saved user_id={user_id} created={created}")
        return user

    @staticmethod
    def update_profile(db: Session, user: User, data: ProfileUpdateRequest) -> User:
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field in BODY_METRIC_RULES:
                if value is None:
                    continue
                value = ProfileService.parse_body_metric(field, value)
            elif field == "username":
                if is_blank(value):
                    raise ServiceValidationError("Username cannot be empty.")
                value = value.strip()
            else:
                value = _enum_value(value)
            setattr(user, field, value)

        db.commit()
        db.refresh(user)
        logger.info(f"profile_updated user_id={user.id} fields={sorted(changes)}")
        return user

    @staticmethod
    def update_fitness_preferences(
        db: Session, user: User, data: FitnessPreferencesRequest
    ) -> User:
        changes = {k: _enum_value(v) for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            raise ServiceValidationError("Please select at least one preference to update.")
        for field, value in changes.items():
            setattr(user, field, value)
        db.commit()
        db.refresh(user)
        logger.info(f"fitness_preferences_updated user_id={user.id} fields={sorted(changes)}")
        return user

    @staticmethod
    def subscription_price(plan: SubscriptionPlan) -> int:
        if plan == SubscriptionPlan.YEARLY:
            return settings.subscription_yearly_amount
        return settings.subscription_monthly_amount

    @staticmethod
    def upgrade_subscription(db: Session, user: User, plan: SubscriptionPlan) -> Dict[str, Any]:
        """Mark the user premium once the store confirmed the payment"""
        user.is_premium = True
        db.commit()
        logger.info(f"subscription_upgraded user_id={user.id} plan={plan.value}")
        return {
            "plan": plan,
            "amount": ProfileService.subscription_price(plan),
            "currency": settings.subscription_currency,
            "is_premium": True,
        }

    @staticmethod
    def pad_grid(items: List[Any], columns: int = GRID_COLUMNS) -> List[Any]:
        """Append None placeholders so the last grid row is full"""
        remainder = len(items) % columns
        if remainder:
            return list(items) + [None] * (columns - remainder)
        return list(items)

    @staticmethod
    def public_profile(db: Session, user_id: UUID) -> Dict[str, Any]:
        user = ProfileService.get_user(db, user_id)
        moments = MomentRepository(db).list_by_user(user_id, include_private=False)
        articles = ArticleRepository(db).list_by_status(
            ApprovalStatus.APPROVE, user_id=user_id
        )
        return {
            "user_id": user.id,
            "username": user.username,
            "profile_picture": user.profile_picture,
            "moments": ProfileService.pad_grid(
                [
                    {"id": m.id, "image_base64": m.image_base64, "caption": m.caption}
                    for m in moments
                ]
            ),
            "articles": articles,
        }
