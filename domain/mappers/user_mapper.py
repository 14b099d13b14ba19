"""
User domain mappers.
Handles transformation between the User ORM model and its DTOs.
"""

from domain.helpers import humanize_label
from domain.models import User
from domain.schemas.profile_schemas import ProfileResponse
from services.profile_service import ProfileService


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: User) -> ProfileResponse:
        """
        Convert a User ORM model to the ProfileResponse DTO.

        Args:
            user: User ORM instance

        Returns:
            ProfileResponse with BMI and human readable labels
        """
        return ProfileResponse(
            id=user.id,
            email=user.email,
            username=user.username,
            age=user.age,
            height=user.height,
            weight=user.weight,
            gender=user.gender,
            country=user.country,
            profile_picture=user.profile_picture,
            goal=user.goal,
            fitness_level=user.fitness_level,
            activity_level=user.activity_level,
            role=user.role,
            is_premium=bool(user.is_premium),
            bmi=ProfileService.calculate_bmi(user.weight, user.height),
            gender_label=humanize_label(user.gender),
            goal_label=humanize_label(user.goal),
            fitness_level_label=humanize_label(user.fitness_level),
            activity_level_label=humanize_label(user.activity_level),
            created_at=user.created_at,
        )
