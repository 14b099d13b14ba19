"""
User account model.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    DateTime,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base
from domain.enums import UserRole
from domain.helpers import utcnow


class User(Base):
    """Row of the users table; id is the hosted auth user id"""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(Text, unique=True, nullable=False)
    username = Column(Text)
    age = Column(Integer)
    height = Column(Integer)  # cm
    weight = Column(Integer)  # kg
    gender = Column(Text)
    country = Column(Text)
    profile_picture = Column(Text)  # base64
    goal = Column(Text)
    fitness_level = Column(Text)
    activity_level = Column(Text)
    role = Column(Integer, nullable=False, default=UserRole.USER.value)
    is_premium = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    daily_nutrition = relationship(
        "DailyNutrition", back_populates="user", cascade="all, delete-orphan"
    )
    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan")
    recent_meals = relationship(
        "RecentMeal", back_populates="user", cascade="all, delete-orphan"
    )
    moments = relationship(
        "Moment", back_populates="user", cascade="all, delete-orphan"
    )
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")
    comments = relationship(
        "Comment", back_populates="user", cascade="all, delete-orphan"
    )
    articles = relationship(
        "Article", back_populates="user", cascade="all, delete-orphan"
    )
    bookmarks = relationship(
        "UserMealPlan", back_populates="user", cascade="all, delete-orphan"
    )
    meal_plan_requests = relationship(
        "MealPlanRequest", back_populates="user", cascade="all, delete-orphan"
    )
    participations = relationship(
        "ChallengeParticipant", back_populates="user", cascade="all, delete-orphan"
    )
    submissions = relationship(
        "ChallengeSubmission", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value)

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN.value
