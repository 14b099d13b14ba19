"""
Domain enums for the FitnessHub application.
Values match what the mobile app stores in the hosted tables.
"""

import enum


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class GoalType(str, enum.Enum):
    """Fitness goal types"""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    GENERAL_FITNESS = "general_fitness"


class FitnessLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ActivityLevel(str, enum.Enum):
    """Physical activity levels"""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    SUPER_ACTIVE = "super_active"


class UserRole(int, enum.Enum):
    """Numeric roles stored in users.role"""

    USER = 1
    ADMIN = 2
    SUPER_ADMIN = 3


class ApprovalStatus(str, enum.Enum):
    """Moderation state shared by articles and challenge submissions"""

    PENDING = "pending"
    APPROVE = "approve"
    DECLINE = "decline"


class ReviewDecision(str, enum.Enum):
    APPROVE = "approve"
    DECLINE = "decline"


class ChallengeDifficulty(str, enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ChallengeStatus(str, enum.Enum):
    UPCOMING = "Upcoming"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"


class MealType(str, enum.Enum):
    """Sections of the daily food diary"""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACKS = "Snacks"


class GraphPeriod(str, enum.Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


class PasswordStrength(str, enum.Enum):
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


class SubscriptionPlan(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NextStep(str, enum.Enum):
    """Where the app should navigate after a successful sign in"""

    ONBOARDING = "onboarding"
    HOME = "home"
    ADMIN_HOME = "admin_home"


class ProofType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
