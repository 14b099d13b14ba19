"""API routes package"""

from . import (
    health,
    auth,
    profile,
    users,
    nutrition,
    meal_plans,
    moments,
    articles,
    challenges,
    admin,
)

__all__ = [
    "health",
    "auth",
    "profile",
    "users",
    "nutrition",
    "meal_plans",
    "moments",
    "articles",
    "challenges",
    "admin",
]
