"""Adapters for hosted services (auth provider, USDA FoodData Central)."""

from adapters import supabase_adapter, usda_adapter

__all__ = ["supabase_adapter", "usda_adapter"]
