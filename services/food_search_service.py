from typing import Dict, List, Any
from sqlalchemy.orm import Session
import logging

from adapters import usda_adapter
from repositories import RecipeMealRepository

logger = logging.getLogger("fitnesshub.food_search")


class FoodSearchService:
    """Food lookup for the diary: in-house recipes first, then USDA foods"""

    @staticmethod
    def search(db: Session, query: str) -> List[Dict[str, Any]]:
        query = (query or "").strip()
        if not query:
            return []

        recipes = RecipeMealRepository(db).search_by_name(query)
        results = [
            {
                "name": recipe.name,
                "calories": float(recipe.calories or 0),
                "protein": float(recipe.protein or 0),
                "carbs": float(recipe.carbs or 0),
                "fats": float(recipe.fats or 0),
                "source": "recipe",
                "external_id": recipe.id,
            }
            for recipe in recipes
        ]
        results.extend(usda_adapter.search_foods(query))

        logger.info(
            f"food_search query={query!r} recipes={len(recipes)} total={len(results)}"
        )
        return results
