"""USDA FoodData Central adapter for food search.
"""

from typing import Any, Dict, List
import logging

import httpx

from app.config import settings

logger = logging.getLogger("fitnesshub.usda")

# FoodData Central nutrient names -> our macro keys
NUTRIENT_KEYS = {
    "Energy": "calories",
    "Protein": "protein",
    "Carbohydrate, by difference": "carbs",
    "Total lipid (fat)": "fats",
}


def _to_food(item: Dict[str, Any]) -> Dict[str, Any]:
    food = {
        "name": item.get("description") or "Unknown food",
        "calories": 0.0,
        "protein": 0.0,
        "carbs": 0.0,
        "fats": 0.0,
        "source": "usda",
        "external_id": item.get("fdcId"),
    }
    seen = set()
    for nutrient in item.get("foodNutrients") or []:
        key = NUTRIENT_KEYS.get(nutrient.get("nutrientName"))
        # Energy can be reported twice (kcal then kJ); the first one wins
        if key and key not in seen:
            seen.add(key)
            try:
                food[key] = float(nutrient.get("value") or 0)
            except (TypeError, ValueError):
                food[key] = 0.0
    return food


def search_foods(query: str) -> List[Dict[str, Any]]:
    """Search FoodData Central; returns [] when the service is unreachable."""
    url = f"{settings.usda_base_url.rstrip('/')}/foods/search"
    params = {
        "query": query,
        "api_key": settings.usda_api_key,
        "pageSize": settings.usda_page_size,
    }
    try:
        with httpx.Client(timeout=settings.usda_timeout_sec) as client:
            response = client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning(
            f"usda_search_failed query={query!r} status={exc.response.status_code}"
        )
        return []
    except (httpx.RequestError, ValueError) as exc:
        logger.warning(f"usda_search_failed query={query!r} error={exc}")
        return []

    if not isinstance(data, dict):
        logger.warning(f"usda_search_failed query={query!r} error=unexpected payload")
        return []
    foods = [_to_food(item) for item in data.get("foods") or [] if isinstance(item, dict)]
    logger.debug(f"usda_search_ok query={query!r} results={len(foods)}")
    return foods
