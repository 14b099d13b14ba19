"""
Recipe meal management for the admin back-office.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.helpers import is_blank, load_json_list
from domain.models import RecipeMeal
from domain.schemas.recipe_schemas import RecipeMealRequest
from repositories import RecipeMealRepository

logger = logging.getLogger("fitnesshub.recipes")

MACRO_FIELDS = ("calories", "protein", "carbs", "fats")
TEXT_FIELDS = ("name", "description", "instructions", "serving_size")


def _parse_macro(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ServiceValidationError(f"{field.capitalize()} must be a whole number.")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        raise ServiceValidationError(f"{field.capitalize()} must be a whole number.")
    return number


class RecipeService:
    """CRUD for recipe_meals with form validation"""

    @staticmethod
    def parse_ingredients(raw: Any) -> List[Dict[str, Any]]:
        """Ingredients column (JSON text) -> list of {name, quantity, unit}"""
        return [
            {
                "name": item.get("name"),
                "quantity": item.get("quantity"),
                "unit": item.get("unit"),
            }
            for item in load_json_list(raw)
            if isinstance(item, dict)
        ]

    @staticmethod
    def to_dict(recipe: RecipeMeal) -> Dict[str, Any]:
        return {
            "id": recipe.id,
            "name": recipe.name,
            "description": recipe.description,
            "calories": recipe.calories or 0,
            "protein": recipe.protein or 0,
            "carbs": recipe.carbs or 0,
            "fats": recipe.fats or 0,
            "ingredients": RecipeService.parse_ingredients(recipe.ingredients),
            "instructions": recipe.instructions,
            "serving_size": recipe.serving_size,
            "image_base64": recipe.image_base64,
        }

    @staticmethod
    def validate(data: RecipeMealRequest) -> Dict[str, Any]:
        """Check the admin form and return column values ready to store"""
        values = data.model_dump()
        if any(is_blank(values.get(f)) for f in TEXT_FIELDS + MACRO_FIELDS):
            raise ServiceValidationError("Please fill in all the fields.")

        fields: Dict[str, Any] = {f: values[f].strip() for f in TEXT_FIELDS}
        for field in MACRO_FIELDS:
            fields[field] = _parse_macro(field, values[field])

        if not data.ingredients:
            raise ServiceValidationError("Please add at least one ingredient.")
        ingredients = []
        for item in data.ingredients:
            if is_blank(item.name) or is_blank(item.quantity) or is_blank(item.unit):
                raise ServiceValidationError(
                    "Each ingredient needs a name, quantity and unit."
                )
            ingredients.append(
                {"name": item.name.strip(), "quantity": item.quantity, "unit": item.unit.strip()}
            )
        fields["ingredients"] = json.dumps(ingredients)

        if is_blank(data.image_base64):
            raise ServiceValidationError("Please select an image for the recipe.")
        fields["image_base64"] = data.image_base64
        return fields

    @staticmethod
    def list_recipes(db: Session) -> List[RecipeMeal]:
        return RecipeMealRepository(db).list_ordered()

    @staticmethod
    def get_recipe(db: Session, recipe_id: int) -> RecipeMeal:
        recipe = RecipeMealRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def save_recipe(
        db: Session, data: RecipeMealRequest, recipe_id: Optional[int] = None
    ) -> RecipeMeal:
        """Insert a new recipe, or update the one with recipe_id"""
        fields = RecipeService.validate(data)
        repo = RecipeMealRepository(db)
        if recipe_id is None:
            recipe = repo.add(RecipeMeal(**fields))
        else:
            recipe = RecipeService.get_recipe(db, recipe_id)
            for key, value in fields.items():
                setattr(recipe, key, value)
        db.commit()
        db.refresh(recipe)
        logger.info(f"recipe_saved recipe_id={recipe.id} created={recipe_id is None}")
        return recipe

    @staticmethod
    def delete_recipe(db: Session, recipe_id: int) -> None:
        recipe = RecipeService.get_recipe(db, recipe_id)
        RecipeMealRepository(db).delete(recipe)
        db.commit()
        logger.info(f"recipe_deleted recipe_id={recipe_id}")
