from pydantic import BaseModel, Field
from typing import Optional, List, Union


class IngredientItem(BaseModel):
    name: Optional[str] = None
    quantity: Optional[Union[str, float]] = None
    unit: Optional[str] = None


class RecipeMealRequest(BaseModel):
    """Admin recipe form; RecipeService enforces the required fields"""

    name: Optional[str] = None
    description: Optional[str] = None
    calories: Optional[Union[int, str]] = None
    protein: Optional[Union[int, str]] = None
    carbs: Optional[Union[int, str]] = None
    fats: Optional[Union[int, str]] = None
    ingredients: List[IngredientItem] = Field(default_factory=list)
    instructions: Optional[str] = None
    serving_size: Optional[str] = None
    image_base64: Optional[str] = None


class RecipeMealResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    calories: int
    protein: int
    carbs: int
    fats: int
    ingredients: List[IngredientItem]
    instructions: Optional[str] = None
    serving_size: Optional[str] = None
    image_base64: Optional[str] = None
