"""
Recipe Repository - admin-authored recipe meals
"""

from typing import List, Sequence
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import RecipeMeal


class RecipeMealRepository(BaseRepository[RecipeMeal]):
    def __init__(self, db: Session):
        super().__init__(db, RecipeMeal)

    def list_ordered(self) -> List[RecipeMeal]:
        return self.db.query(RecipeMeal).order_by(RecipeMeal.id.asc()).all()

    def search_by_name(self, query: str, limit: int = 20) -> List[RecipeMeal]:
        """Case-insensitive substring match on the recipe name"""
        pattern = f"%{query.strip().lower()}%"
        return (
            self.db.query(RecipeMeal)
            .filter(func.lower(RecipeMeal.name).like(pattern))
            .order_by(RecipeMeal.name.asc())
            .limit(limit)
            .all()
        )

    def get_many(self, recipe_ids: Sequence[int]) -> List[RecipeMeal]:
        """Recipes for the given ids, in the order the ids were given"""
        if not recipe_ids:
            return []
        found = {
            r.id: r
            for r in self.db.query(RecipeMeal).filter(RecipeMeal.id.in_(recipe_ids))
        }
        return [found[i] for i in recipe_ids if i in found]
