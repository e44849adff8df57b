"""Repository for cooking history data access"""

from datetime import datetime
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.models import CookingHistory, Recipe
from repositories.base import BaseRepository


class CookingHistoryRepository(BaseRepository[CookingHistory]):
    """Repository for cooking history entries"""

    def __init__(self, db: Session):
        super().__init__(db, CookingHistory)

    def list_page(self, limit: int, offset: int) -> List[Tuple[CookingHistory, str]]:
        """Entries newest first, each paired with the current recipe category (or None)"""
        return (
            self.db.query(CookingHistory, Recipe.category)
            .outerjoin(Recipe, Recipe.id == CookingHistory.recipe_id)
            .order_by(CookingHistory.cooked_at.desc(), CookingHistory.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(func.count(CookingHistory.id)).scalar() or 0

    def get_by_recipe(self, recipe_id: str) -> List[Tuple[CookingHistory, str]]:
        """Get all entries for a specific recipe, newest first"""
        return (
            self.db.query(CookingHistory, Recipe.category)
            .outerjoin(Recipe, Recipe.id == CookingHistory.recipe_id)
            .filter(CookingHistory.recipe_id == recipe_id)
            .order_by(CookingHistory.cooked_at.desc(), CookingHistory.id.desc())
            .all()
        )

    def stats_by_recipe(self):
        """Rows of (recipe_id, recipe_name, times_cooked, last_cooked_at), most cooked first"""
        times = func.count(CookingHistory.id).label("times_cooked")
        last = func.max(CookingHistory.cooked_at).label("last_cooked_at")
        return (
            self.db.query(CookingHistory.recipe_id, CookingHistory.recipe_name, times, last)
            .group_by(CookingHistory.recipe_id, CookingHistory.recipe_name)
            .order_by(times.desc(), last.desc())
            .all()
        )

    def recipes_not_cooked_since(self, threshold: datetime):
        """
        Recipes never cooked or last cooked before ``threshold``.

        Returns rows of (Recipe, last_cooked_at, times_cooked), never-cooked first.
        """
        history = (
            self.db.query(
                CookingHistory.recipe_id.label("recipe_id"),
                func.max(CookingHistory.cooked_at).label("last_cooked_at"),
                func.count(CookingHistory.id).label("times_cooked"),
            )
            .filter(CookingHistory.recipe_id.isnot(None))
            .group_by(CookingHistory.recipe_id)
            .subquery()
        )
        return (
            self.db.query(Recipe, history.c.last_cooked_at, history.c.times_cooked)
            .outerjoin(history, history.c.recipe_id == Recipe.id)
            .filter(
                (history.c.last_cooked_at.is_(None))
                | (history.c.last_cooked_at < threshold)
            )
            .order_by(history.c.last_cooked_at.asc().nullsfirst(), Recipe.name)
            .all()
        )
