"""
Cooking Service - records which recipes were cooked and when.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta
import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import CookingHistory
from domain.schemas.cooking_schemas import CookingEntryCreate
from repositories import CookingHistoryRepository, RecipeRepository

logger = logging.getLogger("foodplanner.cooking")

DEFAULT_PAGE_SIZE = 50
DEFAULT_NOT_COOKED_DAYS = 30


def _entry_dict(entry: CookingHistory, category: Optional[str]) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "recipe_id": entry.recipe_id,
        "recipe_name": entry.recipe_name,
        "recipe_category": category,
        "cooked_at": entry.cooked_at,
        "servings": entry.servings,
        "notes": entry.notes,
    }


class CookingService:
    @staticmethod
    def record(db: Session, payload: CookingEntryCreate) -> Dict[str, Any]:
        """
        Mark a recipe as cooked.

        The recipe name is stored with the entry so the history survives
        deletion of the recipe.

        Raises:
            ServiceValidationError: recipeId missing
            NotFoundError: recipe does not exist
        """
        if not (payload.recipe_id or "").strip():
            raise ServiceValidationError("recipeId is required")

        recipe = RecipeRepository(db).get_by_id(payload.recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {payload.recipe_id} not found")

        entry = CookingHistoryRepository(db).create(
            CookingHistory(
                recipe_id=recipe.id,
                recipe_name=recipe.name,
                servings=payload.servings or recipe.servings,
                notes=payload.notes,
            )
        )
        logger.info("Cooked '%s' (history entry %s)", recipe.name, entry.id)
        return _entry_dict(entry, recipe.category)

    @staticmethod
    def history(db: Session, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> Dict[str, Any]:
        repo = CookingHistoryRepository(db)
        rows = repo.list_page(limit=limit, offset=offset)
        return {
            "entries": [_entry_dict(entry, category) for entry, category in rows],
            "total": repo.count(),
            "limit": limit,
            "offset": offset,
        }

    @staticmethod
    def history_for_recipe(db: Session, recipe_id: str) -> List[Dict[str, Any]]:
        rows = CookingHistoryRepository(db).get_by_recipe(recipe_id)
        return [_entry_dict(entry, category) for entry, category in rows]

    @staticmethod
    def stats(db: Session) -> List[Dict[str, Any]]:
        return [
            {
                "recipe_id": recipe_id,
                "recipe_name": recipe_name,
                "times_cooked": int(times_cooked),
                "last_cooked_at": last_cooked_at,
            }
            for recipe_id, recipe_name, times_cooked, last_cooked_at in CookingHistoryRepository(
                db
            ).stats_by_recipe()
        ]

    @staticmethod
    def not_cooked_recently(
        db: Session, days: int = DEFAULT_NOT_COOKED_DAYS, now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Recipes never cooked or not cooked within the last ``days`` days."""
        if days < 0:
            raise ServiceValidationError("days must not be negative")
        threshold = (now or datetime.utcnow()) - timedelta(days=days)
        rows = CookingHistoryRepository(db).recipes_not_cooked_since(threshold)
        return [
            {
                "id": recipe.id,
                "name": recipe.name,
                "category": recipe.category,
                "last_cooked_at": last_cooked_at,
                "times_cooked": int(times_cooked or 0),
            }
            for recipe, last_cooked_at, times_cooked in rows
        ]

    @staticmethod
    def delete_entry(db: Session, entry_id: int) -> None:
        if not CookingHistoryRepository(db).delete(entry_id):
            raise NotFoundError(f"Cooking history entry {entry_id} not found")
