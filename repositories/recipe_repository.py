"""
Recipe Repository - Data access layer for recipes, their ingredients and tags
"""

from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from domain.enums import DEFAULT_CATEGORY
from domain.models import Recipe, RecipeIngredient, RecipeTag
from repositories.base import BaseRepository


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def _query(self):
        return self.db.query(Recipe).options(
            selectinload(Recipe.ingredients), selectinload(Recipe.tag_rows)
        )

    def get_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Get recipe with ingredients and tags loaded"""
        return self._query().filter(Recipe.id == recipe_id).first()

    def get_by_ids(self, recipe_ids: Iterable[str]) -> List[Recipe]:
        ids = list({rid for rid in recipe_ids if rid})
        if not ids:
            return []
        return self._query().filter(Recipe.id.in_(ids)).all()

    def search(
        self, q: Optional[str] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        """
        List recipes, newest first.

        Args:
            q: Case-insensitive substring matched against name, category and tags
            limit: Maximum number of results (None for all)
            offset: Pagination offset

        Returns:
            List of Recipe instances
        """
        query = self._query()
        if q:
            pattern = f"%{q.strip()}%"
            tagged = self.db.query(RecipeTag.recipe_id).filter(RecipeTag.tag.ilike(pattern))
            query = query.filter(
                or_(
                    Recipe.name.ilike(pattern),
                    Recipe.category.ilike(pattern),
                    Recipe.id.in_(tagged),
                )
            )
        query = query.order_by(Recipe.created_at.desc(), Recipe.name).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def replace_children(
        self, recipe: Recipe, ingredients: Iterable[dict], tags: Iterable[str]
    ) -> Recipe:
        """Replace the ordered ingredient list and the tag set of ``recipe``"""
        recipe.ingredients = [
            RecipeIngredient(
                position=i,
                name=ing["name"],
                amount=ing.get("amount") or "",
                unit=ing.get("unit") or "",
                category=ing.get("category") or DEFAULT_CATEGORY,
            )
            for i, ing in enumerate(ingredients)
        ]
        recipe.tag_rows = [RecipeTag(tag=t) for t in tags]
        return recipe
