"""Recipe service - recipe database CRUD"""

from typing import List, Optional
import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from domain.models import Recipe
from domain.schemas.recipe_schemas import RecipeCreate, RecipeUpdate
from repositories import RecipeRepository

logger = logging.getLogger("foodplanner.recipe")

COPY_SUFFIX = " (Kopie)"


def new_id() -> str:
    return str(uuid.uuid4())


class RecipeService:
    @staticmethod
    def list_recipes(
        db: Session, q: Optional[str] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        return RecipeRepository(db).search(q=q, limit=limit, offset=offset)

    @staticmethod
    def get_recipe(db: Session, recipe_id: str) -> Recipe:
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def create_recipe(db: Session, payload: RecipeCreate) -> Recipe:
        """
        Insert a recipe with its ingredients and tags in one transaction.

        Raises:
            ConflictError: a recipe with the supplied id already exists
        """
        repo = RecipeRepository(db)
        recipe_id = payload.id or new_id()
        if repo.exists(recipe_id):
            raise ConflictError(f"Recipe {recipe_id} already exists")

        recipe = Recipe(
            id=recipe_id,
            name=payload.name,
            category=payload.category,
            servings=payload.servings,
            instructions=payload.instructions,
        )
        repo.replace_children(
            recipe, [i.model_dump() for i in payload.ingredients], payload.tags
        )
        try:
            db.add(recipe)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create recipe %s", recipe_id)
            raise
        logger.info("Created recipe %s (%s)", recipe_id, payload.name)
        return repo.get_by_id(recipe_id)

    @staticmethod
    def update_recipe(db: Session, recipe_id: str, payload: RecipeUpdate) -> Recipe:
        """Replace fields, ingredients and tags of an existing recipe."""
        repo = RecipeRepository(db)
        recipe = repo.get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")

        recipe.name = payload.name
        recipe.category = payload.category
        recipe.servings = payload.servings
        recipe.instructions = payload.instructions
        try:
            # flush the removal first so replaced tags do not hit the unique constraint
            recipe.ingredients = []
            recipe.tag_rows = []
            db.flush()
            repo.replace_children(
                recipe, [i.model_dump() for i in payload.ingredients], payload.tags
            )
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to update recipe %s", recipe_id)
            raise
        logger.info("Updated recipe %s", recipe_id)
        return repo.get_by_id(recipe_id)

    @staticmethod
    def delete_recipe(db: Session, recipe_id: str) -> None:
        """Delete a recipe; planned meals and history keep their recipe name."""
        repo = RecipeRepository(db)
        if not repo.delete(recipe_id):
            raise NotFoundError(f"Recipe {recipe_id} not found")
        logger.info("Deleted recipe %s", recipe_id)

    @staticmethod
    def duplicate_recipe(db: Session, recipe_id: str) -> Recipe:
        source = RecipeService.get_recipe(db, recipe_id)
        payload = RecipeCreate(
            id=new_id(),
            name=f"{source.name}{COPY_SUFFIX}",
            category=source.category,
            servings=source.servings,
            instructions=source.instructions,
            ingredients=[
                {
                    "name": i.name,
                    "amount": i.amount,
                    "unit": i.unit,
                    "category": i.category,
                }
                for i in source.ingredients
            ],
            tags=source.tags,
        )
        return RecipeService.create_recipe(db, payload)
