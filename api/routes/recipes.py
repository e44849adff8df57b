"""
Recipe routes - recipe database CRUD, search and duplication.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional, List
import logging

from domain.models import get_db_session
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    RecipeCreatedResponse,
)
from domain.schemas.plan_schemas import MessageResponse
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("foodplanner.api.recipes")


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    q: Optional[str] = Query(
        default=None, description="Search in name, category and tags"
    ),
    limit: Optional[int] = Query(default=None, ge=1, le=500, description="Maximum results"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    db: Session = Depends(get_db_session),
):
    """
    List recipes, newest first.

    - **q**: Case-insensitive search in name, category and tags
    - **limit**: Max results (all when omitted)
    - **offset**: For pagination
    """
    recipes = RecipeService.list_recipes(db, q=q, limit=limit, offset=offset)
    return [RecipeResponse.model_validate(r) for r in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: str, db: Session = Depends(get_db_session)):
    """Get a single recipe with its ingredients and tags."""
    return RecipeResponse.model_validate(RecipeService.get_recipe(db, recipe_id))


@router.post(
    "", response_model=RecipeCreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_recipe(payload: RecipeCreate, db: Session = Depends(get_db_session)):
    """Create a recipe. The id may be supplied by the client; 409 if it is taken."""
    recipe = RecipeService.create_recipe(db, payload)
    return RecipeCreatedResponse(id=recipe.id, message="Recipe created successfully")


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: str, payload: RecipeUpdate, db: Session = Depends(get_db_session)
):
    """Replace a recipe including its ingredient list and tags."""
    return RecipeResponse.model_validate(
        RecipeService.update_recipe(db, recipe_id, payload)
    )


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_recipe(recipe_id: str, db: Session = Depends(get_db_session)):
    """
    Delete a recipe.

    Meals planned with this recipe stay in their week plans with the recipe
    name only.
    """
    RecipeService.delete_recipe(db, recipe_id)
    return MessageResponse(message="Recipe deleted successfully", id=recipe_id)


@router.post(
    "/{recipe_id}/duplicate",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_recipe(recipe_id: str, db: Session = Depends(get_db_session)):
    """Copy a recipe under a new id with " (Kopie)" appended to its name."""
    return RecipeResponse.model_validate(RecipeService.duplicate_recipe(db, recipe_id))
