"""Cooking history routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from typing import List

from domain.models import get_db_session
from domain.schemas.cooking_schemas import (
    CookingEntryCreate,
    CookingEntryResponse,
    CookingHistoryPage,
    RecipeCookingStats,
    NotCookedRecipe,
)
from domain.schemas.plan_schemas import MessageResponse
from services.cooking_service import CookingService

router = APIRouter(prefix="/cooking-history", tags=["Cooking History"])
logger = logging.getLogger("foodplanner.api.cooking_history")


@router.get("", response_model=CookingHistoryPage)
def get_history(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db_session),
):
    """Cooking history, newest first."""
    return CookingService.history(db, limit=limit, offset=offset)


@router.post("", response_model=CookingEntryResponse, status_code=status.HTTP_201_CREATED)
def mark_cooked(payload: CookingEntryCreate, db: Session = Depends(get_db_session)):
    """Mark a recipe as cooked (`recipeId` required)."""
    return CookingService.record(db, payload)


@router.get("/stats", response_model=List[RecipeCookingStats])
def get_stats(db: Session = Depends(get_db_session)):
    """How often and when each recipe was last cooked."""
    return CookingService.stats(db)


@router.get("/recipe/{recipe_id}", response_model=List[CookingEntryResponse])
def get_recipe_history(recipe_id: str, db: Session = Depends(get_db_session)):
    return CookingService.history_for_recipe(db, recipe_id)


@router.get("/not-cooked-recently", response_model=List[NotCookedRecipe])
def get_not_cooked_recently(
    days: int = Query(default=30, ge=0, le=3650),
    db: Session = Depends(get_db_session),
):
    """Recipes not cooked within the last `days` days (never-cooked ones first)."""
    return CookingService.not_cooked_recently(db, days=days)


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(entry_id: int, db: Session = Depends(get_db_session)):
    CookingService.delete_entry(db, entry_id)
    return MessageResponse(message="Cooking history entry deleted successfully", id=str(entry_id))
