"""Schemas for cooking history entries and statistics"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CookingEntryCreate(BaseModel):
    """Mark a recipe as cooked"""

    recipe_id: Optional[str] = Field(None, alias="recipeId")
    servings: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class CookingEntryResponse(BaseModel):
    id: int
    recipe_id: Optional[str] = None
    recipe_name: str
    recipe_category: Optional[str] = None
    cooked_at: Optional[datetime] = None
    servings: Optional[int] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class CookingHistoryPage(BaseModel):
    entries: List[CookingEntryResponse]
    total: int
    limit: int
    offset: int


class RecipeCookingStats(BaseModel):
    recipe_id: Optional[str] = None
    recipe_name: str
    times_cooked: int
    last_cooked_at: Optional[datetime] = None


class NotCookedRecipe(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    last_cooked_at: Optional[datetime] = None
    times_cooked: int = 0
