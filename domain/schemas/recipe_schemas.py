"""Pydantic schemas for recipes and their ingredients."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.enums import DEFAULT_CATEGORY, IngredientCategory


class IngredientSchema(BaseModel):
    """Ingredient line; amount stays free text ("200", "1/2", "etwas")."""

    name: str = Field(..., min_length=1)
    amount: str = ""
    unit: str = ""
    category: str = DEFAULT_CATEGORY

    model_config = {"from_attributes": True}

    @field_validator("amount", "unit", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: Any) -> str:
        return IngredientCategory.normalize(v)


class RecipeBase(BaseModel):
    name: str = Field(..., min_length=1, description="Recipe name")
    category: Optional[str] = Field(None, description="e.g. Hauptgericht, Suppe")
    servings: Optional[int] = Field(None, ge=1)
    instructions: Optional[str] = None
    ingredients: List[IngredientSchema] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        seen: List[str] = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class RecipeCreate(RecipeBase):
    """Create payload; the id may be supplied by the client."""

    id: Optional[str] = Field(None, max_length=64)


class RecipeUpdate(RecipeBase):
    """Full replacement of a recipe's fields, ingredients and tags."""


class RecipeResponse(RecipeBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RecipeCreatedResponse(BaseModel):
    id: str
    message: str
