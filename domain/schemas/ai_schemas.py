"""Request schemas for the generative AI endpoints (camelCase on the wire)."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.enums import ParseInputType


class _AIRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecipePreferences(_AIRequest):
    dietary: Optional[str] = None
    cooking_time: Optional[int] = Field(None, ge=1)
    difficulty: Optional[str] = None


class GenerateRecipesRequest(_AIRequest):
    ingredients: List[str] = Field(default_factory=list)
    preferences: Optional[RecipePreferences] = None


class ParseRecipeRequest(_AIRequest):
    input: Optional[str] = None
    type: Optional[ParseInputType] = None


class ScalePortionsRequest(_AIRequest):
    ingredients: List[Dict[str, Any]] = Field(default_factory=list)
    original_servings: Optional[int] = None
    new_servings: Optional[int] = None


class CategorizeIngredientRequest(_AIRequest):
    ingredient_name: Optional[str] = None
