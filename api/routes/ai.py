"""Generative AI routes (Gemini passthroughs)"""

from typing import Any, Dict
import logging

from fastapi import APIRouter

from domain.schemas.ai_schemas import (
    CategorizeIngredientRequest,
    GenerateRecipesRequest,
    ParseRecipeRequest,
    ScalePortionsRequest,
)
from services.ai_service import AIService

router = APIRouter(prefix="/ai", tags=["AI"])
logger = logging.getLogger("foodplanner.api.ai")


@router.post("/generate-recipes", response_model=Dict[str, Any])
def generate_recipes(payload: GenerateRecipesRequest):
    """Three recipe suggestions from a list of available ingredients."""
    preferences = payload.preferences.model_dump() if payload.preferences else None
    return AIService.generate_recipes(payload.ingredients, preferences)


@router.post("/parse-recipe", response_model=Dict[str, Any])
def parse_recipe(payload: ParseRecipeRequest):
    """
    Turn recipe text or a recipe URL into a structured recipe.

    URLs must point to an allowlisted recipe site.
    """
    return AIService.parse_recipe(payload.input, payload.type)


@router.post("/scale-portions", response_model=Dict[str, Any])
def scale_portions(payload: ScalePortionsRequest):
    return AIService.scale_portions(
        payload.ingredients, payload.original_servings, payload.new_servings
    )


@router.post("/categorize-ingredient", response_model=Dict[str, str])
def categorize_ingredient(payload: CategorizeIngredientRequest):
    """Shopping category of an ingredient; works without AI via the keyword table."""
    return AIService.categorize_ingredient(payload.ingredient_name)
