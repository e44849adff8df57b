"""Services package - Business logic layer"""

from services.recipe_service import RecipeService
from services.planner_service import PlannerService
from services.shopping_service import ShoppingService
from services.cooking_service import CookingService
from services.ai_service import AIService

# Note: categorizer and recipe_fetcher contain utility functions, not classes

__all__ = [
    "RecipeService",
    "PlannerService",
    "ShoppingService",
    "CookingService",
    "AIService",
]
