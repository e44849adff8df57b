"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.recipe_schemas import (
    IngredientSchema,
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    RecipeCreatedResponse,
)
from domain.schemas.plan_schemas import (
    MealSchema,
    DaySchema,
    WeekPlanSchema,
    TemplateCreate,
    TemplateUpdate,
    TemplateResponse,
    ApplyTemplateRequest,
    MessageResponse,
)
from domain.schemas.shopping_schemas import (
    ManualItemCreate,
    ManualItemResponse,
    ShoppingListItem,
    ShoppingListResponse,
    BudgetRequest,
    BudgetResponse,
    SubstitutionCreate,
    SubstitutionResponse,
    OptimizeRequest,
)
from domain.schemas.cooking_schemas import (
    CookingEntryCreate,
    CookingEntryResponse,
    CookingHistoryPage,
    RecipeCookingStats,
    NotCookedRecipe,
)
from domain.schemas.ai_schemas import (
    GenerateRecipesRequest,
    ParseRecipeRequest,
    ScalePortionsRequest,
    CategorizeIngredientRequest,
)

__all__ = [
    # Recipe schemas
    "IngredientSchema",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "RecipeCreatedResponse",
    # Week plan schemas
    "MealSchema",
    "DaySchema",
    "WeekPlanSchema",
    "TemplateCreate",
    "TemplateUpdate",
    "TemplateResponse",
    "ApplyTemplateRequest",
    "MessageResponse",
    # Shopping schemas
    "ManualItemCreate",
    "ManualItemResponse",
    "ShoppingListItem",
    "ShoppingListResponse",
    "BudgetRequest",
    "BudgetResponse",
    "SubstitutionCreate",
    "SubstitutionResponse",
    "OptimizeRequest",
    # Cooking history schemas
    "CookingEntryCreate",
    "CookingEntryResponse",
    "CookingHistoryPage",
    "RecipeCookingStats",
    "NotCookedRecipe",
    # AI schemas
    "GenerateRecipesRequest",
    "ParseRecipeRequest",
    "ScalePortionsRequest",
    "CategorizeIngredientRequest",
]
