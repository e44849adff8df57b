"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.recipe_repository import RecipeRepository
from repositories.week_plan_repository import WeekPlanRepository, TemplateRepository
from repositories.shopping_repository import (
    ManualItemRepository,
    BudgetRepository,
    SubstitutionRepository,
)
from repositories.cooking_history_repository import CookingHistoryRepository

__all__ = [
    "BaseRepository",
    "RecipeRepository",
    "WeekPlanRepository",
    "TemplateRepository",
    "ManualItemRepository",
    "BudgetRepository",
    "SubstitutionRepository",
    "CookingHistoryRepository",
]
