"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    build_engine,
    init_database,
    check_connection,
    dispose_engine,
    get_db_session,
)
from domain.models.recipe import Recipe, RecipeIngredient, RecipeTag
from domain.models.meal_plan import WeekPlan, Day, Meal, WeekPlanTemplate
from domain.models.shopping import (
    ManualShoppingItem,
    ShoppingBudget,
    SubstitutionPreference,
)
from domain.models.cooking import CookingHistory

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "init_database",
    "check_connection",
    "dispose_engine",
    "get_db_session",
    # Recipe models
    "Recipe",
    "RecipeIngredient",
    "RecipeTag",
    # Week plan models
    "WeekPlan",
    "Day",
    "Meal",
    "WeekPlanTemplate",
    # Shopping models
    "ManualShoppingItem",
    "ShoppingBudget",
    "SubstitutionPreference",
    # Cooking history
    "CookingHistory",
]
