"""
Domain enums for FoodPlanner.
Contains the enumeration types used across the domain models and schemas.
"""

import enum


class IngredientCategory(str, enum.Enum):
    """Shopping aisle an ingredient belongs to"""

    PRODUCE = "Obst & Gemüse"
    DAIRY = "Milchprodukte"
    MEAT_FISH = "Fleisch & Fisch"
    DRY_GOODS = "Trockenwaren"
    FROZEN = "Tiefkühl"
    OTHER = "Sonstiges"

    @classmethod
    def values(cls) -> list[str]:
        return [c.value for c in cls]

    @classmethod
    def normalize(cls, value) -> str:
        """Return a valid category value, falling back to Sonstiges."""
        if isinstance(value, cls):
            return value.value
        if isinstance(value, str):
            v = value.strip()
            if v in cls.values():
                return v
        return cls.OTHER.value


# Display order used when grouping a shopping list
CATEGORY_ORDER = IngredientCategory.values()
DEFAULT_CATEGORY = IngredientCategory.OTHER.value


class MealType(str, enum.Enum):
    """Meal slot within a day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


MEAL_TYPES = [m.value for m in MealType]


class ParseInputType(str, enum.Enum):
    """Kind of input handed to the recipe parser"""

    TEXT = "text"
    URL = "url"
