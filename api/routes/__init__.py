"""API routes package"""

from . import recipes, weekplan, shopping, cooking_history, ai, health

__all__ = ["recipes", "weekplan", "shopping", "cooking_history", "ai", "health"]
