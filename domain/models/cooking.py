"""
Cooking history model.
"""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func

from domain.models.database import Base


class CookingHistory(Base):
    """Record of a recipe being cooked"""

    __tablename__ = "cooking_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        String(64), ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True, index=True
    )
    recipe_name = Column(Text, nullable=False)
    cooked_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True)
    servings = Column(Integer)
    notes = Column(Text)
