"""
Recipe database models.
"""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.enums import DEFAULT_CATEGORY
from domain.models.database import Base


class Recipe(Base):
    """A recipe in the household recipe database"""

    __tablename__ = "recipes"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    category = Column(Text)
    servings = Column(Integer)
    instructions = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
        passive_deletes=True,
    )
    tag_rows = relationship(
        "RecipeTag",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeTag.tag",
        passive_deletes=True,
    )

    @property
    def tags(self) -> list[str]:
        return [t.tag for t in self.tag_rows]


class RecipeIngredient(Base):
    """Ingredient line of a recipe; amount is free text ("200", "etwas", "1/2")"""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        String(64), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    name = Column(Text, nullable=False)
    amount = Column(Text, nullable=False, default="")
    unit = Column(Text, nullable=False, default="")
    category = Column(Text, nullable=False, default=DEFAULT_CATEGORY)

    recipe = relationship("Recipe", back_populates="ingredients")


class RecipeTag(Base):
    """Free-form tag attached to a recipe"""

    __tablename__ = "recipe_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        String(64), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="tag_rows")

    __table_args__ = (UniqueConstraint("recipe_id", "tag", name="uq_recipe_tag"),)
