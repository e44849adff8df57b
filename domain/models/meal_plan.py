"""
Week plan, day, meal and template models.
"""

from sqlalchemy import Column, Integer, String, Text, Date, TIMESTAMP, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class WeekPlan(Base):
    """A calendar week; id is the ISO week of start_date (e.g. 2024-W03)"""

    __tablename__ = "week_plans"

    id = Column(String(16), primary_key=True)
    start_date = Column(Date, nullable=False, unique=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    days = relationship(
        "Day",
        back_populates="week_plan",
        cascade="all, delete-orphan",
        order_by="Day.position",
        passive_deletes=True,
    )


class Day(Base):
    """One of the seven days of a week plan"""

    __tablename__ = "days"

    id = Column(Integer, primary_key=True, autoincrement=True)
    week_plan_id = Column(
        String(16), ForeignKey("week_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    day_name = Column(Text, nullable=False)

    week_plan = relationship("WeekPlan", back_populates="days")
    meals = relationship(
        "Meal", back_populates="day", cascade="all, delete-orphan", passive_deletes=True
    )


class Meal(Base):
    """
    Recipe assigned to a meal slot.

    recipe_id is a loose reference: deleting the recipe nulls it and keeps
    the denormalized recipe_name.
    """

    __tablename__ = "meals"

    id = Column(String(64), primary_key=True)
    day_id = Column(
        Integer, ForeignKey("days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(
        String(64), ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True, index=True
    )
    recipe_name = Column(Text, nullable=False)
    meal_type = Column(String(16), nullable=False)  # breakfast, lunch, dinner

    day = relationship("Day", back_populates="meals")


class WeekPlanTemplate(Base):
    """Named snapshot of a week's day array, stored as JSON"""

    __tablename__ = "week_plan_templates"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text, default="")
    template_data = Column(JSON, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
