"""
Shopping related models: manual items, weekly budgets, substitution preferences.

The shopping list itself is derived on demand and has no table.
"""

from sqlalchemy import Column, Integer, String, Text, Date, Numeric, Boolean, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func

from domain.enums import DEFAULT_CATEGORY
from domain.models.database import Base


class ManualShoppingItem(Base):
    """Ad hoc shopping list entry not tied to a recipe"""

    __tablename__ = "manual_shopping_items"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    amount = Column(Text, nullable=False)
    unit = Column(Text, nullable=False)
    category = Column(Text, default=DEFAULT_CATEGORY)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())


class ShoppingBudget(Base):
    """Spending budget for one week, keyed by its Monday"""

    __tablename__ = "shopping_budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    week_start = Column(Date, nullable=False, unique=True)
    budget_amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("budget_amount >= 0", name="ck_budget_amount_nonneg"),
    )


class SubstitutionPreference(Base):
    """Remembered ingredient swap, e.g. Parmesan -> Grana Padano"""

    __tablename__ = "substitution_preferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    original_ingredient = Column(Text, nullable=False)
    substitute_ingredient = Column(Text, nullable=False)
    reason = Column(Text)
    savings_percent = Column(Integer)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
