"""Schemas for manual shopping items, budgets, substitutions and optimization."""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from domain.week import to_date


class _CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ManualItemCreate(BaseModel):
    id: Optional[str] = Field(None, max_length=64)
    name: Optional[str] = None
    amount: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ManualItemResponse(BaseModel):
    id: str
    name: str
    amount: str
    unit: str
    category: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class ShoppingListItem(BaseModel):
    id: Optional[str] = None
    name: str
    amount: str
    unit: str
    category: str
    checked: bool = False
    recipe_names: List[str] = Field(default_factory=list, alias="recipeNames")
    is_manual: bool = Field(False, alias="isManual")

    model_config = ConfigDict(populate_by_name=True)


class ShoppingListResponse(BaseModel):
    week_id: Optional[str] = Field(None, alias="weekId")
    items: List[ShoppingListItem]
    by_category: Dict[str, List[ShoppingListItem]] = Field(alias="byCategory")

    model_config = ConfigDict(populate_by_name=True)


class BudgetRequest(_CamelRequest):
    week_start: dt.date
    budget_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    currency: str = Field("EUR", min_length=3, max_length=3)

    @field_validator("week_start", mode="before")
    @classmethod
    def parse_week_start(cls, v: Any) -> Any:
        if isinstance(v, str):
            return to_date(v)
        return v


class BudgetResponse(BaseModel):
    id: int
    week_start: dt.date
    budget_amount: Decimal
    currency: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}

    @field_serializer("budget_amount")
    def serialize_amount(self, value: Decimal) -> float:
        return float(value)


class SubstitutionCreate(_CamelRequest):
    original_ingredient: str = Field(..., min_length=1)
    substitute_ingredient: str = Field(..., min_length=1)
    reason: Optional[str] = None
    savings_percent: Optional[int] = Field(None, ge=0, le=100)


class SubstitutionResponse(BaseModel):
    id: int
    original_ingredient: str
    substitute_ingredient: str
    reason: Optional[str] = None
    savings_percent: Optional[int] = None
    is_active: bool
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class OptimizePreferences(_CamelRequest):
    prioritize_seasonal: bool = False
    prioritize_organic: bool = False
    avoid_brands: bool = False


class OptimizeRequest(_CamelRequest):
    shopping_list: List[Dict[str, Any]] = Field(default_factory=list)
    budget: Optional[float] = Field(None, ge=0)
    preferences: Optional[OptimizePreferences] = None
