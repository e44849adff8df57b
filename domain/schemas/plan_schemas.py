"""Schemas for week plans and week plan templates (camelCase on the wire)."""

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.enums import MEAL_TYPES
from domain.week import DAYS_PER_WEEK, to_date


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class MealSchema(CamelModel):
    id: Optional[str] = None
    recipe_id: Optional[str] = None
    recipe_name: str = ""
    meal_type: Optional[str] = None


class DaySchema(CamelModel):
    date: dt.date
    day_name: Optional[str] = None
    meals: Dict[str, Optional[MealSchema]] = Field(default_factory=dict)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            return to_date(v)
        return v

    @field_validator("meals")
    @classmethod
    def known_meal_types(cls, v: Dict[str, Optional[MealSchema]]):
        unknown = [k for k in v if k not in MEAL_TYPES]
        if unknown:
            raise ValueError(f"Unknown meal type(s): {', '.join(unknown)}")
        return {k: m for k, m in v.items() if m is not None}


class WeekPlanSchema(CamelModel):
    """A full week; id and startDate are normalized to the ISO week on save."""

    id: Optional[str] = None
    start_date: dt.date
    days: List[DaySchema]

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            return to_date(v)
        return v

    @field_validator("days")
    @classmethod
    def seven_days(cls, v: List[DaySchema]) -> List[DaySchema]:
        if len(v) != DAYS_PER_WEEK:
            raise ValueError(
                f"A week plan needs exactly {DAYS_PER_WEEK} days, got {len(v)}"
            )
        return v


class TemplateCreate(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    template_data: Optional[Any] = None


class TemplateUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    template_data: Optional[Any] = None


class TemplateResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = ""
    template_data: Any
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class ApplyTemplateRequest(CamelModel):
    """Target week for a template; any date inside the week works."""

    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            return to_date(v)
        return v


class MessageResponse(BaseModel):
    message: str
    id: Optional[str] = None
