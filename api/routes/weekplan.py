"""Week plan and template routes"""

from datetime import date
from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from domain.models import get_db_session
from domain.schemas.plan_schemas import (
    ApplyTemplateRequest,
    MessageResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
    WeekPlanSchema,
)
from services.planner_service import PlannerService

router = APIRouter(prefix="/weekplan", tags=["Week Plan"])
logger = logging.getLogger("foodplanner.api.weekplan")


@router.get("", response_model=Optional[Dict[str, Any]])
def get_week_plan(db: Session = Depends(get_db_session)):
    """Most recently saved week plan, or null when none exists."""
    return PlannerService.get_latest(db)


@router.post("", status_code=status.HTTP_201_CREATED)
def save_week_plan(payload: WeekPlanSchema, db: Session = Depends(get_db_session)):
    """
    Save a week plan (exactly seven days).

    The plan is stored under the ISO week of `startDate`; an existing plan for
    that week is replaced.
    """
    plan = PlannerService.save_week_plan(db, payload)
    return {"message": "Week plan saved successfully", "weekPlan": plan}


@router.delete("", response_model=MessageResponse)
def delete_week_plan(
    date_: Optional[date] = Query(
        default=None, alias="date", description="Delete only the week containing this date"
    ),
    db: Session = Depends(get_db_session),
):
    """Delete one week plan (`?date=`) or all of them."""
    count = PlannerService.delete_week_plans(db, date_)
    if date_ is None:
        return MessageResponse(message=f"Deleted {count} week plan(s)")
    return MessageResponse(message="Week plan deleted successfully")


@router.get("/by-date/{for_date}", response_model=Dict[str, Any])
def get_week_plan_by_date(for_date: date, db: Session = Depends(get_db_session)):
    """Week plan of the week containing the given date (YYYY-MM-DD)."""
    return PlannerService.get_by_date(db, for_date)


# ============================================================================
# Templates
# ============================================================================


@router.get("/templates", response_model=List[TemplateResponse])
def list_templates(db: Session = Depends(get_db_session)):
    return [TemplateResponse.model_validate(t) for t in PlannerService.list_templates(db)]


@router.post(
    "/templates", response_model=MessageResponse, status_code=status.HTTP_201_CREATED
)
def create_template(payload: TemplateCreate, db: Session = Depends(get_db_session)):
    """Save a week plan template (`name` and `templateData` required)."""
    template = PlannerService.create_template(db, payload)
    return MessageResponse(message="Template saved successfully", id=template.id)


@router.get("/templates/{template_id}", response_model=TemplateResponse)
def get_template(template_id: str, db: Session = Depends(get_db_session)):
    return TemplateResponse.model_validate(PlannerService.get_template(db, template_id))


@router.put("/templates/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: str, payload: TemplateUpdate, db: Session = Depends(get_db_session)
):
    return TemplateResponse.model_validate(
        PlannerService.update_template(db, template_id, payload)
    )


@router.delete("/templates/{template_id}", response_model=MessageResponse)
def delete_template(template_id: str, db: Session = Depends(get_db_session)):
    PlannerService.delete_template(db, template_id)
    return MessageResponse(message="Template deleted successfully", id=template_id)


@router.post("/templates/{template_id}/apply", response_model=Dict[str, Any])
def apply_template(
    template_id: str, payload: ApplyTemplateRequest, db: Session = Depends(get_db_session)
):
    """Fill the week containing `date` with the template's meals and save it."""
    return PlannerService.apply_template(db, template_id, payload.date)
