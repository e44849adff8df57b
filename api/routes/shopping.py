"""Shopping routes - manual items, derived list, budgets, substitutions, AI optimization"""

from datetime import date
from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from domain.models import get_db_session
from domain.schemas.plan_schemas import MessageResponse
from domain.schemas.shopping_schemas import (
    BudgetRequest,
    BudgetResponse,
    ManualItemCreate,
    ManualItemResponse,
    OptimizeRequest,
    ShoppingListResponse,
    SubstitutionCreate,
    SubstitutionResponse,
)
from services.shopping_service import ShoppingService

router = APIRouter(prefix="/shopping", tags=["Shopping"])
logger = logging.getLogger("foodplanner.api.shopping")


# ============================================================================
# Manual items
# ============================================================================


@router.get("/manual", response_model=List[ManualItemResponse])
def list_manual_items(db: Session = Depends(get_db_session)):
    return [
        ManualItemResponse.model_validate(i)
        for i in ShoppingService.list_manual_items(db)
    ]


@router.post(
    "/manual", response_model=MessageResponse, status_code=status.HTTP_201_CREATED
)
def add_manual_item(payload: ManualItemCreate, db: Session = Depends(get_db_session)):
    """Add an item that is not tied to a recipe (`name`, `amount`, `unit` required)."""
    item = ShoppingService.add_manual_item(db, payload)
    return MessageResponse(message="Manual shopping item added successfully", id=item.id)


@router.delete("/manual", response_model=MessageResponse)
def clear_manual_items(db: Session = Depends(get_db_session)):
    ShoppingService.clear_manual_items(db)
    return MessageResponse(message="All manual shopping items deleted successfully")


@router.delete("/manual/{item_id}", response_model=MessageResponse)
def delete_manual_item(item_id: str, db: Session = Depends(get_db_session)):
    ShoppingService.delete_manual_item(db, item_id)
    return MessageResponse(message="Manual shopping item deleted successfully", id=item_id)


# ============================================================================
# Derived shopping list
# ============================================================================


@router.get("/list", response_model=ShoppingListResponse)
def get_shopping_list(
    date_: Optional[date] = Query(
        default=None, alias="date", description="Any date in the week (latest week if omitted)"
    ),
    db: Session = Depends(get_db_session),
):
    """
    Shopping list aggregated from the week's planned recipes plus manual items.

    Computed on every request; nothing is stored.
    """
    return ShoppingService.build_list(db, date_)


# ============================================================================
# Budgets
# ============================================================================


@router.get("/budget/{week_start}", response_model=Optional[BudgetResponse])
def get_budget(week_start: date, db: Session = Depends(get_db_session)):
    """Budget of the week starting on `week_start`, or null."""
    budget = ShoppingService.get_budget(db, week_start)
    return BudgetResponse.model_validate(budget) if budget else None


@router.post("/budget", response_model=BudgetResponse)
def set_budget(payload: BudgetRequest, db: Session = Depends(get_db_session)):
    """Create or update a week's budget."""
    return BudgetResponse.model_validate(ShoppingService.set_budget(db, payload))


# ============================================================================
# Substitution preferences
# ============================================================================


@router.get("/substitutions", response_model=List[SubstitutionResponse])
def list_substitutions(db: Session = Depends(get_db_session)):
    """Active substitution preferences."""
    return [
        SubstitutionResponse.model_validate(s)
        for s in ShoppingService.list_substitutions(db)
    ]


@router.post(
    "/substitutions",
    response_model=SubstitutionResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_substitution(payload: SubstitutionCreate, db: Session = Depends(get_db_session)):
    return SubstitutionResponse.model_validate(
        ShoppingService.add_substitution(db, payload)
    )


@router.delete("/substitutions/{substitution_id}", response_model=SubstitutionResponse)
def deactivate_substitution(substitution_id: int, db: Session = Depends(get_db_session)):
    """Deactivate a substitution preference; it stays stored with is_active false."""
    return SubstitutionResponse.model_validate(
        ShoppingService.deactivate_substitution(db, substitution_id)
    )


# ============================================================================
# AI optimization
# ============================================================================


@router.post("/optimize", response_model=Dict[str, Any])
def optimize_shopping_list(payload: OptimizeRequest, db: Session = Depends(get_db_session)):
    """
    Ask the AI for cheaper alternatives, seasonal and quantity tips.

    Active substitution preferences and the current week's budget (unless
    `budget` is given) are passed to the model.
    """
    return ShoppingService.optimize(db, payload)
