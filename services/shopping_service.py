"""Shopping service - manual items, derived shopping list, budgets, substitutions"""

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import MEAL_TYPES, IngredientCategory
from domain.models import ManualShoppingItem, ShoppingBudget, SubstitutionPreference
from domain.schemas.recipe_schemas import RecipeResponse
from domain.schemas.shopping_schemas import (
    BudgetRequest,
    ManualItemCreate,
    OptimizeRequest,
    SubstitutionCreate,
)
from domain.shopping_list import build_shopping_list, group_by_category
from domain.week import monday_of
from repositories import (
    BudgetRepository,
    ManualItemRepository,
    RecipeRepository,
    SubstitutionRepository,
    WeekPlanRepository,
)
from services.ai_service import AIService

logger = logging.getLogger("foodplanner.shopping")

GERMAN_MONTHS = [
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
]


class ShoppingService:
    """Business logic for shopping list generation."""

    # ------------------------------------------------------------------
    # Manual items
    # ------------------------------------------------------------------

    @staticmethod
    def list_manual_items(db: Session) -> List[ManualShoppingItem]:
        return ManualItemRepository(db).list_all()

    @staticmethod
    def add_manual_item(db: Session, payload: ManualItemCreate) -> ManualShoppingItem:
        name = (payload.name or "").strip()
        amount = (payload.amount or "").strip()
        unit = (payload.unit or "").strip()
        if not name or not amount or not unit:
            raise ServiceValidationError("Name, amount and unit are required")

        repo = ManualItemRepository(db)
        item_id = payload.id or str(uuid.uuid4())
        if repo.exists(item_id):
            raise ConflictError(f"Shopping item {item_id} already exists")

        item = repo.create(
            ManualShoppingItem(
                id=item_id,
                name=name,
                amount=amount,
                unit=unit,
                category=IngredientCategory.normalize(payload.category),
            )
        )
        logger.info("Added manual shopping item %s (%s)", item.id, item.name)
        return item

    @staticmethod
    def delete_manual_item(db: Session, item_id: str) -> None:
        if not ManualItemRepository(db).delete(item_id):
            raise NotFoundError(f"Shopping item {item_id} not found")

    @staticmethod
    def clear_manual_items(db: Session) -> int:
        count = ManualItemRepository(db).delete_all()
        logger.info("Cleared %d manual shopping items", count)
        return count

    # ------------------------------------------------------------------
    # Derived shopping list
    # ------------------------------------------------------------------

    @staticmethod
    def build_list(db: Session, for_date: Optional[date] = None) -> Dict[str, Any]:
        """
        Shopping list for the week containing ``for_date`` (latest saved week
        when omitted) plus all manual items. Nothing is stored.
        """
        plan_repo = WeekPlanRepository(db)
        plan = (
            plan_repo.get_by_start_date(monday_of(for_date))
            if for_date
            else plan_repo.get_latest()
        )

        recipe_ids: List[str] = []
        if plan:
            for day in sorted(plan.days, key=lambda d: d.position):
                for meal in sorted(day.meals, key=lambda m: MEAL_TYPES.index(m.meal_type)):
                    if meal.recipe_id:
                        recipe_ids.append(meal.recipe_id)

        recipes = {
            r.id: RecipeResponse.model_validate(r).model_dump()
            for r in RecipeRepository(db).get_by_ids(recipe_ids)
        }
        planned = [recipes[rid] for rid in recipe_ids if rid in recipes]

        entries = build_shopping_list(planned, ManualItemRepository(db).list_all())
        return {
            "weekId": plan.id if plan else None,
            "items": [e.to_dict() for e in entries],
            "byCategory": {
                category: [e.to_dict() for e in items]
                for category, items in group_by_category(entries).items()
            },
        }

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------

    @staticmethod
    def get_budget(db: Session, week_start: date) -> Optional[ShoppingBudget]:
        return BudgetRepository(db).get_by_week_start(monday_of(week_start))

    @staticmethod
    def set_budget(db: Session, payload: BudgetRequest) -> ShoppingBudget:
        """Create or replace the budget of a week (keyed by its Monday)."""
        repo = BudgetRepository(db)
        week_start = monday_of(payload.week_start)
        amount = Decimal(payload.budget_amount).quantize(Decimal("0.01"))
        currency = payload.currency.upper()

        budget = repo.get_by_week_start(week_start)
        if budget:
            budget.budget_amount = amount
            budget.currency = currency
            budget.updated_at = datetime.utcnow()
            budget = repo.update(budget)
        else:
            budget = repo.create(
                ShoppingBudget(
                    week_start=week_start, budget_amount=amount, currency=currency
                )
            )
        logger.info("Budget for week of %s set to %s %s", week_start, amount, currency)
        return budget

    # ------------------------------------------------------------------
    # Substitution preferences
    # ------------------------------------------------------------------

    @staticmethod
    def list_substitutions(db: Session) -> List[SubstitutionPreference]:
        return SubstitutionRepository(db).list_active()

    @staticmethod
    def add_substitution(db: Session, payload: SubstitutionCreate) -> SubstitutionPreference:
        original = payload.original_ingredient.strip()
        substitute = payload.substitute_ingredient.strip()
        if not original or not substitute:
            raise ServiceValidationError(
                "originalIngredient and substituteIngredient are required"
            )
        return SubstitutionRepository(db).create(
            SubstitutionPreference(
                original_ingredient=original,
                substitute_ingredient=substitute,
                reason=payload.reason,
                savings_percent=payload.savings_percent,
                is_active=True,
            )
        )

    @staticmethod
    def deactivate_substitution(db: Session, substitution_id: int) -> SubstitutionPreference:
        repo = SubstitutionRepository(db)
        pref = repo.get_by_id(substitution_id)
        if not pref:
            raise NotFoundError(f"Substitution {substitution_id} not found")
        pref.is_active = False
        return repo.update(pref)

    # ------------------------------------------------------------------
    # AI optimization
    # ------------------------------------------------------------------

    @staticmethod
    def optimize(
        db: Session, payload: OptimizeRequest, today: Optional[date] = None
    ) -> Dict[str, Any]:
        """Ask the model for cheaper alternatives, passing the household's substitutions."""
        today = today or date.today()
        budget = payload.budget
        if budget is None:
            stored = ShoppingService.get_budget(db, today)
            if stored:
                budget = float(stored.budget_amount)

        substitutions = [
            {
                "original_ingredient": s.original_ingredient,
                "substitute_ingredient": s.substitute_ingredient,
                "reason": s.reason,
            }
            for s in ShoppingService.list_substitutions(db)
        ]
        preferences = payload.preferences.model_dump() if payload.preferences else None
        return AIService.optimize_shopping_list(
            payload.shopping_list,
            budget=budget,
            preferences=preferences,
            substitutions=substitutions,
            month=GERMAN_MONTHS[today.month - 1],
        )
