"""
Planner service - week plans and week plan templates.

Week plans are exchanged as camelCase dicts::

    {"id": "2024-W03", "startDate": "2024-01-15",
     "days": [{"date": "2024-01-15", "dayName": "Montag",
               "meals": {"lunch": {"id", "recipeId", "recipeName", "mealType"}}}]}
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional
import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import MEAL_TYPES
from domain.models import Day, Meal, WeekPlan, WeekPlanTemplate
from domain.schemas.plan_schemas import (
    DaySchema,
    TemplateCreate,
    TemplateUpdate,
    WeekPlanSchema,
)
from domain.week import DAY_NAMES, DAYS_PER_WEEK, monday_of, week_id
from repositories import RecipeRepository, TemplateRepository, WeekPlanRepository

logger = logging.getLogger("foodplanner.planner")


def serialize_week_plan(plan: WeekPlan) -> Dict[str, Any]:
    days = []
    for day in sorted(plan.days, key=lambda d: d.position):
        meals = {}
        for meal in sorted(day.meals, key=lambda m: MEAL_TYPES.index(m.meal_type)):
            meals[meal.meal_type] = {
                "id": meal.id,
                "recipeId": meal.recipe_id,
                "recipeName": meal.recipe_name,
                "mealType": meal.meal_type,
            }
        days.append(
            {"date": day.date.isoformat(), "dayName": day.day_name, "meals": meals}
        )
    return {"id": plan.id, "startDate": plan.start_date.isoformat(), "days": days}


def template_days(template_data: Any) -> List[Dict[str, Any]]:
    """
    Day list stored in a template (either the list itself or ``{"days": [...]}``).

    Days that are not objects and `meals` values that are not mappings count as empty.
    """
    if isinstance(template_data, dict):
        template_data = template_data.get("days")
    if not isinstance(template_data, list):
        raise ServiceValidationError("Template data does not contain a list of days")
    days = []
    for day in template_data:
        if not isinstance(day, dict):
            day = {}
        meals = day.get("meals")
        days.append({**day, "meals": meals if isinstance(meals, dict) else {}})
    return days


class PlannerService:
    @staticmethod
    def get_latest(db: Session) -> Optional[Dict[str, Any]]:
        plan = WeekPlanRepository(db).get_latest()
        return serialize_week_plan(plan) if plan else None

    @staticmethod
    def get_by_date(db: Session, for_date: date) -> Dict[str, Any]:
        monday = monday_of(for_date)
        plan = WeekPlanRepository(db).get_by_start_date(monday)
        if not plan:
            raise NotFoundError(f"No week plan for week {week_id(monday)}")
        return serialize_week_plan(plan)

    @staticmethod
    def save_week_plan(db: Session, payload: WeekPlanSchema) -> Dict[str, Any]:
        """
        Replace the days and meals of the week containing ``payload.start_date``.

        The plan id and dates are normalized to the ISO week; day ``i`` of the
        payload becomes Monday + ``i``. Everything happens in one transaction.

        Raises:
            ServiceValidationError: a meal references an unknown recipe
        """
        monday = monday_of(payload.start_date)
        plan_id = week_id(monday)

        referenced = {
            meal.recipe_id
            for day in payload.days
            for meal in day.meals.values()
            if meal.recipe_id
        }
        known = {r.id for r in RecipeRepository(db).get_by_ids(referenced)}
        missing = sorted(referenced - known)
        if missing:
            raise ServiceValidationError(
                "Week plan references unknown recipes", details={"recipe_ids": missing}
            )

        repo = WeekPlanRepository(db)
        try:
            plan = repo.get_by_id(plan_id)
            if plan is None:
                plan = WeekPlan(id=plan_id, start_date=monday)
                db.add(plan)
            else:
                plan.days = []
            plan.updated_at = datetime.utcnow()
            db.flush()

            used_ids = set()
            for index, day_in in enumerate(payload.days):
                day = Day(
                    position=index,
                    date=monday + timedelta(days=index),
                    day_name=DAY_NAMES[index],
                )
                for meal_type, meal_in in day_in.meals.items():
                    meal_id = meal_in.id
                    if not meal_id or meal_id in used_ids or db.get(Meal, meal_id) is not None:
                        meal_id = str(uuid.uuid4())
                    used_ids.add(meal_id)
                    day.meals.append(
                        Meal(
                            id=meal_id,
                            recipe_id=meal_in.recipe_id,
                            recipe_name=meal_in.recipe_name or "",
                            meal_type=meal_type,
                        )
                    )
                plan.days.append(day)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to save week plan %s", plan_id)
            raise

        logger.info("Saved week plan %s", plan_id)
        return serialize_week_plan(repo.get_by_id(plan_id))

    @staticmethod
    def delete_week_plans(db: Session, for_date: Optional[date] = None) -> int:
        """Delete the week containing ``for_date``, or every week plan when omitted."""
        repo = WeekPlanRepository(db)
        if for_date is None:
            count = repo.delete_all()
            logger.info("Deleted %d week plans", count)
            return count

        monday = monday_of(for_date)
        plan = repo.get_by_start_date(monday)
        if not plan:
            raise NotFoundError(f"No week plan for week {week_id(monday)}")
        repo.delete(plan.id)
        logger.info("Deleted week plan %s", plan.id)
        return 1

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    @staticmethod
    def list_templates(db: Session) -> List[WeekPlanTemplate]:
        return TemplateRepository(db).list_all()

    @staticmethod
    def get_template(db: Session, template_id: str) -> WeekPlanTemplate:
        template = TemplateRepository(db).get_by_id(template_id)
        if not template:
            raise NotFoundError(f"Template {template_id} not found")
        return template

    @staticmethod
    def _require_template_fields(name: Optional[str], template_data: Any):
        if not (name or "").strip() or template_data in (None, "", [], {}):
            raise ServiceValidationError("Name and template data are required")

    @staticmethod
    def create_template(db: Session, payload: TemplateCreate) -> WeekPlanTemplate:
        PlannerService._require_template_fields(payload.name, payload.template_data)
        repo = TemplateRepository(db)
        template_id = payload.id or str(uuid.uuid4())
        if repo.exists(template_id):
            raise ConflictError(f"Template {template_id} already exists")

        template = repo.create(
            WeekPlanTemplate(
                id=template_id,
                name=payload.name.strip(),
                description=payload.description or "",
                template_data=payload.template_data,
            )
        )
        logger.info("Saved template %s (%s)", template.id, template.name)
        return template

    @staticmethod
    def update_template(
        db: Session, template_id: str, payload: TemplateUpdate
    ) -> WeekPlanTemplate:
        PlannerService._require_template_fields(payload.name, payload.template_data)
        repo = TemplateRepository(db)
        template = repo.get_by_id(template_id)
        if not template:
            raise NotFoundError(f"Template {template_id} not found")

        template.name = payload.name.strip()
        template.description = payload.description or ""
        template.template_data = payload.template_data
        template.updated_at = datetime.utcnow()
        return repo.update(template)

    @staticmethod
    def delete_template(db: Session, template_id: str) -> None:
        if not TemplateRepository(db).delete(template_id):
            raise NotFoundError(f"Template {template_id} not found")
        logger.info("Deleted template %s", template_id)

    @staticmethod
    def apply_template(db: Session, template_id: str, for_date: date) -> Dict[str, Any]:
        """
        Copy a template's meals onto the week containing ``for_date`` and save it.

        Days are matched by position. Meals get fresh ids; references to recipes
        that no longer exist are dropped while the recipe name is kept.
        """
        template = PlannerService.get_template(db, template_id)
        source_days = template_days(template.template_data)
        monday = monday_of(for_date)

        referenced = {
            meal.get("recipeId")
            for day in source_days
            for meal in (day.get("meals") or {}).values()
            if isinstance(meal, dict) and meal.get("recipeId")
        }
        known = {r.id for r in RecipeRepository(db).get_by_ids(referenced)}

        days = []
        for index in range(DAYS_PER_WEEK):
            source = source_days[index] if index < len(source_days) else {}
            meals = {}
            for meal_type, meal in (source.get("meals") or {}).items():
                if meal_type not in MEAL_TYPES or not isinstance(meal, dict):
                    continue
                recipe_id = meal.get("recipeId")
                meals[meal_type] = {
                    "id": str(uuid.uuid4()),
                    "recipeId": recipe_id if recipe_id in known else None,
                    "recipeName": meal.get("recipeName") or "",
                    "mealType": meal_type,
                }
            days.append(
                DaySchema.model_validate(
                    {
                        "date": (monday + timedelta(days=index)).isoformat(),
                        "dayName": DAY_NAMES[index],
                        "meals": meals,
                    }
                )
            )

        plan = WeekPlanSchema(start_date=monday, days=days)
        logger.info("Applying template %s to week %s", template_id, week_id(monday))
        return PlannerService.save_week_plan(db, plan)
