"""
Planner state held by a client session.

Tracks the loaded recipes, the week currently shown and a cache of week plans
already fetched, and pushes every change through a :class:`PlannerAPIClient`.
"""

import copy
import logging
import uuid
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from client.storage import PlannerAPIClient, StorageError
from domain.enums import DEFAULT_CATEGORY, MEAL_TYPES
from domain.shopping_list import ShoppingListEntry, build_shopping_list, ingredient_key
from domain.week import DAYS_PER_WEEK, empty_week_plan, monday_of, shift_weeks, week_id

logger = logging.getLogger("foodplanner.client.state")


class PlannerState:
    def __init__(
        self,
        storage: PlannerAPIClient,
        today: Callable[[], date] = date.today,
    ):
        self.storage = storage
        self._today = today
        self.recipes: List[Dict[str, Any]] = []
        self.week_plan: Optional[Dict[str, Any]] = None
        self.current_week_start: Optional[date] = None
        self.week_plans_cache: Dict[str, Dict[str, Any]] = {}
        self.shopping_list: List[ShoppingListEntry] = []
        self.category_cache: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Loading and navigation
    # ------------------------------------------------------------------

    def _week_key(self) -> str:
        return week_id(self.current_week_start)

    def init(self) -> Dict[str, Any]:
        """Load recipes and show the current week."""
        self.recipes = self.storage.list_recipes()
        self.current_week_start = monday_of(self._today())
        return self.load_week_plan()

    def load_week_plan(self) -> Dict[str, Any]:
        """
        Show the week at ``current_week_start``: from the cache, else from the
        server, else a new empty week which is saved right away.
        """
        key = self._week_key()
        cached = self.week_plans_cache.get(key)
        if cached is not None:
            self.week_plan = cached
            return cached

        plan = self.storage.get_week_plan_by_date(self.current_week_start)
        if plan is None:
            plan = self.initialize_week_plan()
        self.week_plans_cache[key] = plan
        self.week_plan = plan
        return plan

    def initialize_week_plan(self) -> Dict[str, Any]:
        plan = empty_week_plan(self.current_week_start)
        logger.info("Creating empty week plan %s", plan["id"])
        return self.storage.save_week_plan(plan)

    def navigate_week(self, direction: int) -> Dict[str, Any]:
        """Move ``direction`` weeks forward (positive) or back (negative)."""
        self.current_week_start = shift_weeks(self.current_week_start, direction)
        return self.load_week_plan()

    def go_to_current_week(self) -> Dict[str, Any]:
        self.current_week_start = monday_of(self._today())
        return self.load_week_plan()

    def is_current_week(self) -> bool:
        return self.current_week_start == monday_of(self._today())

    def reload_data(self) -> Dict[str, Any]:
        """Fetch recipes again and reload the shown week bypassing the cache."""
        self.recipes = self.storage.list_recipes()
        self.week_plans_cache.pop(self._week_key(), None)
        return self.load_week_plan()

    # ------------------------------------------------------------------
    # Editing the shown week
    # ------------------------------------------------------------------

    def _save_current(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        saved = self.storage.save_week_plan(plan)
        self.week_plan = saved
        self.week_plans_cache[self._week_key()] = saved
        return saved

    def _editable_plan(self) -> Dict[str, Any]:
        if self.week_plan is None:
            raise RuntimeError("No week plan loaded; call init() first")
        return copy.deepcopy(self.week_plan)

    @staticmethod
    def _check_slot(day_index: int, meal_type: str):
        if not 0 <= day_index < DAYS_PER_WEEK:
            raise ValueError(f"day_index must be between 0 and {DAYS_PER_WEEK - 1}")
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"Unknown meal type: {meal_type}")

    def get_recipe(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        for recipe in self.recipes:
            if recipe["id"] == recipe_id:
                return recipe
        return None

    def assign_meal(self, day_index: int, meal_type: str, recipe_id: str) -> Dict[str, Any]:
        """Put a recipe into a slot of the shown week and save the week."""
        self._check_slot(day_index, meal_type)
        recipe = self.get_recipe(recipe_id) or self.storage.get_recipe(recipe_id)
        if recipe is None:
            raise ValueError(f"Unknown recipe: {recipe_id}")

        plan = self._editable_plan()
        plan["days"][day_index].setdefault("meals", {})[meal_type] = {
            "id": str(uuid.uuid4()),
            "recipeId": recipe["id"],
            "recipeName": recipe["name"],
            "mealType": meal_type,
        }
        return self._save_current(plan)

    def remove_meal(self, day_index: int, meal_type: str) -> Dict[str, Any]:
        self._check_slot(day_index, meal_type)
        plan = self._editable_plan()
        plan["days"][day_index].get("meals", {}).pop(meal_type, None)
        return self._save_current(plan)

    def reset_week(self) -> Dict[str, Any]:
        """Remove every meal from the shown week."""
        return self._save_current(empty_week_plan(self.current_week_start))

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def save_template(self, name: str, description: str = "") -> str:
        """Store the days of the shown week as a template."""
        plan = self._editable_plan()
        return self.storage.save_template(name, {"days": plan["days"]}, description)

    def apply_template(self, template_id: str) -> Dict[str, Any]:
        saved = self.storage.apply_template(template_id, self.current_week_start)
        self.week_plan = saved
        self.week_plans_cache[self._week_key()] = saved
        return saved

    # ------------------------------------------------------------------
    # Shopping list
    # ------------------------------------------------------------------

    def generate_shopping_list(self) -> List[ShoppingListEntry]:
        """
        Aggregate the ingredients of every planned meal of the shown week and
        append the manual items. Checked marks survive regeneration.
        """
        previously_checked = {self._entry_key(e) for e in self.shopping_list if e.checked}

        planned = []
        for day in (self.week_plan or {}).get("days", []):
            for meal_type in MEAL_TYPES:
                meal = (day.get("meals") or {}).get(meal_type)
                if not meal or not meal.get("recipeId"):
                    continue
                recipe = self.get_recipe(meal["recipeId"]) or self.storage.get_recipe(
                    meal["recipeId"]
                )
                if recipe is not None:
                    planned.append(recipe)

        entries = build_shopping_list(planned, self.storage.list_manual_items())
        for entry in entries:
            entry.checked = self._entry_key(entry) in previously_checked
        self.shopping_list = entries
        return entries

    @staticmethod
    def _entry_key(entry: ShoppingListEntry) -> str:
        if entry.is_manual:
            return f"manual_{entry.id}"
        return ingredient_key(entry.name, entry.unit)

    def toggle_checked(self, index: int) -> bool:
        entry = self.shopping_list[index]
        entry.checked = not entry.checked
        return entry.checked

    def add_manual_item(self, name: str, amount: str, unit: str, category: Optional[str] = None) -> str:
        item_id = self.storage.add_manual_item(
            {"name": name, "amount": amount, "unit": unit, "category": category}
        )
        self.generate_shopping_list()
        return item_id

    def remove_manual_item(self, item_id: str):
        self.storage.delete_manual_item(item_id)
        self.generate_shopping_list()

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    def add_recipe(self, recipe: Dict[str, Any]) -> str:
        recipe_id = self.storage.add_recipe(recipe)
        self.recipes = self.storage.list_recipes()
        return recipe_id

    def update_recipe(self, recipe_id: str, recipe: Dict[str, Any]) -> Dict[str, Any]:
        updated = self.storage.update_recipe(recipe_id, recipe)
        self.recipes = self.storage.list_recipes()
        return updated

    def delete_recipe(self, recipe_id: str):
        """
        Delete a recipe. Planned meals keep their name but lose the link, so
        cached weeks are dropped and the shown week is reloaded.
        """
        self.storage.delete_recipe(recipe_id)
        self.recipes = self.storage.list_recipes()
        self.week_plans_cache.clear()
        if self.current_week_start is not None:
            self.load_week_plan()

    def categorize_ingredient(self, name: str) -> str:
        """Category of an ingredient name; answers are cached per lower-case name."""
        key = (name or "").strip().lower()
        if not key:
            return DEFAULT_CATEGORY
        if key in self.category_cache:
            return self.category_cache[key]
        try:
            category = self.storage.categorize_ingredient(name.strip())["category"]
        except StorageError as e:
            logger.warning("Categorizing '%s' failed: %s", name, e.message)
            return DEFAULT_CATEGORY
        self.category_cache[key] = category
        return category
