"""
Shopping list aggregation.

The shopping list is never stored: it is derived from the recipes planned in a
week plus the manual shopping items every time it is requested. Both the API
(``GET /shopping/list``) and the client state use this module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from domain.enums import CATEGORY_ORDER, DEFAULT_CATEGORY, IngredientCategory

# Leading decimal number, same prefix rule as JavaScript's parseFloat
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class ShoppingListEntry:
    name: str
    amount: str
    unit: str
    category: str = DEFAULT_CATEGORY
    recipe_names: List[str] = field(default_factory=list)
    is_manual: bool = False
    checked: bool = False
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "category": self.category,
            "checked": self.checked,
            "recipeNames": list(self.recipe_names),
            "isManual": self.is_manual,
        }
        if self.id is not None:
            out["id"] = self.id
        return out


def parse_amount(amount: Any) -> Optional[float]:
    """Numeric value of the leading number in ``amount`` or None ("200 g" -> 200.0, "etwas" -> None)."""
    if amount is None:
        return None
    if isinstance(amount, (int, float)) and not isinstance(amount, bool):
        return float(amount)
    match = _LEADING_NUMBER.match(str(amount))
    if not match:
        return None
    return float(match.group(0))


def format_amount(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def merge_amounts(existing: Any, new: Any) -> str:
    """Add two free-text amounts; fall back to "a + b" when either is not numeric."""
    left = parse_amount(existing)
    right = parse_amount(new)
    if left is not None and right is not None:
        return format_amount(left + right)
    return f"{_text(existing)} + {_text(new)}"


def ingredient_key(name: str, unit: str) -> str:
    return f"{(name or '').lower()}_{(unit or '').lower()}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def build_shopping_list(
    recipes: Iterable[Any], manual_items: Iterable[Any] = ()
) -> List[ShoppingListEntry]:
    """
    Aggregate ingredients of ``recipes`` (one entry per planned meal, so a
    recipe planned twice is passed twice) and append ``manual_items``.

    Recipes and items may be mappings or objects with the same attribute names.
    """
    entries: Dict[str, ShoppingListEntry] = {}

    for recipe in recipes:
        recipe_name = _text(_get(recipe, "name"))
        for ingredient in _get(recipe, "ingredients") or []:
            name = _text(_get(ingredient, "name"))
            unit = _text(_get(ingredient, "unit"))
            amount = _text(_get(ingredient, "amount"))
            key = ingredient_key(name, unit)

            existing = entries.get(key)
            if existing is None:
                entries[key] = ShoppingListEntry(
                    name=name,
                    amount=amount,
                    unit=unit,
                    category=_get(ingredient, "category") or DEFAULT_CATEGORY,
                    recipe_names=[recipe_name],
                )
                continue

            existing.amount = merge_amounts(existing.amount, amount)
            if recipe_name not in existing.recipe_names:
                existing.recipe_names.append(recipe_name)

    for item in manual_items:
        item_id = _text(_get(item, "id"))
        entries[f"manual_{item_id}"] = ShoppingListEntry(
            id=item_id,
            name=_text(_get(item, "name")),
            amount=_text(_get(item, "amount")),
            unit=_text(_get(item, "unit")),
            category=_get(item, "category") or DEFAULT_CATEGORY,
            is_manual=True,
        )

    return sorted(entries.values(), key=lambda e: e.name.casefold())


def group_by_category(
    entries: Iterable[ShoppingListEntry],
) -> Dict[str, List[ShoppingListEntry]]:
    """Group entries in fixed category order; empty categories are omitted."""
    grouped: Dict[str, List[ShoppingListEntry]] = {c: [] for c in CATEGORY_ORDER}
    for entry in entries:
        grouped[IngredientCategory.normalize(entry.category)].append(entry)
    return {c: items for c, items in grouped.items() if items}
