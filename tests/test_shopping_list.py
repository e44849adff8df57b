"""
Tests for shopping list aggregation.

Ingredients with the same name and unit (case-insensitive) are merged across
all planned meals. Numeric amounts are added; anything else is joined with
" + ". Manual items are appended as separate entries.
"""

from types import SimpleNamespace

import pytest

from domain.shopping_list import (
    build_shopping_list,
    format_amount,
    group_by_category,
    merge_amounts,
    parse_amount,
)


def recipe(name, *ingredients):
    return {
        "name": name,
        "ingredients": [
            {"name": n, "amount": a, "unit": u, "category": c} for n, a, u, c in ingredients
        ],
    }


@pytest.mark.parametrize(
    "value,expected",
    [("200", 200.0), ("1.5", 1.5), ("200 g", 200.0), (".5", 0.5), ("etwas", None), ("", None), (None, None), (3, 3.0)],
)
def test_parse_amount_reads_leading_number(value, expected):
    assert parse_amount(value) == expected


def test_merge_numeric_amounts():
    assert merge_amounts("2", "3") == "5"
    assert merge_amounts("0.5", "0.25") == "0.75"


def test_merge_non_numeric_amounts_joins_text():
    assert merge_amounts("etwas", "1") == "etwas + 1"
    assert merge_amounts("1", "nach Geschmack") == "1 + nach Geschmack"


def test_format_amount_drops_trailing_zero():
    assert format_amount(5.0) == "5"
    assert format_amount(2.5) == "2.5"


def test_same_ingredient_is_merged_across_recipes():
    bolognese = recipe("Bolognese", ("Zwiebel", "2", "Stück", "Obst & Gemüse"))
    curry = recipe("Curry", ("zwiebel", "3", "stück", "Obst & Gemüse"))

    entries = build_shopping_list([bolognese, curry])

    assert len(entries) == 1
    assert entries[0].name == "Zwiebel"
    assert entries[0].amount == "5"
    assert entries[0].recipe_names == ["Bolognese", "Curry"]


def test_different_units_stay_separate():
    a = recipe("A", ("Milch", "200", "ml", "Milchprodukte"))
    b = recipe("B", ("Milch", "1", "l", "Milchprodukte"))

    entries = build_shopping_list([a, b])

    assert sorted(e.unit for e in entries) == ["l", "ml"]


def test_recipe_planned_twice_counts_twice_but_is_named_once():
    pancakes = recipe("Pfannkuchen", ("Mehl", "250", "g", "Trockenwaren"))

    entries = build_shopping_list([pancakes, pancakes])

    assert entries[0].amount == "500"
    assert entries[0].recipe_names == ["Pfannkuchen"]


def test_non_numeric_amounts_are_concatenated():
    a = recipe("A", ("Salz", "etwas", "", "Trockenwaren"))
    b = recipe("B", ("Salz", "1", "", "Trockenwaren"))

    entries = build_shopping_list([a, b])

    assert entries[0].amount == "etwas + 1"


def test_manual_items_are_appended_unmerged():
    a = recipe("A", ("Milch", "500", "ml", "Milchprodukte"))
    manual = SimpleNamespace(id="m1", name="Milch", amount="1", unit="ml", category="Milchprodukte")

    entries = build_shopping_list([a], [manual])

    assert len(entries) == 2
    manual_entry = next(e for e in entries if e.is_manual)
    assert manual_entry.id == "m1"
    assert manual_entry.recipe_names == []
    assert manual_entry.to_dict()["id"] == "m1"


def test_entries_sorted_by_name_case_insensitively():
    a = recipe(
        "A",
        ("zucchini", "1", "Stück", "Obst & Gemüse"),
        ("Apfel", "2", "Stück", "Obst & Gemüse"),
        ("butter", "50", "g", "Milchprodukte"),
    )

    names = [e.name for e in build_shopping_list([a])]

    assert names == ["Apfel", "butter", "zucchini"]


def test_missing_category_falls_back_to_sonstiges():
    a = {"name": "A", "ingredients": [{"name": "Xanthan", "amount": "1", "unit": "TL"}]}

    entries = build_shopping_list([a])

    assert entries[0].category == "Sonstiges"


def test_group_by_category_uses_fixed_order_and_skips_empty():
    a = recipe(
        "A",
        ("Mehl", "1", "kg", "Trockenwaren"),
        ("Lachs", "200", "g", "Fleisch & Fisch"),
        ("Apfel", "3", "Stück", "Obst & Gemüse"),
    )

    grouped = group_by_category(build_shopping_list([a]))

    assert list(grouped) == ["Obst & Gemüse", "Fleisch & Fisch", "Trockenwaren"]
    assert [e.name for e in grouped["Fleisch & Fisch"]] == ["Lachs"]


def test_to_dict_uses_camel_case_keys():
    a = recipe("A", ("Reis", "200", "g", "Trockenwaren"))

    data = build_shopping_list([a])[0].to_dict()

    assert data == {
        "name": "Reis",
        "amount": "200",
        "unit": "g",
        "category": "Trockenwaren",
        "checked": False,
        "recipeNames": ["A"],
        "isManual": False,
    }


def test_empty_input_gives_empty_list():
    assert build_shopping_list([]) == []
    assert group_by_category([]) == {}
