import pytest

from services.categorizer import CATEGORY_KEYWORDS, categorize_ingredient_rule_based
from domain.enums import IngredientCategory


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Parmesan", "Milchprodukte"),
        ("Eier", "Milchprodukte"),
        ("Schlagsahne", "Milchprodukte"),
        ("Lachsfilet", "Fleisch & Fisch"),
        ("Hähnchenbrust", "Fleisch & Fisch"),
        ("TK-Erbsen", "Tiefkühl"),
        ("Zwiebeln", "Obst & Gemüse"),
        ("Knoblauch", "Obst & Gemüse"),
        ("Mehl", "Trockenwaren"),
        ("Olivenöl", "Trockenwaren"),
    ],
)
def test_known_ingredients(name, expected):
    assert categorize_ingredient_rule_based(name) == expected


def test_match_is_case_insensitive():
    assert categorize_ingredient_rule_based("PARMESAN") == "Milchprodukte"


@pytest.mark.parametrize("name", ["Xanthan", "", "   ", None])
def test_unknown_or_blank_is_sonstiges(name):
    assert categorize_ingredient_rule_based(name) == "Sonstiges"


def test_keyword_table_only_uses_known_categories():
    for category, keywords in CATEGORY_KEYWORDS:
        assert category in IngredientCategory.values()
        assert keywords
