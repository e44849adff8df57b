"""
Rule-based ingredient categorization.

Used directly when no AI key is configured and as the fallback when the model
fails or answers with something that is not a known category.
"""

from typing import List, Tuple

from domain.enums import IngredientCategory

# Checked in this order; the first list with a matching keyword wins.
# Frozen goods come first so "TK-Erbsen" is not filed under vegetables.
CATEGORY_KEYWORDS: List[Tuple[str, List[str]]] = [
    (
        IngredientCategory.FROZEN.value,
        [
            "tiefkühl", "tiefgekühlt", "tk-", "tk ", "gefroren", "frozen",
            "pommes", "fischstäbchen", "speiseeis", "eiscreme",
        ],
    ),
    (
        IngredientCategory.MEAT_FISH.value,
        [
            "fleisch", "hähnchen", "huhn", "hühner", "pute", "truthahn", "rind",
            "schwein", "lamm", "kalb", "hack", "speck", "schinken", "wurst",
            "salami", "bacon", "steak", "filet", "schnitzel", "entenbrust",
            "fisch", "lachs", "thunfisch", "forelle", "kabeljau", "garnele",
            "shrimp", "scampi", "muschel", "tintenfisch", "hering", "sardine",
            "chicken", "beef", "pork",
        ],
    ),
    (
        IngredientCategory.DAIRY.value,
        [
            "milch", "käse", "sahne", "butter", "joghurt", "jogurt", "quark",
            "schmand", "crème fraîche", "creme fraiche", "mascarpone",
            "mozzarella", "parmesan", "feta", "gouda", "ricotta", "frischkäse",
            "eier", "cheese", "milk", "cream",
        ],
    ),
    (
        IngredientCategory.PRODUCE.value,
        [
            "apfel", "äpfel", "banane", "birne", "orange", "zitrone", "limette",
            "beere", "traube", "kirsche", "pfirsich", "mango", "ananas", "melone",
            "tomate", "gurke", "paprika", "zwiebel", "knoblauch", "karotte",
            "möhre", "kartoffel", "salat", "spinat", "brokkoli", "blumenkohl",
            "zucchini", "aubergine", "pilz", "champignon", "lauch", "porree",
            "sellerie", "kohl", "kürbis", "avocado", "ingwer", "petersilie",
            "basilikum", "schnittlauch", "koriander", "rucola", "radieschen",
            "spargel", "erbse", "bohne", "mais", "obst", "gemüse",
        ],
    ),
    (
        IngredientCategory.DRY_GOODS.value,
        [
            "mehl", "zucker", "reis", "nudel", "pasta", "spaghetti", "penne",
            "fusilli", "lasagne", "couscous", "bulgur", "quinoa", "haferflocken",
            "linsen", "kichererbsen", "salz", "pfeffer", "gewürz", "paprikapulver",
            "zimt", "oregano", "thymian", "curry", "backpulver", "hefe", "öl",
            "essig", "brühe", "fond", "senf", "honig", "sojasauce", "ketchup",
            "nüsse", "mandeln", "walnüsse", "rosinen", "kakao", "schokolade",
            "kaffee", "tee", "dose", "konserve", "passierte", "brot", "semmelbrösel",
        ],
    ),
]


def categorize_ingredient_rule_based(name: str) -> str:
    """Category for ``name`` by keyword match; ``Sonstiges`` when nothing matches."""
    text = (name or "").strip().lower()
    if not text:
        return IngredientCategory.OTHER.value
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return IngredientCategory.OTHER.value
