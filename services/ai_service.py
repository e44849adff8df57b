"""
AI Service - prompt building and JSON extraction for the Gemini passthroughs.

Every operation builds a fixed German prompt, sends it through
``adapters.gemini_adapter`` and parses the JSON the model answers with.
"""

from typing import Any, Dict, List, Optional
import json
import logging
import re

from adapters import gemini_adapter
from app.exceptions import AIResponseError, AIUnavailableError, ServiceValidationError
from domain.enums import IngredientCategory, ParseInputType
from services import recipe_fetcher
from services.categorizer import categorize_ingredient_rule_based

logger = logging.getLogger("foodplanner.ai")

CATEGORY_LIST = ", ".join(IngredientCategory.values())

_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")

GENERATE_RECIPES_PROMPT = """Du bist ein kreativer Koch-Assistent. Generiere 3 leckere Rezept-Vorschläge basierend auf folgenden Zutaten:

Verfügbare Zutaten: {ingredients}

{preferences}

Erstelle für jedes Rezept:
- Einen kreativen Namen
- Kategorie (z.B. Hauptgericht, Suppe, Salat, etc.)
- Anzahl Portionen
- Liste der Zutaten mit Mengen und Einheiten und Kategorien ({categories})
- Schritt-für-Schritt Anleitung

WICHTIG: Antworte NUR mit einem validen JSON-Array im folgenden Format, ohne zusätzlichen Text:

[
  {{
    "name": "Rezeptname",
    "category": "Kategorie",
    "servings": 4,
    "ingredients": [
      {{
        "name": "Zutat",
        "amount": "200",
        "unit": "g",
        "category": "Obst & Gemüse"
      }}
    ],
    "instructions": "Schritt 1: ... Schritt 2: ..."
  }}
]"""

PARSE_RECIPE_PROMPT = """Du bist ein Assistent, der Rezepte strukturiert. Extrahiere aus dem folgenden {source} genau ein Rezept.

{content}

Ordne jeder Zutat eine dieser Kategorien zu: {categories}.
Mengen sind Text (z.B. "200", "1/2", "etwas"), Einheiten ebenfalls (z.B. "g", "ml", "EL", "Stück").

WICHTIG: Antworte NUR mit einem validen JSON-Objekt im folgenden Format, ohne zusätzlichen Text:

{{
  "name": "Rezeptname",
  "category": "Kategorie",
  "servings": 4,
  "ingredients": [
    {{"name": "Zutat", "amount": "200", "unit": "g", "category": "Obst & Gemüse"}}
  ],
  "instructions": "Schritt 1: ... Schritt 2: ..."
}}"""

SCALE_PORTIONS_PROMPT = """Skaliere die folgenden Zutaten eines Rezepts von {original} auf {new} Portionen.

Zutaten (JSON):
{ingredients}

Runde auf sinnvolle Küchenmengen (z.B. keine 1,33 Eier). Behalte Namen, Einheiten und Kategorien bei.
Nicht zählbare Angaben wie "etwas" oder "nach Geschmack" bleiben unverändert.

WICHTIG: Antworte NUR mit einem validen JSON-Array im selben Format, ohne zusätzlichen Text:

[
  {{"name": "Zutat", "amount": "300", "unit": "g", "category": "Obst & Gemüse"}}
]"""

CATEGORIZE_PROMPT = """Ordne die Zutat "{name}" genau einer dieser Einkaufs-Kategorien zu:
{categories}

Antworte NUR mit dem exakten Namen der Kategorie, ohne zusätzlichen Text."""

OPTIMIZE_PROMPT = """Du bist ein sparsamer Einkaufsberater. Analysiere die folgende Einkaufsliste und schlage Optimierungen vor.

Einkaufsliste (JSON):
{shopping_list}

{budget}
{preferences}
{substitutions}

Berücksichtige:
- Günstigere Alternativen mit ähnlichem Geschmack
- Saisonale Produkte (aktueller Monat: {month})
- Sinnvolle Packungsgrößen und Mengen

WICHTIG: Antworte NUR mit einem validen JSON-Objekt im folgenden Format, ohne zusätzlichen Text:

{{
  "originalEstimate": 45.50,
  "optimizedEstimate": 38.20,
  "savingsPercent": 16,
  "substitutions": [
    {{"original": "Zutat", "substitute": "Alternative", "reason": "Begründung", "savingsPercent": 20, "category": "Milchprodukte"}}
  ],
  "seasonalTips": [{{"item": "Zutat", "tip": "Hinweis"}}],
  "quantityTips": [{{"item": "Zutat", "tip": "Hinweis"}}],
  "generalTips": ["Tipp"]
}}"""


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned)
        cleaned = _FENCE_CLOSE.sub("", cleaned)
    return cleaned.strip()


def extract_json(text: str) -> Any:
    """Parse model output as JSON after removing Markdown code fences.

    Raises:
        AIResponseError: output is not valid JSON; the raw text is in ``details["raw"]``
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except (TypeError, ValueError) as e:
        logger.warning("Model returned invalid JSON: %s", e)
        raise AIResponseError(
            "AI response was not valid JSON", details={"raw": text, "error": str(e)}
        )


def _require_ai():
    if not gemini_adapter.is_configured():
        raise AIUnavailableError()


def _generate(prompt: str, action: str) -> str:
    try:
        return gemini_adapter.generate_text(prompt)
    except Exception as e:
        logger.exception("AI call for %s failed", action)
        raise AIResponseError(f"Failed to {action}: {e}", code="AI_REQUEST_FAILED")


def _normalize_ingredients(items: Any) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        return []
    out = []
    for item in items:
        if not isinstance(item, dict):
            continue
        ing = dict(item)
        for key in ("amount", "unit"):
            value = ing.get(key)
            ing[key] = "" if value is None else str(value)
        ing["category"] = IngredientCategory.normalize(ing.get("category"))
        out.append(ing)
    return out


def _normalize_recipe(recipe: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(recipe)
    out["ingredients"] = _normalize_ingredients(recipe.get("ingredients"))
    return out


class AIService:
    @staticmethod
    def generate_recipes(
        ingredients: List[str], preferences: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Three recipe suggestions for the given ingredients."""
        _require_ai()
        names = [i.strip() for i in ingredients or [] if i and i.strip()]
        if not names:
            raise ServiceValidationError("Please provide at least one ingredient")

        preferences = preferences or {}
        lines = []
        if preferences.get("dietary"):
            lines.append(f"Ernährungspräferenzen: {preferences['dietary']}")
        if preferences.get("cooking_time"):
            lines.append(f"Maximale Kochzeit: {preferences['cooking_time']} Minuten")
        if preferences.get("difficulty"):
            lines.append(f"Schwierigkeitsgrad: {preferences['difficulty']}")

        prompt = GENERATE_RECIPES_PROMPT.format(
            ingredients=", ".join(names),
            preferences="\n".join(lines),
            categories=CATEGORY_LIST,
        )
        data = extract_json(_generate(prompt, "generate recipes"))
        if isinstance(data, dict) and isinstance(data.get("recipes"), list):
            data = data["recipes"]
        if not isinstance(data, list):
            raise AIResponseError(
                "AI response did not contain a recipe list", details={"raw": data}
            )
        recipes = [_normalize_recipe(r) for r in data if isinstance(r, dict)]
        logger.info("Generated %d recipes from %d ingredients", len(recipes), len(names))
        return {"recipes": recipes}

    @staticmethod
    def parse_recipe(
        input_text: Optional[str], input_type: Optional[ParseInputType] = None
    ) -> Dict[str, Any]:
        """Structure a free-text recipe or the text of an allowlisted recipe page."""
        _require_ai()
        content = (input_text or "").strip()
        if not content:
            raise ServiceValidationError("Please provide recipe text or a URL")

        if input_type is None:
            input_type = ParseInputType.URL if recipe_fetcher.is_url(content) else ParseInputType.TEXT

        if input_type == ParseInputType.URL:
            page_text = recipe_fetcher.fetch_page_text(content)
            prompt = PARSE_RECIPE_PROMPT.format(
                source=f"Text der Webseite {content}",
                content=page_text,
                categories=CATEGORY_LIST,
            )
        else:
            prompt = PARSE_RECIPE_PROMPT.format(
                source="Rezepttext", content=content, categories=CATEGORY_LIST
            )

        data = extract_json(_generate(prompt, "parse recipe"))
        if isinstance(data, list) and data and isinstance(data[0], dict):
            data = data[0]
        if not isinstance(data, dict):
            raise AIResponseError(
                "AI response did not contain a recipe", details={"raw": data}
            )
        return {"recipe": _normalize_recipe(data), "source": "ai-parsed"}

    @staticmethod
    def scale_portions(
        ingredients: List[Dict[str, Any]],
        original_servings: Optional[int],
        new_servings: Optional[int],
    ) -> Dict[str, Any]:
        _require_ai()
        if not ingredients or not original_servings or not new_servings:
            raise ServiceValidationError(
                "ingredients, originalServings and newServings are required"
            )
        if original_servings <= 0 or new_servings <= 0:
            raise ServiceValidationError("Servings must be greater than zero")

        prompt = SCALE_PORTIONS_PROMPT.format(
            original=original_servings,
            new=new_servings,
            ingredients=json.dumps(ingredients, ensure_ascii=False, indent=2),
        )
        data = extract_json(_generate(prompt, "scale portions"))
        if isinstance(data, dict):
            data = data.get("ingredients")
        if not isinstance(data, list):
            raise AIResponseError(
                "AI response did not contain an ingredient list", details={"raw": data}
            )
        return {"ingredients": _normalize_ingredients(data)}

    @staticmethod
    def categorize_ingredient(name: Optional[str]) -> Dict[str, str]:
        """
        Shopping category for one ingredient.

        Without an API key the keyword table answers (``rule-based``); a failed
        call or an unknown answer also falls back to it (``rule-based-fallback``).
        """
        ingredient = (name or "").strip()
        if not ingredient:
            raise ServiceValidationError("ingredientName is required")

        if not gemini_adapter.is_configured():
            return {
                "category": categorize_ingredient_rule_based(ingredient),
                "source": "rule-based",
            }

        prompt = CATEGORIZE_PROMPT.format(name=ingredient, categories=CATEGORY_LIST)
        try:
            answer = strip_code_fences(gemini_adapter.generate_text(prompt))
        except Exception as e:
            logger.warning("AI categorization of %r failed: %s", ingredient, e)
            answer = ""

        category = answer.strip().strip("\"'`.").strip()
        if category in IngredientCategory.values():
            return {"category": category, "source": "ai"}

        if answer:
            logger.info("AI answered unknown category %r for %r", answer, ingredient)
        return {
            "category": categorize_ingredient_rule_based(ingredient),
            "source": "rule-based-fallback",
        }

    @staticmethod
    def optimize_shopping_list(
        shopping_list: List[Dict[str, Any]],
        budget: Optional[float] = None,
        preferences: Optional[Dict[str, Any]] = None,
        substitutions: Optional[List[Dict[str, Any]]] = None,
        month: str = "",
    ) -> Dict[str, Any]:
        _require_ai()
        if not shopping_list:
            raise ServiceValidationError("Shopping list is empty")

        preferences = preferences or {}
        pref_lines = []
        if preferences.get("prioritize_seasonal"):
            pref_lines.append("- Saisonale Produkte bevorzugen")
        if preferences.get("prioritize_organic"):
            pref_lines.append("- Bio-Produkte bevorzugen")
        if preferences.get("avoid_brands"):
            pref_lines.append("- Markenprodukte vermeiden, Eigenmarken vorschlagen")

        sub_lines = [
            f"- {s['original_ingredient']} -> {s['substitute_ingredient']}"
            + (f" ({s['reason']})" if s.get("reason") else "")
            for s in substitutions or []
        ]

        prompt = OPTIMIZE_PROMPT.format(
            shopping_list=json.dumps(shopping_list, ensure_ascii=False, indent=2),
            budget=f"Budget: {budget:.2f} EUR" if budget is not None else "",
            preferences=("Präferenzen:\n" + "\n".join(pref_lines)) if pref_lines else "",
            substitutions=(
                "Bekannte Ersatzprodukte des Haushalts:\n" + "\n".join(sub_lines)
            )
            if sub_lines
            else "",
            month=month,
        )
        data = extract_json(_generate(prompt, "optimize shopping list"))
        if not isinstance(data, dict):
            raise AIResponseError(
                "AI response did not contain an optimization", details={"raw": data}
            )
        return data
