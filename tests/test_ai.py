"""
AI endpoint tests. Gemini is replaced by ``fake_gemini`` (canned answers) or
``no_gemini`` (no API key); recipe page fetches go through httpx.MockTransport.
"""

import json

import httpx
import pytest

from test_fixtures import client, db_session, fake_gemini, no_gemini
from app.exceptions import AIResponseError, ServiceValidationError
from services import recipe_fetcher
from services.ai_service import extract_json, strip_code_fences

RECIPE = {
    "name": "Tomatensuppe",
    "category": "Suppe",
    "servings": 2,
    "ingredients": [{"name": "Tomaten", "amount": 500, "unit": "g", "category": "Gemüse"}],
    "instructions": "Kochen.",
}


def use_transport(monkeypatch, handler):
    monkeypatch.setattr(
        recipe_fetcher,
        "_build_client",
        lambda: httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=False),
    )


# =============================================================================
# JSON EXTRACTION
# =============================================================================


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
        '  {"a": 1}  ',
    ],
)
def test_extract_json_strips_fences(raw):
    assert extract_json(raw) == {"a": 1}


def test_strip_code_fences_leaves_plain_text():
    assert strip_code_fences("Milchprodukte\n") == "Milchprodukte"


def test_extract_json_keeps_raw_text_on_error():
    with pytest.raises(AIResponseError) as exc_info:
        extract_json("Hier ist dein Rezept: {kaputt")

    assert exc_info.value.details["raw"] == "Hier ist dein Rezept: {kaputt"
    assert exc_info.value.http_status == 500


# =============================================================================
# WITHOUT API KEY
# =============================================================================


@pytest.mark.parametrize(
    "path,body",
    [
        ("/ai/generate-recipes", {"ingredients": ["Tomaten"]}),
        ("/ai/parse-recipe", {"input": "Tomaten kochen"}),
        (
            "/ai/scale-portions",
            {"ingredients": [{"name": "Reis"}], "originalServings": 2, "newServings": 4},
        ),
    ],
)
def test_ai_routes_without_key_are_503(client, no_gemini, path, body):
    r = client.post(path, json=body)

    assert r.status_code == 503
    assert "GEMINI_API_KEY" in r.json()["error"]["message"]


def test_categorize_without_key_is_rule_based(client, no_gemini):
    r = client.post("/ai/categorize-ingredient", json={"ingredientName": "Parmesan"})

    assert r.status_code == 200
    assert r.json() == {"category": "Milchprodukte", "source": "rule-based"}


def test_categorize_requires_name(client, no_gemini):
    assert client.post("/ai/categorize-ingredient", json={"ingredientName": " "}).status_code == 400


# =============================================================================
# WITH FAKE MODEL
# =============================================================================


def test_generate_recipes(client, fake_gemini):
    fake_gemini.responses.append("```json\n" + json.dumps([RECIPE]) + "\n```")

    r = client.post(
        "/ai/generate-recipes",
        json={"ingredients": ["Tomaten", " "], "preferences": {"dietary": "vegetarisch", "cookingTime": 20}},
    )

    assert r.status_code == 200
    recipes = r.json()["recipes"]
    assert recipes[0]["name"] == "Tomatensuppe"
    ingredient = recipes[0]["ingredients"][0]
    assert ingredient["amount"] == "500"
    assert ingredient["category"] == "Sonstiges"
    prompt = fake_gemini.prompts[0]
    assert "Verfügbare Zutaten: Tomaten" in prompt
    assert "vegetarisch" in prompt
    assert "20 Minuten" in prompt


def test_generate_recipes_needs_ingredients(client, fake_gemini):
    r = client.post("/ai/generate-recipes", json={"ingredients": []})
    assert r.status_code == 400
    assert fake_gemini.prompts == []


def test_malformed_model_output_is_500_with_raw_text(client, fake_gemini):
    fake_gemini.responses.append("Leider kann ich das nicht.")

    r = client.post("/ai/generate-recipes", json={"ingredients": ["Reis"]})

    assert r.status_code == 500
    error = r.json()["error"]
    assert error["code"] == "AI_RESPONSE_ERROR"
    assert error["details"]["raw"] == "Leider kann ich das nicht."


def test_model_failure_is_500(client, fake_gemini):
    fake_gemini.responses.append(RuntimeError("quota exceeded"))

    r = client.post("/ai/generate-recipes", json={"ingredients": ["Reis"]})

    assert r.status_code == 500
    assert r.json()["error"]["code"] == "AI_REQUEST_FAILED"


def test_parse_recipe_text(client, fake_gemini):
    fake_gemini.responses.append(json.dumps(RECIPE))

    r = client.post("/ai/parse-recipe", json={"input": "500 g Tomaten kochen", "type": "text"})

    assert r.status_code == 200
    assert r.json()["source"] == "ai-parsed"
    assert r.json()["recipe"]["name"] == "Tomatensuppe"
    assert "500 g Tomaten kochen" in fake_gemini.prompts[0]


def test_parse_recipe_requires_input(client, fake_gemini):
    assert client.post("/ai/parse-recipe", json={"input": ""}).status_code == 400


def test_scale_portions(client, fake_gemini):
    fake_gemini.responses.append(json.dumps([{"name": "Reis", "amount": 400, "unit": "g"}]))

    r = client.post(
        "/ai/scale-portions",
        json={
            "ingredients": [{"name": "Reis", "amount": "200", "unit": "g"}],
            "originalServings": 2,
            "newServings": 4,
        },
    )

    assert r.status_code == 200
    assert r.json()["ingredients"][0]["amount"] == "400"


def test_scale_portions_rejects_zero_servings(client, fake_gemini):
    r = client.post(
        "/ai/scale-portions",
        json={"ingredients": [{"name": "Reis"}], "originalServings": 2, "newServings": 0},
    )
    assert r.status_code == 400


@pytest.mark.parametrize(
    "answer,expected",
    [
        ("Milchprodukte", {"category": "Milchprodukte", "source": "ai"}),
        ('"Tiefkühl".', {"category": "Tiefkühl", "source": "ai"}),
        ("Käse", {"category": "Milchprodukte", "source": "rule-based-fallback"}),
        (RuntimeError("timeout"), {"category": "Milchprodukte", "source": "rule-based-fallback"}),
    ],
)
def test_categorize_with_model(client, fake_gemini, answer, expected):
    fake_gemini.responses.append(answer)

    r = client.post("/ai/categorize-ingredient", json={"ingredientName": "Parmesan"})

    assert r.json() == expected


# =============================================================================
# RECIPE URL IMPORT
# =============================================================================


RECIPE_PAGE = """
<html><head><title>Tomatensuppe</title><style>body {color: red}</style>
<script>var tracking = true;</script></head>
<body><h1>Tomatensuppe</h1><p>500 g   Tomaten</p><p>Kochen.</p></body></html>
"""


def test_validate_recipe_url():
    assert recipe_fetcher.validate_recipe_url("https://www.chefkoch.de/rezepte/1") == "https://www.chefkoch.de/rezepte/1"
    for bad in (
        "ftp://chefkoch.de/x",
        "https://evil.example.com/x",
        "https://chefkoch.de.evil.com/x",
        "https://user:pw@chefkoch.de/x",
    ):
        with pytest.raises(ServiceValidationError):
            recipe_fetcher.validate_recipe_url(bad)


def test_html_to_text_drops_scripts_and_styles():
    text = recipe_fetcher.html_to_text(RECIPE_PAGE, 1000)

    assert "tracking" not in text
    assert "color" not in text
    assert "500 g Tomaten" in text


def test_parse_recipe_url_fetches_page(client, fake_gemini, monkeypatch):
    def handler(request):
        assert request.url.host == "www.chefkoch.de"
        return httpx.Response(200, html=RECIPE_PAGE)

    use_transport(monkeypatch, handler)
    fake_gemini.responses.append(json.dumps(RECIPE))

    r = client.post("/ai/parse-recipe", json={"input": "https://www.chefkoch.de/rezepte/123"})

    assert r.status_code == 200
    assert "500 g Tomaten" in fake_gemini.prompts[0]
    assert "tracking" not in fake_gemini.prompts[0]


def test_parse_recipe_url_not_allowlisted(client, fake_gemini):
    r = client.post("/ai/parse-recipe", json={"input": "https://example.com/rezept"})

    assert r.status_code == 400
    assert "allowed_domains" in r.json()["error"]["details"]
    assert fake_gemini.prompts == []


def test_redirect_to_foreign_host_is_blocked(client, fake_gemini, monkeypatch):
    def handler(request):
        return httpx.Response(302, headers={"location": "http://169.254.169.254/latest/meta-data"})

    use_transport(monkeypatch, handler)

    r = client.post("/ai/parse-recipe", json={"input": "https://www.chefkoch.de/rezepte/1"})

    assert r.status_code == 400
    assert fake_gemini.prompts == []


def test_non_html_page_is_rejected(monkeypatch):
    use_transport(
        monkeypatch,
        lambda request: httpx.Response(200, content=b"%PDF", headers={"content-type": "application/pdf"}),
    )

    with pytest.raises(ServiceValidationError):
        recipe_fetcher.fetch_page_text("https://www.chefkoch.de/rezepte/1")
