"""
Shopping endpoint tests: manual items, the derived shopping list, weekly
budgets, substitution preferences and AI optimization.
"""

import json
from datetime import timedelta

from test_fixtures import (
    MONDAY,
    client,
    create_recipe,
    db_session,
    fake_gemini,
    make_week_payload,
    no_gemini,
)


# =============================================================================
# MANUAL ITEMS
# =============================================================================


def test_manual_item_requires_name_amount_and_unit(client):
    r = client.post("/shopping/manual", json={"name": "Milch", "amount": "1"})

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Name, amount and unit are required"


def test_manual_item_lifecycle(client):
    r = client.post(
        "/shopping/manual",
        json={"id": "m1", "name": "Milch", "amount": 1, "unit": "l", "category": "Milchprodukte"},
    )
    assert r.status_code == 201
    assert r.json()["id"] == "m1"

    items = client.get("/shopping/manual").json()
    assert len(items) == 1
    assert items[0]["amount"] == "1"
    assert items[0]["category"] == "Milchprodukte"

    assert client.post(
        "/shopping/manual", json={"id": "m1", "name": "Brot", "amount": "1", "unit": "Stück"}
    ).status_code == 409

    assert client.delete("/shopping/manual/m1").status_code == 200
    assert client.delete("/shopping/manual/m1").status_code == 404
    assert client.get("/shopping/manual").json() == []


def test_manual_item_without_category_is_sonstiges(client):
    client.post("/shopping/manual", json={"name": "Alufolie", "amount": "1", "unit": "Rolle"})

    assert client.get("/shopping/manual").json()[0]["category"] == "Sonstiges"


def test_clear_manual_items(client):
    for name in ("Brot", "Kaffee"):
        client.post("/shopping/manual", json={"name": name, "amount": "1", "unit": "Stück"})

    assert client.delete("/shopping/manual").status_code == 200
    assert client.get("/shopping/manual").json() == []


# =============================================================================
# SHOPPING LIST
# =============================================================================


def test_shopping_list_aggregates_planned_recipes(client):
    bolognese = create_recipe(client, "Bolognese")
    chili = create_recipe(
        client,
        "Chili",
        ingredients=[
            {"name": "Hackfleisch", "amount": "500", "unit": "g", "category": "Fleisch & Fisch"},
            {"name": "Kidneybohnen", "amount": "1", "unit": "Dose", "category": "Trockenwaren"},
        ],
    )
    week = make_week_payload(
        meals_by_day={
            0: {"dinner": (bolognese, "Bolognese")},
            2: {"lunch": (chili, "Chili"), "dinner": (bolognese, "Bolognese")},
        }
    )
    client.post("/weekplan", json=week)
    client.post("/shopping/manual", json={"id": "m1", "name": "Bier", "amount": "6", "unit": "Flaschen"})

    r = client.get("/shopping/list", params={"date": MONDAY.isoformat()})

    assert r.status_code == 200
    body = r.json()
    assert body["weekId"] == "2024-W03"
    items = {(i["name"], i["unit"]): i for i in body["items"]}
    assert items[("Hackfleisch", "g")]["amount"] == "1300"
    assert items[("Hackfleisch", "g")]["recipeNames"] == ["Bolognese", "Chili"]
    assert items[("Spaghetti", "g")]["amount"] == "1000"
    assert items[("Bier", "Flaschen")]["isManual"] is True
    assert list(body["byCategory"]) == [
        "Obst & Gemüse",
        "Fleisch & Fisch",
        "Trockenwaren",
        "Sonstiges",
    ]


def test_shopping_list_for_unplanned_week_has_manual_items_only(client):
    client.post("/shopping/manual", json={"name": "Brot", "amount": "1", "unit": "Stück"})

    body = client.get("/shopping/list", params={"date": "2030-01-01"}).json()

    assert body["weekId"] is None
    assert [i["name"] for i in body["items"]] == ["Brot"]


def test_shopping_list_without_date_uses_latest_week(client):
    recipe_id = create_recipe(client, "Bolognese")
    client.post(
        "/weekplan",
        json=make_week_payload(MONDAY + timedelta(weeks=1), {3: {"lunch": (recipe_id, "Bolognese")}}),
    )

    body = client.get("/shopping/list").json()

    assert body["weekId"] == "2024-W04"
    assert len(body["items"]) == 3


# =============================================================================
# BUDGETS
# =============================================================================


def test_budget_upsert(client):
    assert client.get(f"/shopping/budget/{MONDAY.isoformat()}").json() is None

    r = client.post(
        "/shopping/budget", json={"weekStart": "2024-01-17", "budgetAmount": 80, "currency": "eur"}
    )
    assert r.status_code == 200
    assert r.json()["week_start"] == MONDAY.isoformat()
    assert r.json()["budget_amount"] == 80.0
    assert r.json()["currency"] == "EUR"

    r = client.post("/shopping/budget", json={"weekStart": MONDAY.isoformat(), "budgetAmount": 65.5})
    first_id = r.json()["id"]
    assert r.json()["budget_amount"] == 65.5

    stored = client.get(f"/shopping/budget/{MONDAY.isoformat()}").json()
    assert stored["id"] == first_id
    assert stored["budget_amount"] == 65.5


def test_negative_budget_is_rejected(client):
    r = client.post("/shopping/budget", json={"weekStart": MONDAY.isoformat(), "budgetAmount": -1})
    assert r.status_code == 400


# =============================================================================
# SUBSTITUTIONS
# =============================================================================


def test_substitution_add_list_and_deactivate(client):
    r = client.post(
        "/shopping/substitutions",
        json={
            "originalIngredient": "Parmesan",
            "substituteIngredient": "Grana Padano",
            "reason": "günstiger",
            "savingsPercent": 30,
        },
    )
    assert r.status_code == 201
    sub = r.json()
    assert sub["is_active"] is True

    assert [s["id"] for s in client.get("/shopping/substitutions").json()] == [sub["id"]]

    r = client.delete(f"/shopping/substitutions/{sub['id']}")
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    assert client.get("/shopping/substitutions").json() == []


def test_deactivate_missing_substitution_is_404(client):
    assert client.delete("/shopping/substitutions/999").status_code == 404


# =============================================================================
# OPTIMIZATION
# =============================================================================


SHOPPING_LIST = [{"name": "Parmesan", "amount": "200", "unit": "g", "category": "Milchprodukte"}]


def test_optimize_without_ai_key_is_503(client, no_gemini):
    r = client.post("/shopping/optimize", json={"shoppingList": SHOPPING_LIST})

    assert r.status_code == 503
    assert r.json()["error"]["code"] == "AI_NOT_CONFIGURED"


def test_optimize_passes_budget_and_substitutions(client, fake_gemini):
    client.post(
        "/shopping/substitutions",
        json={"originalIngredient": "Parmesan", "substituteIngredient": "Grana Padano"},
    )
    answer = {"optimizedItems": [], "totalEstimatedSavings": "3 EUR", "generalTips": ["Angebote nutzen"]}
    fake_gemini.responses.append("```json\n" + json.dumps(answer) + "\n```")

    r = client.post(
        "/shopping/optimize",
        json={"shoppingList": SHOPPING_LIST, "budget": 40, "preferences": {"prioritizeSeasonal": True}},
    )

    assert r.status_code == 200
    assert r.json() == answer
    prompt = fake_gemini.prompts[0]
    assert "Parmesan -> Grana Padano" in prompt
    assert "40.00 EUR" in prompt
    assert "Saisonale Produkte bevorzugen" in prompt


def test_optimize_empty_list_is_400(client, fake_gemini):
    r = client.post("/shopping/optimize", json={"shoppingList": []})
    assert r.status_code == 400
