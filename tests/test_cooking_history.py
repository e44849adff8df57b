from datetime import datetime, timedelta

from test_fixtures import client, create_recipe, db_session
from domain.models import CookingHistory
from services.cooking_service import CookingService


def test_mark_recipe_as_cooked(client):
    recipe_id = create_recipe(client, "Risotto")

    r = client.post("/cooking-history", json={"recipeId": recipe_id, "notes": "lecker"})

    assert r.status_code == 201
    entry = r.json()
    assert entry["recipe_name"] == "Risotto"
    assert entry["recipe_category"] == "Hauptgericht"
    # servings default to the recipe's
    assert entry["servings"] == 4
    assert entry["notes"] == "lecker"


def test_mark_cooked_requires_recipe(client):
    assert client.post("/cooking-history", json={}).status_code == 400
    assert client.post("/cooking-history", json={"recipeId": "nope"}).status_code == 404


def test_history_pagination(client):
    recipe_id = create_recipe(client, "Risotto")
    for _ in range(3):
        client.post("/cooking-history", json={"recipeId": recipe_id})

    page = client.get("/cooking-history", params={"limit": 2, "offset": 0}).json()

    assert page["total"] == 3
    assert page["limit"] == 2
    assert len(page["entries"]) == 2


def test_history_survives_recipe_deletion(client):
    recipe_id = create_recipe(client, "Risotto")
    client.post("/cooking-history", json={"recipeId": recipe_id})

    client.delete(f"/recipes/{recipe_id}")

    entries = client.get("/cooking-history").json()["entries"]
    assert entries[0]["recipe_id"] is None
    assert entries[0]["recipe_name"] == "Risotto"
    assert entries[0]["recipe_category"] is None


def test_history_for_recipe_and_stats(client):
    risotto = create_recipe(client, "Risotto")
    curry = create_recipe(client, "Curry")
    client.post("/cooking-history", json={"recipeId": risotto})
    client.post("/cooking-history", json={"recipeId": risotto})
    client.post("/cooking-history", json={"recipeId": curry})

    assert len(client.get(f"/cooking-history/recipe/{risotto}").json()) == 2

    stats = client.get("/cooking-history/stats").json()
    assert [(s["recipe_name"], s["times_cooked"]) for s in stats] == [("Risotto", 2), ("Curry", 1)]


def test_not_cooked_recently(client, db_session):
    fresh = create_recipe(client, "Frisch gekocht")
    stale = create_recipe(client, "Lange her")
    never = create_recipe(client, "Nie gekocht")
    now = datetime(2024, 6, 1, 12, 0)
    db_session.add_all(
        [
            CookingHistory(recipe_id=fresh, recipe_name="Frisch gekocht", cooked_at=now - timedelta(days=2)),
            CookingHistory(recipe_id=stale, recipe_name="Lange her", cooked_at=now - timedelta(days=90)),
        ]
    )
    db_session.commit()

    rows = CookingService.not_cooked_recently(db_session, days=30, now=now)

    assert [r["id"] for r in rows] == [never, stale]
    assert rows[0]["times_cooked"] == 0
    assert rows[1]["times_cooked"] == 1


def test_not_cooked_recently_endpoint(client):
    recipe_id = create_recipe(client, "Nie gekocht")

    r = client.get("/cooking-history/not-cooked-recently", params={"days": 14})

    assert r.status_code == 200
    assert [row["id"] for row in r.json()] == [recipe_id]


def test_delete_history_entry(client):
    recipe_id = create_recipe(client, "Risotto")
    entry_id = client.post("/cooking-history", json={"recipeId": recipe_id}).json()["id"]

    assert client.delete(f"/cooking-history/{entry_id}").status_code == 200
    assert client.delete(f"/cooking-history/{entry_id}").status_code == 404
    assert client.get("/cooking-history").json()["total"] == 0
