"""
Shared test fixtures and utilities for the FoodPlanner test suite.

Tests run against an in-memory SQLite database that is wired into the app by
overriding ``get_db_session``. The Gemini adapter is never called for real:
``fake_gemini`` replaces it with canned answers.
"""

import uuid
from datetime import date, timedelta
from types import SimpleNamespace
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from adapters import gemini_adapter
from domain.models import Base, get_db_session
from main import app

# One shared connection so every session sees the same in-memory database
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)
TestingSessionLocal = sessionmaker(bind=test_engine, future=True, expire_on_commit=False)

# Fixed Monday used by week plan tests (ISO week 2024-W03)
MONDAY = date(2024, 1, 15)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Fresh schema and session per test.

    The same session serves the API requests made through ``client``, so a
    test can inspect rows directly after calling an endpoint. Call
    ``db_session.expire_all()`` before such checks when the database changed
    rows behind the session's back (ON DELETE actions).
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    def _override():
        # each request sees the database, not what the session cached earlier
        session.expire_all()
        yield session

    app.dependency_overrides[get_db_session] = _override
    try:
        yield session
    finally:
        app.dependency_overrides.pop(get_db_session, None)
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session) -> TestClient:
    return TestClient(app)


@pytest.fixture
def fake_gemini(monkeypatch):
    """
    Pretend Gemini is configured.

    Append strings (or exceptions to raise) to ``responses``; prompts sent are
    collected in ``prompts``.
    """
    fake = SimpleNamespace(responses=[], prompts=[])

    def generate_text(prompt: str) -> str:
        fake.prompts.append(prompt)
        answer = fake.responses.pop(0) if fake.responses else ""
        if isinstance(answer, Exception):
            raise answer
        return answer

    monkeypatch.setattr(gemini_adapter, "is_configured", lambda: True)
    monkeypatch.setattr(gemini_adapter, "generate_text", generate_text)
    return fake


@pytest.fixture
def no_gemini(monkeypatch):
    monkeypatch.setattr(gemini_adapter, "is_configured", lambda: False)


def make_recipe_payload(name="Spaghetti Bolognese", recipe_id=None, **overrides):
    """Recipe body as the client sends it."""
    payload = {
        "name": name,
        "category": "Hauptgericht",
        "servings": 4,
        "instructions": "Sauce kochen. Nudeln kochen. Mischen.",
        "ingredients": [
            {"name": "Spaghetti", "amount": "500", "unit": "g", "category": "Trockenwaren"},
            {"name": "Hackfleisch", "amount": "400", "unit": "g", "category": "Fleisch & Fisch"},
            {"name": "Tomaten", "amount": "2", "unit": "Dose", "category": "Obst & Gemüse"},
        ],
        "tags": ["italienisch", "schnell"],
    }
    if recipe_id:
        payload["id"] = recipe_id
    payload.update(overrides)
    return payload


def create_recipe(client, name="Spaghetti Bolognese", **overrides) -> str:
    r = client.post("/recipes", json=make_recipe_payload(name, **overrides))
    assert r.status_code == 201, r.text
    return r.json()["id"]


def make_week_payload(monday: date = MONDAY, meals_by_day=None):
    """
    Seven-day week plan body. ``meals_by_day`` maps a day index to a
    ``{meal_type: (recipe_id, recipe_name)}`` dict.
    """
    meals_by_day = meals_by_day or {}
    days = []
    for index in range(7):
        day = monday + timedelta(days=index)
        meals = {}
        for meal_type, (recipe_id, recipe_name) in meals_by_day.get(index, {}).items():
            meals[meal_type] = {
                "id": str(uuid.uuid4()),
                "recipeId": recipe_id,
                "recipeName": recipe_name,
                "mealType": meal_type,
            }
        days.append({"date": day.isoformat(), "dayName": "", "meals": meals})
    return {"id": "ignored", "startDate": monday.isoformat(), "days": days}
