"""
Storage adapter - wraps the FoodPlanner HTTP API.

``get_*`` calls return ``None`` for a missing resource; every other failed
request raises :class:`StorageError`.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx

from domain.week import DateLike, to_date

logger = logging.getLogger("foodplanner.client.storage")

DEFAULT_BASE_URL = "http://localhost:3000"


class StorageError(Exception):
    """A request to the API failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    @classmethod
    def from_response(cls, response: httpx.Response) -> "StorageError":
        code = None
        details = None
        message = f"HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                code = error.get("code")
                message = str(error.get("message") or message)
                details = error.get("details")
            elif error:
                message = str(error)
        return cls(message, status_code=response.status_code, code=code, details=details)


class PlannerAPIClient:
    """
    CRUD contract of the planner backend.

    Pass an existing ``httpx.Client`` (or a FastAPI ``TestClient``) as
    ``client``; otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self):
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise StorageError(f"Request to {path} failed: {e}") from e
        if response.status_code >= 400:
            error = StorageError.from_response(response)
            logger.warning("%s %s -> %d: %s", method, path, response.status_code, error.message)
            raise error
        if not response.content:
            return None
        return response.json()

    def _get_optional(self, path: str, **kwargs) -> Any:
        try:
            return self._request("GET", path, **kwargs)
        except StorageError as e:
            if e.status_code == 404:
                return None
            raise

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    def list_recipes(self, q: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"q": q} if q else None
        return self._request("GET", "/recipes", params=params)

    def get_recipe(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        return self._get_optional(f"/recipes/{recipe_id}")

    def add_recipe(self, recipe: Dict[str, Any]) -> str:
        """Create a recipe and return its id."""
        return self._request("POST", "/recipes", json=recipe)["id"]

    def update_recipe(self, recipe_id: str, recipe: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/recipes/{recipe_id}", json=recipe)

    def delete_recipe(self, recipe_id: str) -> None:
        self._request("DELETE", f"/recipes/{recipe_id}")

    def duplicate_recipe(self, recipe_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/recipes/{recipe_id}/duplicate")

    # ------------------------------------------------------------------
    # Week plans
    # ------------------------------------------------------------------

    def get_week_plan(self) -> Optional[Dict[str, Any]]:
        return self._request("GET", "/weekplan")

    def get_week_plan_by_date(self, day: DateLike) -> Optional[Dict[str, Any]]:
        return self._get_optional(f"/weekplan/by-date/{to_date(day).isoformat()}")

    def save_week_plan(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        """Save a week plan and return it as stored by the server."""
        return self._request("POST", "/weekplan", json=plan)["weekPlan"]

    def clear_week_plan(self, day: Optional[DateLike] = None) -> None:
        params = {"date": to_date(day).isoformat()} if day is not None else None
        self._request("DELETE", "/weekplan", params=params)

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def list_templates(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/weekplan/templates")

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        return self._get_optional(f"/weekplan/templates/{template_id}")

    def save_template(
        self,
        name: str,
        template_data: Any,
        description: str = "",
        template_id: Optional[str] = None,
    ) -> str:
        body = {"name": name, "description": description, "templateData": template_data}
        if template_id:
            body["id"] = template_id
        return self._request("POST", "/weekplan/templates", json=body)["id"]

    def update_template(
        self, template_id: str, name: str, template_data: Any, description: str = ""
    ) -> Dict[str, Any]:
        body = {"name": name, "description": description, "templateData": template_data}
        return self._request("PUT", f"/weekplan/templates/{template_id}", json=body)

    def delete_template(self, template_id: str) -> None:
        self._request("DELETE", f"/weekplan/templates/{template_id}")

    def apply_template(self, template_id: str, day: DateLike) -> Dict[str, Any]:
        body = {"date": to_date(day).isoformat()}
        return self._request("POST", f"/weekplan/templates/{template_id}/apply", json=body)

    # ------------------------------------------------------------------
    # Manual shopping items
    # ------------------------------------------------------------------

    def list_manual_items(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/shopping/manual")

    def add_manual_item(self, item: Dict[str, Any]) -> str:
        return self._request("POST", "/shopping/manual", json=item)["id"]

    def delete_manual_item(self, item_id: str) -> None:
        self._request("DELETE", f"/shopping/manual/{item_id}")

    def clear_manual_items(self) -> None:
        self._request("DELETE", "/shopping/manual")

    # ------------------------------------------------------------------
    # AI
    # ------------------------------------------------------------------

    def generate_recipes(
        self, ingredients: List[str], preferences: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        body: Dict[str, Any] = {"ingredients": ingredients}
        if preferences:
            body["preferences"] = preferences
        return self._request("POST", "/ai/generate-recipes", json=body)["recipes"]

    def parse_recipe(self, text_or_url: str, input_type: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"input": text_or_url}
        if input_type:
            body["type"] = input_type
        return self._request("POST", "/ai/parse-recipe", json=body)["recipe"]

    def scale_portions(
        self, ingredients: List[Dict[str, Any]], original_servings: int, new_servings: int
    ) -> List[Dict[str, Any]]:
        body = {
            "ingredients": ingredients,
            "originalServings": original_servings,
            "newServings": new_servings,
        }
        return self._request("POST", "/ai/scale-portions", json=body)["ingredients"]

    def categorize_ingredient(self, name: str) -> Dict[str, str]:
        return self._request(
            "POST", "/ai/categorize-ingredient", json={"ingredientName": name}
        )

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
