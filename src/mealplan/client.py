"""Async HTTP client for the meal-planning API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from mealplan.config import get_settings
from mealplan.errors import TransientWriteFailure
from mealplan.models.catalog import Meal, Recipe
from mealplan.models.plan import Plan
from mealplan.models.shopping import ShoppingList, ShoppingListItem

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class MealPlanClient:
    """Network adapter used by the shopping-list view-model and form sessions.

    Reads raise the underlying ``httpx`` error. Writes turn transport errors,
    non-2xx responses and unreadable bodies into :class:`TransientWriteFailure`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token: Optional[str] = None,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        name: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token = token if token is not None else settings.api_token
        self._user_id = user_id
        self._email = email
        self._name = name
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=timeout if timeout is not None else settings.client_timeout,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        if self._user_id:
            headers["X-User-ID"] = self._user_id
        if self._email:
            headers["X-User-Email"] = self._email
        if self._name:
            headers["X-User-Name"] = self._name
        return headers

    async def __aenter__(self) -> "MealPlanClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def _write(
        self, method: str, path: str, payload: Dict[str, Any], model: Type[ModelT]
    ) -> ModelT:
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransientWriteFailure(f"Could not reach the server: {exc}") from exc
        if response.is_error:
            detail = _error_detail(response)
            logger.warning("%s %s returned %s: %s", method, path, response.status_code, detail)
            raise TransientWriteFailure(
                f"Save failed ({response.status_code}): {detail}",
                status_code=response.status_code,
            )
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("%s %s returned an unreadable body: %s", method, path, exc)
            raise TransientWriteFailure(
                f"Save returned an unexpected response ({response.status_code})",
                status_code=response.status_code,
            ) from exc

    async def fetch_shopping_list(self, plan_id: Optional[int] = None) -> ShoppingList:
        params = {"plan_id": plan_id} if plan_id is not None else None
        return ShoppingList.model_validate(await self._get("/shopping-list", params=params))

    async def update_shopping_list(
        self, plan_id: int, ingredients: Sequence[ShoppingListItem]
    ) -> ShoppingList:
        payload = {
            "plan": {"id": plan_id},
            "ingredients": [item.model_dump() for item in ingredients],
        }
        return await self._write("PUT", "/shopping-list", payload, ShoppingList)

    async def fetch_plan(self, plan_id: int) -> Plan:
        return Plan.model_validate(await self._get(f"/plans/{plan_id}"))

    async def list_tags(self) -> List[str]:
        return list(await self._get("/tags"))

    async def create_recipe(self, payload: Dict[str, Any]) -> Recipe:
        return await self._write("POST", "/recipes", payload, Recipe)

    async def update_recipe(self, recipe_id: int, payload: Dict[str, Any]) -> Recipe:
        return await self._write("PUT", f"/recipes/{recipe_id}", payload, Recipe)

    async def create_meal(self, payload: Dict[str, Any]) -> Meal:
        return await self._write("POST", "/meals", payload, Meal)

    async def update_meal(self, meal_id: int, payload: Dict[str, Any]) -> Meal:
        return await self._write("PUT", f"/meals/{meal_id}", payload, Meal)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


__all__ = ["MealPlanClient"]
