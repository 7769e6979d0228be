"""ASGI application for the meal planner."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from datetime import date
from time import perf_counter
from typing import Any, Optional, Union
from uuid import uuid4

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from mealplan import __version__, metrics
from mealplan.config import Settings, get_settings
from mealplan.db.households import purge_expired_join_codes
from mealplan.images import resolve_image
from mealplan.logging_utils import configure_logging as configure_app_logging
from mealplan.models.catalog import IngredientLine, Meal, MealRecipeRef, Recipe, StepLine
from mealplan.models.household import Household, Pantry
from mealplan.models.plan import Plan, PlanIngredient
from mealplan.models.shopping import ShoppingList, ShoppingListUpdate
from mealplan.server import deps

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _http_error(exc: Exception) -> HTTPException:
    """Map repository errors onto HTTP responses."""

    message = str(exc)
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)
    if "not found" in message:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _configure_logging(settings: Settings) -> None:
    secrets = [settings.api_token or ""]
    configure_app_logging(settings.log_level, settings.log_format, secrets)


def _purge_join_codes() -> None:
    removed = purge_expired_join_codes()
    if removed:
        metrics.JOIN_CODES_PURGED.inc(removed)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Meal Planner", version=__version__)

    if settings.join_code_purge_enabled:
        purge_scheduler = AsyncIOScheduler()
        purge_scheduler.add_job(
            _purge_join_codes,
            "interval",
            seconds=settings.join_code_purge_interval,
            max_instances=1,
            coalesce=True,
        )

        @application.on_event("startup")
        async def start_join_code_purge() -> None:
            _purge_join_codes()
            purge_scheduler.start()

        @application.on_event("shutdown")
        async def stop_join_code_purge() -> None:
            purge_scheduler.shutdown(wait=False)

    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("mealplan.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={
                    "request_id": request_id,
                    "household_id": getattr(request.state, "household_id", None),
                },
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        raw_body = await request.body()
        if raw_body:
            decoded = raw_body.decode("utf-8", errors="replace")
            if len(decoded) > 2048:
                decoded = decoded[:2048] + "...(truncated)"
            body_preview = decoded

        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    @application.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    # Recipes

    @application.get(
        "/api/recipes",
        response_model=Union[Recipe, list[Recipe]],
        summary="List recipes or look one up by slug",
    )
    def recipes_list(
        slug: Optional[str] = Query(default=None, min_length=1),
        tag: Optional[str] = Query(default=None, min_length=1),
        provider: deps.RecipeListProvider = Depends(deps.get_recipe_list_provider),
        resolver: deps.RecipeSlugResolver = Depends(deps.get_recipe_slug_resolver),
        fetcher: deps.RecipeFetcher = Depends(deps.get_recipe_fetcher),
    ) -> Union[Recipe, list[Recipe]]:
        if slug:
            recipe_id = resolver(slug)
            recipe = fetcher(recipe_id) if recipe_id is not None else None
            if recipe is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND, detail=f"Recipe {slug} not found"
                )
            return recipe
        return provider(tag)

    @application.get("/api/recipes/{recipe_id}", response_model=Recipe, summary="Get a recipe")
    def recipes_get(
        recipe_id: int,
        fetcher: deps.RecipeFetcher = Depends(deps.get_recipe_fetcher),
    ) -> Recipe:
        recipe = fetcher(recipe_id)
        if recipe is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"Recipe {recipe_id} not found"
            )
        return recipe

    @application.post(
        "/api/recipes",
        response_model=Recipe,
        status_code=status.HTTP_201_CREATED,
        summary="Create a recipe",
    )
    def recipes_create(
        payload: RecipeWriteRequest,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        creator: deps.RecipeCreator = Depends(deps.get_recipe_creator),
    ) -> Recipe:
        data = payload.repository_fields()
        data["tags"] = data["tags"] or []
        try:
            recipe = creator(data)
        except ValueError as exc:
            raise _http_error(exc) from exc
        logger.info("Recipe %s created by %s", recipe.id, user.user_id)
        return recipe

    @application.put("/api/recipes/{recipe_id}", response_model=Recipe, summary="Update a recipe")
    def recipes_update(
        recipe_id: int,
        payload: RecipeWriteRequest,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        updater: deps.RecipeUpdater = Depends(deps.get_recipe_updater),
    ) -> Recipe:
        try:
            return updater(recipe_id, payload.repository_fields())
        except ValueError as exc:
            raise _http_error(exc) from exc

    @application.delete(
        "/api/recipes/{recipe_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete a recipe",
    )
    def recipes_delete(
        recipe_id: int,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        deleter: deps.RecipeDeleter = Depends(deps.get_recipe_deleter),
    ) -> None:
        try:
            deleter(recipe_id)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    # Meals

    @application.get(
        "/api/meals",
        response_model=Union[Meal, list[Meal]],
        summary="List meals or look one up by slug",
    )
    def meals_list(
        slug: Optional[str] = Query(default=None, min_length=1),
        tag: Optional[str] = Query(default=None, min_length=1),
        provider: deps.MealListProvider = Depends(deps.get_meal_list_provider),
        resolver: deps.MealSlugResolver = Depends(deps.get_meal_slug_resolver),
        fetcher: deps.MealFetcher = Depends(deps.get_meal_fetcher),
    ) -> Union[Meal, list[Meal]]:
        if slug:
            meal_id = resolver(slug)
            meal = fetcher(meal_id) if meal_id is not None else None
            if meal is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND, detail=f"Meal {slug} not found"
                )
            return meal
        return provider(tag)

    @application.get("/api/meals/{meal_id}", response_model=Meal, summary="Get a meal")
    def meals_get(
        meal_id: int,
        fetcher: deps.MealFetcher = Depends(deps.get_meal_fetcher),
    ) -> Meal:
        meal = fetcher(meal_id)
        if meal is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"Meal {meal_id} not found"
            )
        return meal

    @application.post(
        "/api/meals",
        response_model=Meal,
        status_code=status.HTTP_201_CREATED,
        summary="Create a meal",
    )
    def meals_create(
        payload: MealWriteRequest,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        creator: deps.MealCreator = Depends(deps.get_meal_creator),
    ) -> Meal:
        data = payload.repository_fields()
        data["tags"] = data["tags"] or []
        try:
            meal = creator(data)
        except ValueError as exc:
            raise _http_error(exc) from exc
        logger.info("Meal %s created by %s", meal.id, user.user_id)
        return meal

    @application.put("/api/meals/{meal_id}", response_model=Meal, summary="Update a meal")
    def meals_update(
        meal_id: int,
        payload: MealWriteRequest,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        updater: deps.MealUpdater = Depends(deps.get_meal_updater),
    ) -> Meal:
        try:
            return updater(meal_id, payload.repository_fields())
        except ValueError as exc:
            raise _http_error(exc) from exc

    @application.delete(
        "/api/meals/{meal_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete a meal",
    )
    def meals_delete(
        meal_id: int,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        deleter: deps.MealDeleter = Depends(deps.get_meal_deleter),
    ) -> None:
        try:
            deleter(meal_id)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    # Plans

    @application.get(
        "/api/plans",
        response_model=Union[Plan, list[Plan]],
        summary="List household plans",
    )
    def plans_list(
        last: Optional[str] = Query(default=None),
        next_: Optional[str] = Query(default=None, alias="next"),
        future: Optional[str] = Query(default=None),
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        provider: deps.PlanListProvider = Depends(deps.get_plan_list_provider),
        last_provider: deps.SinglePlanProvider = Depends(deps.get_last_plan_provider),
        next_provider: deps.SinglePlanProvider = Depends(deps.get_next_plan_provider),
        future_provider: deps.PlanListProvider = Depends(deps.get_future_plans_provider),
    ) -> Union[Plan, list[Plan]]:
        if last or next_:
            plan = last_provider(household_id) if last else next_provider(household_id)
            if plan is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
            return plan
        if future:
            return future_provider(household_id)
        return provider(household_id)

    @application.post(
        "/api/plans",
        response_model=Plan,
        status_code=status.HTTP_201_CREATED,
        summary="Create a plan",
    )
    def plans_create(
        payload: PlanCreateRequest,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        creator: deps.PlanCreator = Depends(deps.get_plan_creator),
    ) -> Plan:
        try:
            return creator(
                household_id,
                {
                    "start_date": payload.start_date,
                    "end_date": payload.end_date,
                    "meal_ids": payload.meals,
                },
            )
        except ValueError as exc:
            raise _http_error(exc) from exc

    @application.get("/api/plans/{plan_id}", response_model=Plan, summary="Get a plan")
    def plans_get(
        plan_id: int,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        fetcher: deps.PlanFetcher = Depends(deps.get_plan_fetcher),
    ) -> Plan:
        try:
            plan = fetcher(plan_id, household_id)
        except PermissionError as exc:
            raise _http_error(exc) from exc
        if plan is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"Plan {plan_id} not found"
            )
        return plan

    @application.put("/api/plans/{plan_id}", response_model=Plan, summary="Update a plan")
    def plans_update(
        plan_id: int,
        payload: PlanUpdateRequest,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        updater: deps.PlanUpdater = Depends(deps.get_plan_updater),
    ) -> Plan:
        try:
            return updater(
                plan_id,
                household_id,
                {
                    "meal_ids": payload.meals,
                    "start_date": payload.start_date,
                    "end_date": payload.end_date,
                },
            )
        except (ValueError, PermissionError) as exc:
            raise _http_error(exc) from exc

    @application.delete(
        "/api/plans/{plan_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete a plan",
    )
    def plans_delete(
        plan_id: int,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        deleter: deps.PlanDeleter = Depends(deps.get_plan_deleter),
    ) -> None:
        try:
            deleter(plan_id, household_id)
        except (ValueError, PermissionError) as exc:
            raise _http_error(exc) from exc

    @application.get(
        "/api/plans/{plan_id}/ingredients",
        response_model=list[PlanIngredient],
        summary="Aggregated ingredients for a plan",
    )
    def plans_ingredients(
        plan_id: int,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        provider: deps.PlanIngredientsProvider = Depends(deps.get_plan_ingredients_provider),
    ) -> list[PlanIngredient]:
        try:
            return provider(plan_id, household_id)
        except (ValueError, PermissionError) as exc:
            raise _http_error(exc) from exc

    # Shopping list

    @application.get(
        "/api/shopping-list",
        response_model=ShoppingList,
        summary="Shopping list for the next plan",
    )
    def shopping_list_get(
        plan_id: Optional[int] = Query(default=None, ge=1),
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        next_provider: deps.SinglePlanProvider = Depends(deps.get_next_plan_provider),
        provider: deps.ShoppingListProvider = Depends(deps.get_shopping_list_provider),
    ) -> ShoppingList:
        if plan_id is None:
            plan = next_provider(household_id)
            if plan is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail="No upcoming plan"
                )
            plan_id = plan.id
        try:
            return provider(plan_id, household_id)
        except (ValueError, PermissionError) as exc:
            raise _http_error(exc) from exc

    @application.put(
        "/api/shopping-list",
        response_model=ShoppingList,
        summary="Store checked shopping list entries",
    )
    def shopping_list_update(
        payload: ShoppingListUpdate,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        updater: deps.ShoppingListUpdater = Depends(deps.get_shopping_list_updater),
        provider: deps.ShoppingListProvider = Depends(deps.get_shopping_list_provider),
    ) -> ShoppingList:
        try:
            updater(payload.plan.id, household_id, list(payload.ingredients))
        except (ValueError, PermissionError) as exc:
            metrics.SHOPPING_LIST_UPDATES.labels(result="rejected").inc()
            raise _http_error(exc) from exc
        metrics.SHOPPING_LIST_UPDATES.labels(result="stored").inc()
        return provider(payload.plan.id, household_id)

    # Pantry

    @application.get("/api/pantry", response_model=Pantry, summary="Get the household pantry")
    def pantry_get(
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        provider: deps.PantryProvider = Depends(deps.get_pantry_provider),
    ) -> Pantry:
        return provider(household_id)

    @application.post("/api/pantry", response_model=Pantry, summary="Create the household pantry")
    @application.put("/api/pantry", response_model=Pantry, summary="Replace pantry items")
    def pantry_update(
        payload: PantryRequest,
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        updater: deps.PantryUpdater = Depends(deps.get_pantry_updater),
    ) -> Pantry:
        return updater(household_id, payload.items)

    @application.delete(
        "/api/pantry",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Remove all pantry items",
    )
    def pantry_delete(
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        clearer: deps.PantryClearer = Depends(deps.get_pantry_clearer),
    ) -> None:
        clearer(household_id)

    # Households

    @application.get("/api/household", response_model=Household, summary="Current household")
    def household_get(
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        provider: deps.HouseholdProvider = Depends(deps.get_household_provider),
    ) -> Household:
        return provider(user)

    @application.get(
        "/api/household/members",
        response_model=list[str],
        summary="User ids in the current household",
    )
    def household_members(
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        provider: deps.HouseholdMembersProvider = Depends(deps.get_household_members_provider),
    ) -> list[str]:
        return provider(household_id)

    @application.post(
        "/api/household/join-code",
        response_model=JoinCodeResponse,
        summary="Issue a household invitation code",
    )
    def household_join_code(
        auth: None = Depends(deps.require_api_token),
        household_id: int = Depends(deps.get_household_id),
        generator: deps.JoinCodeGenerator = Depends(deps.get_join_code_generator),
    ) -> JoinCodeResponse:
        return JoinCodeResponse(code=generator(household_id))

    @application.post(
        "/api/household/join",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Join a household with a code",
    )
    def household_join(
        payload: JoinHouseholdRequest,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        joiner: deps.HouseholdJoiner = Depends(deps.get_household_joiner),
    ) -> None:
        try:
            joiner(user, payload.code)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    @application.post(
        "/api/household/leave",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Leave the current household",
    )
    def household_leave(
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        leaver: deps.HouseholdLeaver = Depends(deps.get_household_leaver),
    ) -> None:
        leaver(user)

    @application.post(
        "/api/household/remove-member",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Remove a member from the current household",
    )
    def household_remove_member(
        payload: RemoveMemberRequest,
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        household_id: int = Depends(deps.get_household_id),
        remover: deps.HouseholdMemberRemover = Depends(deps.get_household_member_remover),
    ) -> None:
        try:
            remover(household_id, user.user_id, payload.user_id)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    # Tags and images

    @application.get("/api/tags", response_model=list[str], summary="List known tags")
    def tags_list(
        provider: deps.TagProvider = Depends(deps.get_tag_provider),
    ) -> list[str]:
        return provider()

    @application.post(
        "/api/images",
        response_model=ImageUploadResponse,
        summary="Upload a recipe or meal image",
    )
    async def images_upload(
        file: UploadFile = File(...),
        auth: None = Depends(deps.require_api_token),
        user: deps.CurrentUser = Depends(deps.get_current_user),
        storer: deps.ImageStorer = Depends(deps.get_image_storer),
    ) -> ImageUploadResponse:
        content = await file.read()
        if not content:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty."
            )
        if len(content) > settings.max_image_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Image exceeds {settings.max_image_bytes} byte limit.",
            )
        url = storer(file.filename, content)
        logger.debug("Stored image for user=%s size=%s url=%s", user.user_id, len(content), url)
        return ImageUploadResponse(url=url)

    @application.get("/images/{name}", include_in_schema=False)
    def images_get(name: str) -> FileResponse:
        path = resolve_image(name, get_settings())
        if path is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
        return FileResponse(path)

    return application


class RecipeWriteRequest(BaseModel):
    name: str = Field(default="", max_length=255)
    description: str = Field(default="")
    image: Optional[str] = Field(default=None, max_length=1024)
    ingredients: list[IngredientLine] = Field(default_factory=list)
    steps: list[StepLine] = Field(default_factory=list)
    tags: Optional[list[str]] = Field(default=None)

    def repository_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "ingredients": self.ingredients,
            "steps": self.steps,
            "tags": self.tags,
        }


class MealWriteRequest(RecipeWriteRequest):
    recipes: list[MealRecipeRef] = Field(default_factory=list)

    def repository_fields(self) -> dict[str, Any]:
        fields = super().repository_fields()
        fields["recipe_ids"] = [ref.recipe_id for ref in self.recipes]
        return fields


class PlanCreateRequest(BaseModel):
    start_date: date
    end_date: date
    meals: list[int] = Field(default_factory=list)


class PlanUpdateRequest(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    meals: list[int] = Field(default_factory=list)


class PantryRequest(BaseModel):
    items: list[str] = Field(default_factory=list)


class JoinHouseholdRequest(BaseModel):
    code: str = Field(min_length=1, max_length=16)


class RemoveMemberRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=255)


class JoinCodeResponse(BaseModel):
    code: str


class ImageUploadResponse(BaseModel):
    url: str


app = create_app()

__all__ = ["app", "create_app"]
