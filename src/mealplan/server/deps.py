"""Dependency definitions for the meal-planning API server."""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel, ConfigDict

from mealplan.config import get_settings
from mealplan.db.catalog import list_tags
from mealplan.db.households import (
    ensure_household,
    generate_join_code,
    get_household,
    join_household_by_code,
    leave_household,
    list_household_members,
    remove_household_member,
)
from mealplan.db.meals import (
    create_meal,
    delete_meal,
    get_meal,
    get_meal_id_from_slug,
    list_meals,
    update_meal,
)
from mealplan.db.pantry import clear_pantry, get_pantry, update_pantry
from mealplan.db.plans import (
    create_plan,
    delete_plan,
    get_last_plan,
    get_next_plan,
    get_plan,
    get_plan_ingredients,
    list_future_plans,
    list_plans,
    update_plan,
)
from mealplan.db.recipes import (
    create_recipe,
    delete_recipe,
    get_recipe,
    get_recipe_id_from_slug,
    list_recipes,
    update_recipe,
)
from mealplan.db.shopping_list import get_shopping_list, update_shopping_list
from mealplan.images import store_image
from mealplan.models.catalog import Meal, Recipe
from mealplan.models.household import Household, Pantry
from mealplan.models.plan import Plan, PlanIngredient
from mealplan.models.shopping import ShoppingList, ShoppingListItem


class CurrentUser(BaseModel):
    """Session identity forwarded by the front end."""

    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)


RecipeListProvider = Callable[[Optional[str]], List[Recipe]]
RecipeFetcher = Callable[[int], Optional[Recipe]]
RecipeSlugResolver = Callable[[str], Optional[int]]
RecipeCreator = Callable[[dict], Recipe]
RecipeUpdater = Callable[[int, dict], Recipe]
RecipeDeleter = Callable[[int], None]
MealListProvider = Callable[[Optional[str]], List[Meal]]
MealFetcher = Callable[[int], Optional[Meal]]
MealSlugResolver = Callable[[str], Optional[int]]
MealCreator = Callable[[dict], Meal]
MealUpdater = Callable[[int, dict], Meal]
MealDeleter = Callable[[int], None]
PlanListProvider = Callable[[int], List[Plan]]
SinglePlanProvider = Callable[[int], Optional[Plan]]
PlanFetcher = Callable[[int, int], Optional[Plan]]
PlanCreator = Callable[[int, dict], Plan]
PlanUpdater = Callable[[int, int, dict], Plan]
PlanDeleter = Callable[[int, int], None]
PlanIngredientsProvider = Callable[[int, int], List[PlanIngredient]]
ShoppingListProvider = Callable[[int, int], ShoppingList]
ShoppingListUpdater = Callable[[int, int, List[ShoppingListItem]], None]
PantryProvider = Callable[[int], Pantry]
PantryUpdater = Callable[[int, List[str]], Pantry]
PantryClearer = Callable[[int], None]
HouseholdResolver = Callable[[CurrentUser], int]
HouseholdProvider = Callable[[CurrentUser], Household]
HouseholdMembersProvider = Callable[[int], List[str]]
JoinCodeGenerator = Callable[[int], str]
HouseholdJoiner = Callable[[CurrentUser, str], int]
HouseholdLeaver = Callable[[CurrentUser], Household]
HouseholdMemberRemover = Callable[[int, str, str], None]
TagProvider = Callable[[], List[str]]
ImageStorer = Callable[[Optional[str], bytes], str]


def get_recipe_list_provider() -> RecipeListProvider:
    return lambda tag=None: list_recipes(tag=tag)


def get_recipe_fetcher() -> RecipeFetcher:
    return get_recipe


def get_recipe_slug_resolver() -> RecipeSlugResolver:
    return get_recipe_id_from_slug


def get_recipe_creator() -> RecipeCreator:
    return lambda payload: create_recipe(**payload)


def get_recipe_updater() -> RecipeUpdater:
    return lambda recipe_id, payload: update_recipe(recipe_id, **payload)


def get_recipe_deleter() -> RecipeDeleter:
    return delete_recipe


def get_meal_list_provider() -> MealListProvider:
    return lambda tag=None: list_meals(tag=tag)


def get_meal_fetcher() -> MealFetcher:
    return get_meal


def get_meal_slug_resolver() -> MealSlugResolver:
    return get_meal_id_from_slug


def get_meal_creator() -> MealCreator:
    return lambda payload: create_meal(**payload)


def get_meal_updater() -> MealUpdater:
    return lambda meal_id, payload: update_meal(meal_id, **payload)


def get_meal_deleter() -> MealDeleter:
    return delete_meal


def get_plan_list_provider() -> PlanListProvider:
    return list_plans


def get_last_plan_provider() -> SinglePlanProvider:
    return get_last_plan


def get_next_plan_provider() -> SinglePlanProvider:
    return lambda household_id: get_next_plan(household_id)


def get_future_plans_provider() -> PlanListProvider:
    return lambda household_id: list_future_plans(household_id)


def get_plan_fetcher() -> PlanFetcher:
    return lambda plan_id, household_id: get_plan(plan_id, household_id)


def get_plan_creator() -> PlanCreator:
    return lambda household_id, payload: create_plan(household_id, **payload)


def get_plan_updater() -> PlanUpdater:
    return lambda plan_id, household_id, payload: update_plan(plan_id, household_id, **payload)


def get_plan_deleter() -> PlanDeleter:
    return delete_plan


def get_plan_ingredients_provider() -> PlanIngredientsProvider:
    return lambda plan_id, household_id: get_plan_ingredients(plan_id, household_id)


def get_shopping_list_provider() -> ShoppingListProvider:
    return lambda plan_id, household_id: get_shopping_list(
        plan_id,
        household_id,
        pantry=get_pantry(household_id).items,
    )


def get_shopping_list_updater() -> ShoppingListUpdater:
    return update_shopping_list


def get_pantry_provider() -> PantryProvider:
    return get_pantry


def get_pantry_updater() -> PantryUpdater:
    return update_pantry


def get_pantry_clearer() -> PantryClearer:
    return clear_pantry


def get_household_resolver() -> HouseholdResolver:
    return lambda user: ensure_household(user.user_id, email=user.email, name=user.name)


def get_household_provider() -> HouseholdProvider:
    return lambda user: get_household(user.user_id, email=user.email, name=user.name)


def get_household_members_provider() -> HouseholdMembersProvider:
    return list_household_members


def get_join_code_generator() -> JoinCodeGenerator:
    ttl_minutes = get_settings().join_code_ttl_minutes
    return lambda household_id: generate_join_code(household_id, ttl_minutes=ttl_minutes)


def get_household_joiner() -> HouseholdJoiner:
    return lambda user, code: join_household_by_code(user.user_id, code, email=user.email)


def get_household_leaver() -> HouseholdLeaver:
    return lambda user: leave_household(user.user_id, email=user.email, name=user.name)


def get_household_member_remover() -> HouseholdMemberRemover:
    return remove_household_member


def get_tag_provider() -> TagProvider:
    return list_tags


def get_image_storer() -> ImageStorer:
    return lambda filename, content: store_image(filename, content)


def require_api_token(
    request: Request,
    settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_current_user(request: Request) -> CurrentUser:
    """Read the session identity headers; requests without a user id are rejected."""

    user_id = (request.headers.get("X-User-ID") or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized request"
        )
    email = (request.headers.get("X-User-Email") or "").strip() or None
    name = (request.headers.get("X-User-Name") or "").strip() or None
    return CurrentUser(user_id=user_id, email=email, name=name)


def get_household_id(
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    resolver: HouseholdResolver = Depends(get_household_resolver),
) -> int:
    household_id = resolver(user)
    request.state.household_id = household_id
    return household_id
