from __future__ import annotations

from datetime import date, timedelta

import pytest

from mealplan.db.households import ensure_household
from mealplan.db.meals import (
    create_meal,
    delete_meal,
    get_meal,
    get_meal_id_from_slug,
    list_meals,
    update_meal,
)
from mealplan.db.plans import create_plan, get_plan
from mealplan.db.recipes import create_recipe
from mealplan.models.catalog import IngredientLine, StepLine


def _recipe(name: str = "Tomato Sauce"):
    return create_recipe(name=name, description="Simple sauce")


def test_create_meal_links_recipes_and_drops_calories():
    sauce = _recipe()
    meal = create_meal(
        name="Spaghetti Night",
        description="Pasta with sauce",
        ingredients=[IngredientLine(name="Spaghetti", amount="500 g", calories=1800)],
        steps=[StepLine(text="Boil pasta", order=1)],
        recipe_ids=[sauce.id, sauce.id],
        tags=["Dinner"],
    )

    assert meal.slug == "spaghetti-night"
    assert [ref.recipe_id for ref in meal.recipes] == [sauce.id]
    assert meal.ingredients[0].calories is None
    assert meal.ingredients[0].order == 1
    assert meal.tags == ["dinner"]
    assert get_meal_id_from_slug("spaghetti-night") == meal.id


def test_create_meal_with_unknown_recipe_fails_without_saving():
    with pytest.raises(ValueError, match="Recipe 42 not found"):
        create_meal(name="Ghost", description="Nothing", recipe_ids=[42])

    assert list_meals() == []


def test_update_meal_replaces_recipes_and_keeps_tags():
    sauce = _recipe()
    pesto = _recipe("Pesto")
    meal = create_meal(name="Pasta", description="Dinner", recipe_ids=[sauce.id], tags=["dinner"])

    updated = update_meal(
        meal.id,
        name="Pasta",
        description="Dinner",
        recipe_ids=[pesto.id],
        ingredients=[IngredientLine(name="Penne", amount="400 g")],
    )

    assert [ref.recipe_id for ref in updated.recipes] == [pesto.id]
    assert [item.name for item in updated.ingredients] == ["Penne"]
    assert updated.tags == ["dinner"]


def test_list_meals_filters_by_tag():
    create_meal(name="Oatmeal", description="Warm", tags=["breakfast"])
    create_meal(name="Curry", description="Spicy", tags=["dinner"])

    assert [meal.name for meal in list_meals()] == ["Curry", "Oatmeal"]
    assert [meal.name for meal in list_meals(tag="breakfast")] == ["Oatmeal"]


def test_delete_meal_removes_it_from_plans():
    household_id = ensure_household("user-1")
    meal = create_meal(name="Curry", description="Spicy")
    start = date.today() + timedelta(days=1)
    plan = create_plan(household_id, start_date=start, end_date=start, meal_ids=[meal.id])

    delete_meal(meal.id)

    assert get_meal(meal.id) is None
    assert get_plan(plan.id).meals == []
