from __future__ import annotations

from datetime import date, timedelta

import pytest

from mealplan.db.households import ensure_household
from mealplan.db.meals import create_meal, update_meal
from mealplan.db.models import ShoppingStatusORM
from mealplan.db.plans import create_plan
from mealplan.db.repository import session_scope
from mealplan.db.shopping_list import checked_items, get_shopping_list, update_shopping_list
from mealplan.models.catalog import IngredientLine
from mealplan.models.shopping import ShoppingListItem


@pytest.fixture()
def planned():
    household_id = ensure_household("user-1")
    meal = create_meal(
        name="Omelette",
        description="Quick breakfast",
        ingredients=[
            IngredientLine(name="Eggs", amount="3"),
            IngredientLine(name="Salt", amount="a pinch"),
            IngredientLine(name="Milk", amount="50 ml"),
        ],
    )
    start = date.today() + timedelta(days=1)
    plan = create_plan(household_id, start_date=start, end_date=start, meal_ids=[meal.id])
    return household_id, meal, plan


def _pairs(shopping_list):
    return [(item.name, item.amount, item.checked) for item in shopping_list.ingredients]


def test_shopping_list_is_derived_from_plan(planned):
    household_id, _, plan = planned

    shopping_list = get_shopping_list(plan.id, household_id)

    assert shopping_list.plan.id == plan.id
    assert _pairs(shopping_list) == [
        ("Eggs", "3", False),
        ("Salt", "a pinch", False),
        ("Milk", "50 ml", False),
    ]


def test_pantry_items_are_left_off(planned):
    household_id, _, plan = planned

    shopping_list = get_shopping_list(plan.id, household_id, pantry=["salt"])

    assert [item.name for item in shopping_list.ingredients] == ["Eggs", "Milk"]


def test_update_stores_checked_pairs(planned):
    household_id, _, plan = planned

    update_shopping_list(
        plan.id,
        household_id,
        [
            ShoppingListItem(name="Eggs", amount="3", checked=True),
            ShoppingListItem(name="Milk", amount="50 ml", checked=False),
        ],
    )

    assert checked_items(plan.id) == {("Eggs", "3")}
    assert _pairs(get_shopping_list(plan.id, household_id))[0] == ("Eggs", "3", True)


def test_checked_state_resets_when_amount_changes(planned):
    household_id, meal, plan = planned
    update_shopping_list(plan.id, household_id, [ShoppingListItem(name="Eggs", amount="3", checked=True)])

    update_meal(
        meal.id,
        name=meal.name,
        description=meal.description,
        ingredients=[IngredientLine(name="Eggs", amount="4")],
    )

    assert _pairs(get_shopping_list(plan.id, household_id)) == [("Eggs", "4", False)]


def test_update_rejects_foreign_and_missing_plans(planned):
    _, _, plan = planned
    stranger = ensure_household("stranger")

    with pytest.raises(PermissionError):
        update_shopping_list(plan.id, stranger, [])
    with pytest.raises(PermissionError):
        get_shopping_list(plan.id, stranger)
    with pytest.raises(ValueError, match="not found"):
        update_shopping_list(999, stranger, [])
    with pytest.raises(ValueError, match="invalid plan ID"):
        update_shopping_list(0, stranger, [])


def test_unreadable_status_is_treated_as_empty(planned):
    household_id, _, plan = planned
    with session_scope() as session:
        session.add(ShoppingStatusORM(plan_id=plan.id, status="not json"))

    assert checked_items(plan.id) == set()
    assert all(not item.checked for item in get_shopping_list(plan.id, household_id).ingredients)
