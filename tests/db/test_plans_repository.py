from __future__ import annotations

from datetime import date, timedelta

import pytest

from mealplan.db.households import ensure_household
from mealplan.db.meals import create_meal
from mealplan.db.models import PlanORM
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
    validate_plan_dates,
)
from mealplan.db.repository import session_scope
from mealplan.models.catalog import IngredientLine
from mealplan.models.plan import PlanIngredient

TODAY = date.today()


def _days(offset: int) -> date:
    return TODAY + timedelta(days=offset)


def _meal(name: str, *ingredients: tuple[str, str]):
    return create_meal(
        name=name,
        description=f"{name} dinner",
        ingredients=[IngredientLine(name=item, amount=amount) for item, amount in ingredients],
    )


def _insert_past_plan(household_id: int) -> int:
    with session_scope() as session:
        row = PlanORM(start_date=_days(-14), end_date=_days(-8), household_id=household_id)
        session.add(row)
        session.flush()
        return row.id


def test_validate_plan_dates():
    validate_plan_dates(_days(0), _days(0))

    with pytest.raises(ValueError, match="in the future"):
        validate_plan_dates(_days(-1), _days(2))
    with pytest.raises(ValueError, match="before end date"):
        validate_plan_dates(_days(3), _days(2))


def test_create_plan_keeps_meal_order():
    household_id = ensure_household("user-1")
    curry = _meal("Curry")
    tacos = _meal("Tacos")

    plan = create_plan(household_id, start_date=_days(1), end_date=_days(7), meal_ids=[tacos.id, curry.id])

    assert plan.household_id == household_id
    assert plan.meals == [tacos.id, curry.id]
    assert get_plan(plan.id) == plan


def test_create_plan_with_unknown_meal_fails():
    household_id = ensure_household("user-1")

    with pytest.raises(ValueError, match="Meal 9 not found"):
        create_plan(household_id, start_date=_days(1), end_date=_days(2), meal_ids=[9])

    assert list_plans(household_id) == []


def test_plans_are_scoped_to_household():
    owner = ensure_household("owner")
    other = ensure_household("stranger")
    plan = create_plan(owner, start_date=_days(1), end_date=_days(2))

    assert list_plans(other) == []
    with pytest.raises(PermissionError):
        get_plan(plan.id, other)
    with pytest.raises(PermissionError):
        update_plan(plan.id, other, meal_ids=[])
    with pytest.raises(PermissionError):
        delete_plan(plan.id, other)


def test_last_next_and_future_plans():
    household_id = ensure_household("user-1")
    past_id = _insert_past_plan(household_id)
    current = create_plan(household_id, start_date=_days(0), end_date=_days(3))
    later = create_plan(household_id, start_date=_days(10), end_date=_days(12))

    assert get_last_plan(household_id).id == later.id
    assert get_next_plan(household_id).id == current.id
    assert [plan.id for plan in list_future_plans(household_id)] == [current.id, later.id]
    assert [plan.id for plan in list_plans(household_id)] == [past_id, current.id, later.id]
    assert get_next_plan(household_id, today=_days(20)) is None


def test_update_plan_replaces_meals_and_dates():
    household_id = ensure_household("user-1")
    curry = _meal("Curry")
    plan = create_plan(household_id, start_date=_days(1), end_date=_days(3), meal_ids=[curry.id])

    updated = update_plan(plan.id, household_id, meal_ids=[], end_date=_days(5))

    assert updated.meals == []
    assert updated.start_date == _days(1)
    assert updated.end_date == _days(5)
    with pytest.raises(ValueError):
        update_plan(plan.id, household_id, meal_ids=[], start_date=_days(9))


def test_delete_plan():
    household_id = ensure_household("user-1")
    plan = create_plan(household_id, start_date=_days(1), end_date=_days(3))

    delete_plan(plan.id, household_id)

    assert get_plan(plan.id) is None
    with pytest.raises(ValueError, match="not found"):
        delete_plan(plan.id, household_id)


def test_plan_ingredients_are_aggregated_across_meals():
    household_id = ensure_household("user-1")
    curry = _meal("Curry", ("Rice", "1 cup"), ("Onion", "1"))
    pilaf = _meal("Pilaf", ("rice", "2 cups"), ("Stock", "500 ml"))
    plan = create_plan(household_id, start_date=_days(1), end_date=_days(3), meal_ids=[curry.id, pilaf.id])

    assert get_plan_ingredients(plan.id, household_id) == [
        PlanIngredient(name="Rice", amount="1 cup + 2 cups"),
        PlanIngredient(name="Onion", amount="1"),
        PlanIngredient(name="Stock", amount="500 ml"),
    ]
