from __future__ import annotations

import json
from datetime import date, timedelta

from typer.testing import CliRunner

from mealplan.cli import app
from mealplan.db.households import ensure_household, generate_join_code
from mealplan.db.meals import create_meal
from mealplan.db.plans import create_plan
from mealplan.models.catalog import IngredientLine

runner = CliRunner()


def _plan_with_meal() -> int:
    household_id = ensure_household("user-1")
    meal = create_meal(
        name="Omelette",
        description="Breakfast",
        ingredients=[IngredientLine(name="Eggs", amount="3"), IngredientLine(name="Salt", amount="a pinch")],
        tags=["breakfast"],
    )
    start = date.today() + timedelta(days=1)
    return create_plan(household_id, start_date=start, end_date=start, meal_ids=[meal.id]).id


def test_init_db_reports_database_path():
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert "test_mealplan.db" in result.output


def test_shopping_list_command_respects_pantry_flag():
    plan_id = _plan_with_meal()

    with_pantry = runner.invoke(app, ["shopping-list", str(plan_id)])
    assert with_pantry.exit_code == 0
    assert [item["name"] for item in json.loads(with_pantry.output)["ingredients"]] == ["Eggs"]

    without_pantry = runner.invoke(app, ["shopping-list", str(plan_id), "--no-pantry", "--pretty"])
    assert without_pantry.exit_code == 0
    assert [item["name"] for item in json.loads(without_pantry.output)["ingredients"]] == ["Eggs", "Salt"]


def test_shopping_list_command_unknown_plan():
    result = runner.invoke(app, ["shopping-list", "404"])

    assert result.exit_code == 1


def test_tags_and_purge_commands():
    _plan_with_meal()
    household_id = ensure_household("user-1")
    generate_join_code(household_id, ttl_minutes=-1)

    tags = runner.invoke(app, ["tags"])
    assert tags.output.split() == ["breakfast"]

    purge = runner.invoke(app, ["purge-join-codes"])
    assert purge.exit_code == 0
    assert "Removed 1 expired join code(s)." in purge.output
