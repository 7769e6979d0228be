from __future__ import annotations

import pytest

from mealplan.db.catalog import list_tags, slugify
from mealplan.db.models import RecipeStepORM
from mealplan.db.recipes import (
    create_recipe,
    delete_recipe,
    get_recipe,
    get_recipe_id_from_slug,
    list_recipes,
    update_recipe,
)
from mealplan.db.repository import session_scope
from mealplan.models.catalog import IngredientLine, StepLine


def _pancakes(**overrides):
    fields = dict(
        name="Pancakes",
        description="Fluffy breakfast pancakes",
        ingredients=[
            IngredientLine(name="Flour", amount="1 cup", calories=455),
            IngredientLine(name="Eggs", amount="2"),
        ],
        steps=[
            StepLine(text="Fry", order=2),
            StepLine(text="Mix", order=1),
        ],
        tags=["Breakfast", "quick", "breakfast"],
    )
    fields.update(overrides)
    return create_recipe(**fields)


def test_slugify_handles_accents_and_symbols():
    assert slugify("Crème Brûlée!") == "creme-brulee"
    assert slugify("   ") == "untitled"


def test_create_recipe_orders_children_and_normalizes_tags():
    recipe = _pancakes()

    assert recipe.slug == "pancakes"
    assert [step.text for step in recipe.steps] == ["Mix", "Fry"]
    assert [step.order for step in recipe.steps] == [1, 2]
    assert [item.name for item in recipe.ingredients] == ["Flour", "Eggs"]
    assert recipe.ingredients[0].calories == 455
    assert recipe.tags == ["breakfast", "quick"]
    assert list_tags() == ["breakfast", "quick"]


def test_duplicate_names_get_unique_slugs():
    first = _pancakes()
    second = _pancakes()

    assert first.slug == "pancakes"
    assert second.slug == "pancakes-1"
    assert get_recipe_id_from_slug("pancakes-1") == second.id
    assert get_recipe_id_from_slug("missing") is None


def test_symbol_only_names_get_suffixed_untitled_slugs():
    first = _pancakes(name="???")
    second = _pancakes(name="!!!")
    third = _pancakes(name="***")

    assert [first.slug, second.slug, third.slug] == ["untitled", "untitled-1", "untitled-2"]


def test_create_recipe_requires_name_and_description():
    with pytest.raises(ValueError):
        create_recipe(name=" ", description="x")


def test_update_recipe_keeps_persisted_step_ids():
    recipe = _pancakes()
    mix, fry = recipe.steps

    updated = update_recipe(
        recipe.id,
        name="Pancakes",
        description="Even fluffier",
        ingredients=list(recipe.ingredients),
        steps=[
            StepLine(id=fry.id, text="Fry gently", order=1),
            StepLine(id=mix.id, text="Mix", order=2),
            StepLine(text="Serve", order=3),
        ],
    )

    assert [step.text for step in updated.steps] == ["Fry gently", "Mix", "Serve"]
    assert updated.steps[0].id == fry.id
    assert updated.steps[1].id == mix.id
    assert updated.steps[2].id not in {mix.id, fry.id}
    assert updated.description == "Even fluffier"
    assert updated.tags == ["breakfast", "quick"]
    assert updated.slug == "pancakes"


def test_update_recipe_drops_missing_children_and_renames_slug():
    recipe = _pancakes()

    updated = update_recipe(
        recipe.id,
        name="Crepes",
        description="Thin",
        ingredients=[IngredientLine(name="Milk", amount="1 cup")],
        steps=[StepLine(text="Pour", order=1)],
        tags=["french"],
    )

    assert updated.slug == "crepes"
    assert [item.name for item in updated.ingredients] == ["Milk"]
    assert updated.tags == ["french"]
    with session_scope() as session:
        assert session.query(RecipeStepORM).count() == 1


def test_update_missing_recipe_raises():
    with pytest.raises(ValueError, match="not found"):
        update_recipe(99, name="x", description="y")


def test_list_recipes_filters_by_tag():
    _pancakes()
    create_recipe(name="Soup", description="Warm", tags=["dinner"])

    assert [recipe.name for recipe in list_recipes()] == ["Pancakes", "Soup"]
    assert [recipe.name for recipe in list_recipes(tag="Dinner")] == ["Soup"]


def test_delete_recipe():
    recipe = _pancakes()

    delete_recipe(recipe.id)

    assert get_recipe(recipe.id) is None
    with pytest.raises(ValueError):
        delete_recipe(recipe.id)
