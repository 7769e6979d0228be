from __future__ import annotations

from mealplan.db.households import ensure_household
from mealplan.db.pantry import (
    DEFAULT_PANTRY_ITEMS,
    clear_pantry,
    get_pantry,
    pantry_items,
    update_pantry,
)


def test_get_pantry_seeds_defaults_once():
    household_id = ensure_household("user-1")

    assert pantry_items(household_id) == []
    pantry = get_pantry(household_id)
    assert pantry.items == list(DEFAULT_PANTRY_ITEMS)
    assert get_pantry(household_id).id == pantry.id
    assert pantry_items(household_id) == list(DEFAULT_PANTRY_ITEMS)


def test_update_pantry_normalizes_items():
    household_id = ensure_household("user-1")

    pantry = update_pantry(household_id, ["Rice", " rice ", "Soy Sauce", ""])

    assert pantry.items == ["rice", "soy sauce"]
    assert get_pantry(household_id).items == ["rice", "soy sauce"]


def test_clear_pantry_keeps_it_empty():
    household_id = ensure_household("user-1")
    get_pantry(household_id)

    clear_pantry(household_id)

    assert get_pantry(household_id).items == []


def test_pantries_are_per_household():
    first = ensure_household("user-1")
    second = ensure_household("user-2")

    update_pantry(first, ["rice"])

    assert get_pantry(second).items == list(DEFAULT_PANTRY_ITEMS)
