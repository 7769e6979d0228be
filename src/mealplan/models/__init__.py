"""Pydantic models defining shared data contracts."""

from mealplan.models.catalog import IngredientLine, Meal, MealRecipeRef, Recipe, StepLine
from mealplan.models.household import Household, HouseholdMember, Pantry
from mealplan.models.plan import Plan, PlanIngredient
from mealplan.models.shopping import PlanRef, ShoppingList, ShoppingListItem, ShoppingListUpdate

__all__ = [
    "IngredientLine",
    "Meal",
    "MealRecipeRef",
    "Recipe",
    "StepLine",
    "Household",
    "HouseholdMember",
    "Pantry",
    "Plan",
    "PlanIngredient",
    "PlanRef",
    "ShoppingList",
    "ShoppingListItem",
    "ShoppingListUpdate",
]
