"""Recipe and meal catalog models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IngredientLine(BaseModel):
    """Ingredient row of a recipe or meal; ``amount`` is free text such as ``"2 cups"``."""

    id: Optional[int] = Field(default=None)
    name: str
    amount: str = Field(default="")
    calories: Optional[int] = Field(default=None, ge=0)
    order: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)


class StepLine(BaseModel):
    """Single instruction step, positioned by its 1-based ``order``."""

    id: Optional[int] = Field(default=None)
    text: str
    order: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)


class Recipe(BaseModel):
    id: int
    name: str
    description: str
    slug: str
    image: Optional[str] = Field(default=None)
    ingredients: list[IngredientLine] = Field(default_factory=list)
    steps: list[StepLine] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class MealRecipeRef(BaseModel):
    """Link from a meal to one of the recipes it is built from."""

    recipe_id: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)


class Meal(BaseModel):
    id: int
    name: str
    description: str
    slug: str
    image: Optional[str] = Field(default=None)
    ingredients: list[IngredientLine] = Field(default_factory=list)
    steps: list[StepLine] = Field(default_factory=list)
    recipes: list[MealRecipeRef] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


__all__ = ["IngredientLine", "StepLine", "Recipe", "MealRecipeRef", "Meal"]
