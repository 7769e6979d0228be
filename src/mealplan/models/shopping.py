"""Shopping list models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mealplan.models.plan import Plan


class ShoppingListItem(BaseModel):
    """Single checklist entry derived from a plan's meals."""

    name: str
    amount: str = Field(default="")
    checked: bool = Field(default=False)

    model_config = ConfigDict(frozen=True)


class ShoppingList(BaseModel):
    """Checklist scoped to one plan."""

    plan: Plan
    ingredients: list[ShoppingListItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PlanRef(BaseModel):
    id: int

    model_config = ConfigDict(frozen=True)


class ShoppingListUpdate(BaseModel):
    """Whole-list replacement write; only ``checked`` is meaningful to the server."""

    plan: PlanRef
    ingredients: list[ShoppingListItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


__all__ = ["ShoppingListItem", "ShoppingList", "PlanRef", "ShoppingListUpdate"]
