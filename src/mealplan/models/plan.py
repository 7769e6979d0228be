"""Meal plan models."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Plan(BaseModel):
    """Date-ranged set of meals belonging to a household."""

    id: int
    start_date: date
    end_date: date
    household_id: Optional[int] = Field(default=None)
    meals: list[int] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PlanIngredient(BaseModel):
    """Aggregated ingredient requirement for a plan."""

    name: str
    amount: str = Field(default="")

    model_config = ConfigDict(frozen=True)


__all__ = ["Plan", "PlanIngredient"]
