"""Household sharing and pantry models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HouseholdMember(BaseModel):
    household_id: int
    user_id: str
    email: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class Household(BaseModel):
    """Users sharing plans, pantry and shopping list."""

    id: int
    name: str
    members: list[HouseholdMember] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Pantry(BaseModel):
    """Staples a household keeps on hand; matching entries are left off shopping lists."""

    id: int
    household_id: int
    items: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


__all__ = ["HouseholdMember", "Household", "Pantry"]
