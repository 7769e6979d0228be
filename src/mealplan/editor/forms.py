"""Recipe and meal form sessions built on ordered collections."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Union

from mealplan.errors import TransientWriteFailure
from mealplan.models.catalog import Meal, Recipe

from .ordered import IngredientDraft, OrderedCollection, StepDraft

logger = logging.getLogger(__name__)

# Forms never let the user delete the last step or ingredient row.
FORM_MIN_SIZE = 1

Parent = Union[Recipe, Meal]


class ParentGateway(Protocol):
    async def create_recipe(self, payload: Dict[str, Any]) -> Recipe: ...

    async def update_recipe(self, recipe_id: int, payload: Dict[str, Any]) -> Recipe: ...

    async def create_meal(self, payload: Dict[str, Any]) -> Meal: ...

    async def update_meal(self, meal_id: int, payload: Dict[str, Any]) -> Meal: ...


def filter_tag_suggestions(
    known: Iterable[str],
    query: str,
    selected: Iterable[str] = (),
) -> List[str]:
    """Known tags containing ``query`` (case-insensitive) that are not selected yet."""

    needle = query.strip().lower()
    chosen = {tag.strip().lower() for tag in selected}
    suggestions: List[str] = []
    for tag in known:
        lowered = tag.lower()
        if lowered in chosen or tag in suggestions:
            continue
        if needle in lowered:
            suggestions.append(tag)
    return suggestions


class ParentFormSession:
    """Editable recipe or meal with its ordered steps and ingredients.

    The state the form opened with is the baseline for ``dirty``, so an
    untouched blank form can be left freely. ``submit`` saves the whole
    parent. On success the saved state becomes the new baseline and locally
    created rows take their server ids; on failure every edit is kept,
    ``error`` is set and ``can_navigate_away`` stays false.
    """

    def __init__(
        self,
        gateway: ParentGateway,
        kind: str = "recipe",
        *,
        parent_id: Optional[int] = None,
        name: str = "",
        description: str = "",
        image: Optional[str] = None,
        tags: Sequence[str] = (),
        recipe_ids: Sequence[int] = (),
        steps: Optional[OrderedCollection[StepDraft]] = None,
        ingredients: Optional[OrderedCollection[IngredientDraft]] = None,
    ) -> None:
        if kind not in {"recipe", "meal"}:
            raise ValueError(f"Unsupported form kind: {kind}")
        self._gateway = gateway
        self.kind = kind
        self.parent_id = parent_id
        self.name = name
        self.description = description
        self.image = image
        self.tags: List[str] = list(tags)
        self.recipe_ids: List[int] = list(recipe_ids)
        if steps is None:
            steps = OrderedCollection(StepDraft, min_size=FORM_MIN_SIZE)
        if ingredients is None:
            ingredients = OrderedCollection(IngredientDraft, min_size=FORM_MIN_SIZE)
        self.steps = steps
        self.ingredients = ingredients
        self.error: Optional[str] = None
        self._baseline: Dict[str, Any] = self.payload()

    @classmethod
    def from_parent(cls, gateway: ParentGateway, parent: Parent) -> "ParentFormSession":
        """Open an edit session for a persisted recipe or meal."""

        kind = "meal" if isinstance(parent, Meal) else "recipe"
        return cls(
            gateway,
            kind,
            parent_id=parent.id,
            name=parent.name,
            description=parent.description,
            image=parent.image,
            tags=parent.tags,
            recipe_ids=[ref.recipe_id for ref in parent.recipes] if isinstance(parent, Meal) else (),
            steps=OrderedCollection.from_payload(
                StepDraft,
                [step.model_dump() for step in parent.steps],
                min_size=FORM_MIN_SIZE,
            ),
            ingredients=OrderedCollection.from_payload(
                IngredientDraft,
                [ingredient.model_dump() for ingredient in parent.ingredients],
                min_size=FORM_MIN_SIZE,
            ),
        )

    def payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "tags": list(self.tags),
            "steps": self.steps.serialize(),
            "ingredients": self.ingredients.serialize(),
        }
        if self.kind == "meal":
            payload["recipes"] = [{"recipe_id": recipe_id} for recipe_id in self.recipe_ids]
            for ingredient in payload["ingredients"]:
                ingredient.pop("calories", None)
        return payload

    @property
    def dirty(self) -> bool:
        return self.payload() != self._baseline

    @property
    def can_navigate_away(self) -> bool:
        return not self.dirty

    async def submit(self) -> Parent:
        """Create or update the parent record.

        Raises:
            TransientWriteFailure: The save failed; local edits are untouched.
        """

        payload = self.payload()
        self.error = None
        try:
            if self.kind == "recipe":
                if self.parent_id is None:
                    saved: Parent = await self._gateway.create_recipe(payload)
                else:
                    saved = await self._gateway.update_recipe(self.parent_id, payload)
            elif self.parent_id is None:
                saved = await self._gateway.create_meal(payload)
            else:
                saved = await self._gateway.update_meal(self.parent_id, payload)
        except TransientWriteFailure as exc:
            self.error = str(exc)
            logger.warning("Saving %s failed: %s", self.kind, exc)
            raise

        self.parent_id = saved.id
        self.steps.adopt([step.model_dump() for step in saved.steps])
        self.ingredients.adopt([ingredient.model_dump() for ingredient in saved.ingredients])
        self._baseline = self.payload()
        return saved


__all__ = ["FORM_MIN_SIZE", "ParentGateway", "filter_tag_suggestions", "ParentFormSession"]
