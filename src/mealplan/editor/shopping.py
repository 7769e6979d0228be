"""Shopping-list view-model with optimistic checkbox toggles."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional, Protocol, Sequence, Set, Tuple

from mealplan.errors import MissingPlanContext
from mealplan.models.plan import Plan
from mealplan.models.shopping import ShoppingList, ShoppingListItem

logger = logging.getLogger(__name__)


class ShoppingListGateway(Protocol):
    """Network boundary used by :class:`ShoppingListViewModel`."""

    async def fetch_shopping_list(self, plan_id: Optional[int] = None) -> ShoppingList:
        """Return the derived list for ``plan_id`` (or the household's next plan)."""

    async def update_shopping_list(
        self, plan_id: int, ingredients: Sequence[ShoppingListItem]
    ) -> ShoppingList:
        """Replace the checked state of the whole list; raises ``TransientWriteFailure``."""


class EntryState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


class ShoppingListViewModel:
    """Checklist bound to one plan, kept in sync with the server copy.

    Toggles are applied locally first and then written as a whole list. Each
    toggle bumps a per-entry generation; a failed write only restores the
    pre-toggle value when no newer toggle was issued for that entry, so a
    late failure never overwrites a newer local choice. A refresh replaces the
    list and makes every pending rollback obsolete.
    """

    def __init__(self, gateway: ShoppingListGateway, *, plan_id: Optional[int] = None) -> None:
        self._gateway = gateway
        self._requested_plan_id = plan_id
        self._plan: Optional[Plan] = None
        self._entries: Tuple[ShoppingListItem, ...] = ()
        self._generations: Dict[int, int] = {}
        self._in_flight: Set[int] = set()
        self._epoch = 0
        self._stale = False
        self.error: Optional[str] = None

    @property
    def plan(self) -> Optional[Plan]:
        return self._plan

    @property
    def plan_id(self) -> Optional[int]:
        return self._plan.id if self._plan is not None else None

    @property
    def entries(self) -> Tuple[ShoppingListItem, ...]:
        return self._entries

    @property
    def is_stale(self) -> bool:
        return self._stale

    def state(self, index: int) -> EntryState:
        return EntryState.IN_FLIGHT if index in self._in_flight else EntryState.IDLE

    def bind(self, shopping_list: ShoppingList) -> None:
        """Replace the whole list with a freshly derived copy."""

        self._plan = shopping_list.plan
        self._requested_plan_id = shopping_list.plan.id
        self._entries = tuple(shopping_list.ingredients)
        self._generations.clear()
        self._in_flight.clear()
        self._epoch += 1
        self._stale = False

    async def load(self, plan_id: Optional[int] = None) -> ShoppingList:
        if plan_id is not None:
            self._requested_plan_id = plan_id
        shopping_list = await self._gateway.fetch_shopping_list(self._requested_plan_id)
        self.bind(shopping_list)
        logger.debug(
            "Loaded %s shopping list entries",
            len(self._entries),
            extra={"plan_id": shopping_list.plan.id},
        )
        return shopping_list

    def invalidate(self) -> None:
        """Mark the list stale after the plan's meals changed."""

        self._stale = True

    async def refresh(self) -> ShoppingList:
        """Re-fetch the whole list; derived entries are never patched locally."""

        return await self.load()

    def _replace(self, index: int, entry: ShoppingListItem) -> None:
        entries = list(self._entries)
        entries[index] = entry
        self._entries = tuple(entries)

    async def toggle(self, index: int) -> None:
        """Flip ``checked`` at ``index`` and persist the whole list.

        Raises:
            MissingPlanContext: No list bound to a known plan; nothing changes.
            IndexError: ``index`` is outside the list.
            TransientWriteFailure: The write failed; the entry was reverted.

        Any other error from the gateway reverts the entry the same way and
        propagates unchanged.
        """

        plan_id = self.plan_id
        if plan_id is None:
            raise MissingPlanContext("shopping list is not bound to a plan")
        if not 0 <= index < len(self._entries):
            raise IndexError(f"shopping list entry {index} does not exist")

        previous = self._entries[index]
        self._replace(index, previous.model_copy(update={"checked": not previous.checked}))
        generation = self._generations.get(index, 0) + 1
        self._generations[index] = generation
        self._in_flight.add(index)
        epoch = self._epoch
        self.error = None

        try:
            await self._gateway.update_shopping_list(plan_id, self._entries)
        except Exception as exc:
            if epoch == self._epoch and self._generations.get(index) == generation:
                self._replace(index, previous)
                self._in_flight.discard(index)
                self.error = str(exc)
            logger.warning(
                "Shopping list update failed for entry %s: %s",
                index,
                exc,
                extra={"plan_id": plan_id},
            )
            raise

        if epoch == self._epoch and self._generations.get(index) == generation:
            self._in_flight.discard(index)


__all__ = ["ShoppingListGateway", "EntryState", "ShoppingListViewModel"]
