"""Shopping list persistence helpers."""

from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from mealplan.aggregate import aggregate_ingredients, without_pantry_items
from mealplan.models.plan import Plan
from mealplan.models.shopping import ShoppingList, ShoppingListItem

from .models import PlanORM, ShoppingStatusORM
from .plans import get_plan, plan_ingredient_rows
from .repository import session_scope

logger = logging.getLogger(__name__)

_EMPTY_STATUS = {"items": []}


def _decode_status(raw: Optional[str]) -> Set[Tuple[str, str]]:
    try:
        payload = json.loads(raw) if raw else _EMPTY_STATUS
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable shopping status payload")
        payload = _EMPTY_STATUS
    if not isinstance(payload, dict):
        payload = _EMPTY_STATUS
    items = payload.get("items") or []
    return {
        (str(item.get("name", "")), str(item.get("amount", "")))
        for item in items
        if isinstance(item, dict)
    }


def _encode_status(checked: Iterable[Tuple[str, str]]) -> str:
    return json.dumps({"items": [{"name": name, "amount": amount} for name, amount in checked]})


def _status_row(session: Session, plan_id: int) -> ShoppingStatusORM:
    row = session.get(ShoppingStatusORM, plan_id)
    if row is None:
        row = ShoppingStatusORM(plan_id=plan_id, status=_encode_status(()))
        session.add(row)
        session.flush()
    return row


def checked_items(plan_id: int) -> Set[Tuple[str, str]]:
    """Return the stored ``(name, amount)`` pairs marked as bought for a plan."""

    with session_scope() as session:
        return _decode_status(_status_row(session, plan_id).status)


def get_shopping_list(
    plan_id: int,
    household_id: Optional[int] = None,
    *,
    pantry: Iterable[str] = (),
) -> ShoppingList:
    """Derive the checklist for a plan from its meals, the pantry and the stored status.

    Raises:
        ValueError: When the plan does not exist.
        PermissionError: When the plan belongs to another household.
    """

    plan = get_plan(plan_id, household_id)
    if plan is None:
        raise ValueError(f"Plan {plan_id} not found")
    return _build(plan, pantry)


def _build(plan: Plan, pantry: Iterable[str]) -> ShoppingList:
    ingredients = without_pantry_items(aggregate_ingredients(plan_ingredient_rows(plan.id)), pantry)
    checked = checked_items(plan.id)
    items: List[ShoppingListItem] = [
        ShoppingListItem(
            name=ingredient.name,
            amount=ingredient.amount,
            checked=(ingredient.name, ingredient.amount) in checked,
        )
        for ingredient in ingredients
    ]
    return ShoppingList(plan=plan, ingredients=items)


def update_shopping_list(
    plan_id: int,
    household_id: int,
    ingredients: Iterable[ShoppingListItem],
) -> None:
    """Persist the checked entries of a whole-list write.

    Only ``checked`` is stored; names and amounts are re-derived on read.
    """

    if plan_id <= 0:
        raise ValueError(f"invalid plan ID: {plan_id}")
    checked: List[Tuple[str, str]] = []
    for item in ingredients:
        pair = (item.name, item.amount)
        if item.checked and pair not in checked:
            checked.append(pair)

    with session_scope() as session:
        plan = session.get(PlanORM, plan_id)
        if plan is None:
            raise ValueError(f"Plan {plan_id} not found")
        if plan.household_id != household_id:
            raise PermissionError("Unauthorized request")
        row = _status_row(session, plan_id)
        row.status = _encode_status(checked)
    logger.info(
        "Stored %s checked shopping list entries",
        len(checked),
        extra={"plan_id": plan_id, "household_id": household_id},
    )


__all__ = ["checked_items", "get_shopping_list", "update_shopping_list"]
