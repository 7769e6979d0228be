"""Pantry persistence helpers."""

from __future__ import annotations

import logging
from typing import Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from mealplan.models.household import Pantry

from .models import PantryItemORM, PantryORM
from .repository import session_scope

logger = logging.getLogger(__name__)

DEFAULT_PANTRY_ITEMS = ("salt", "pepper", "olive oil", "butter", "flour", "sugar")


def _normalize(items: Iterable[str]) -> List[str]:
    cleaned: List[str] = []
    for item in items:
        value = item.strip().lower()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def _get_or_create(session: Session, household_id: int) -> PantryORM:
    pantry = session.execute(
        select(PantryORM).where(PantryORM.household_id == household_id)
    ).scalar_one_or_none()
    if pantry is not None:
        return pantry

    pantry = PantryORM(household_id=household_id)
    session.add(pantry)
    session.flush()
    for item in DEFAULT_PANTRY_ITEMS:
        session.add(PantryItemORM(pantry_id=pantry.id, item_name=item))
    session.flush()
    logger.info("Created default pantry for household %s", household_id)
    return pantry


def _to_model(session: Session, pantry: PantryORM) -> Pantry:
    items = session.execute(
        select(PantryItemORM.item_name)
        .where(PantryItemORM.pantry_id == pantry.id)
        .order_by(PantryItemORM.id.asc())
    ).scalars()
    return Pantry.model_validate(
        {"id": pantry.id, "household_id": pantry.household_id, "items": list(items)}
    )


def get_pantry(household_id: int) -> Pantry:
    """Return the household pantry, seeding the default staples on first access."""

    with session_scope() as session:
        return _to_model(session, _get_or_create(session, household_id))


def update_pantry(household_id: int, items: Iterable[str]) -> Pantry:
    """Replace the pantry contents with lower-cased, de-duplicated ``items``."""

    with session_scope() as session:
        pantry = _get_or_create(session, household_id)
        session.execute(delete(PantryItemORM).where(PantryItemORM.pantry_id == pantry.id))
        for item in _normalize(items):
            session.add(PantryItemORM(pantry_id=pantry.id, item_name=item))
        session.flush()
        return _to_model(session, pantry)


def clear_pantry(household_id: int) -> None:
    with session_scope() as session:
        pantry = _get_or_create(session, household_id)
        session.execute(delete(PantryItemORM).where(PantryItemORM.pantry_id == pantry.id))


def pantry_items(household_id: int) -> List[str]:
    """Return pantry item names without creating a pantry."""

    with session_scope() as session:
        rows = session.execute(
            select(PantryItemORM.item_name)
            .join(PantryORM, PantryORM.id == PantryItemORM.pantry_id)
            .where(PantryORM.household_id == household_id)
        ).scalars()
        return list(rows)


__all__ = [
    "DEFAULT_PANTRY_ITEMS",
    "get_pantry",
    "update_pantry",
    "clear_pantry",
    "pantry_items",
]
