"""Helpers shared by the recipe and meal repositories."""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from mealplan.models.catalog import IngredientLine, StepLine

from .models import TagORM
from .repository import session_scope

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Return a URL-safe, lower-case ASCII slug for ``value``."""

    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", normalized.lower()).strip("-")
    return slug or "untitled"


def unique_slug(session: Session, model, name: str, exclude_id: Optional[int] = None) -> str:
    """Slug for ``name`` that is not yet used by ``model`` (``name``, ``name-1``, ...)."""

    base = slugify(name)
    slug = base
    suffix = 0
    while True:
        query = select(model.id).where(model.slug == slug)
        if exclude_id is not None:
            query = query.where(model.id != exclude_id)
        if session.execute(query).first() is None:
            break
        suffix += 1
        logger.debug("Slug %s already exists, trying suffix %s", slug, suffix)
        slug = f"{base}-{suffix}"
    return slug


def step_rows(steps: Sequence[StepLine]) -> list[dict[str, object]]:
    """Row values for steps, renumbered densely by their submitted order."""

    ordered = sorted(enumerate(steps), key=lambda pair: (pair[1].order, pair[0]))
    return [
        {"id": step.id, "order": position, "text": step.text}
        for position, (_, step) in enumerate(ordered, start=1)
    ]


def ingredient_rows(
    ingredients: Sequence[IngredientLine],
    *,
    with_calories: bool,
) -> list[dict[str, object]]:
    """Row values for ingredients; entries without an ``order`` keep their list position."""

    ordered = sorted(
        enumerate(ingredients),
        key=lambda pair: (pair[1].order if pair[1].order is not None else pair[0] + 1, pair[0]),
    )
    rows: list[dict[str, object]] = []
    for position, (_, ingredient) in enumerate(ordered, start=1):
        row: dict[str, object] = {
            "id": ingredient.id,
            "position": position,
            "name": ingredient.name.strip(),
            "amount": ingredient.amount.strip(),
        }
        if with_calories:
            row["calories"] = ingredient.calories
        rows.append(row)
    return rows


def replace_children(
    session: Session,
    model,
    parent_column: str,
    parent_id: int,
    rows: Iterable[dict[str, object]],
) -> None:
    """Make the child rows of ``parent_id`` match ``rows``.

    Rows carrying the id of an existing child are updated in place so persisted
    records keep their identity; rows without a matching id are inserted and
    children missing from ``rows`` are deleted.
    """

    parent_attr = getattr(model, parent_column)
    existing = {
        row.id: row
        for row in session.execute(select(model).where(parent_attr == parent_id)).scalars()
    }
    kept: set[int] = set()
    for values in rows:
        values = dict(values)
        row_id = values.pop("id", None)
        current = existing.get(row_id) if row_id is not None else None
        if current is None or row_id in kept:
            session.add(model(**{parent_column: parent_id}, **values))
            continue
        for key, value in values.items():
            setattr(current, key, value)
        kept.add(row_id)

    for row_id, row in existing.items():
        if row_id not in kept:
            session.delete(row)


def _tag_id(session: Session, name: str) -> int:
    tag = session.execute(select(TagORM).where(TagORM.name == name)).scalar_one_or_none()
    if tag is None:
        tag = TagORM(name=name)
        session.add(tag)
        session.flush()
    return tag.id


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lower-case, strip and de-duplicate tags, keeping first occurrence order."""

    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def replace_tags(
    session: Session,
    link_model,
    owner_column: str,
    owner_id: int,
    tags: Optional[Iterable[str]],
) -> None:
    """Replace tag links for an owner; ``None`` leaves the current tags untouched."""

    if tags is None:
        return
    owner_attr = getattr(link_model, owner_column)
    session.execute(delete(link_model).where(owner_attr == owner_id))
    for name in normalize_tags(tags):
        session.add(link_model(**{owner_column: owner_id, "tag_id": _tag_id(session, name)}))


def load_tags(session: Session, link_model, owner_column: str, owner_id: int) -> list[str]:
    owner_attr = getattr(link_model, owner_column)
    rows = session.execute(
        select(TagORM.name)
        .join(link_model, link_model.tag_id == TagORM.id)
        .where(owner_attr == owner_id)
        .order_by(TagORM.name.asc())
    ).scalars()
    return list(rows)


def list_tags() -> list[str]:
    """Return every known tag name, alphabetically."""

    with session_scope() as session:
        return list(session.execute(select(TagORM.name).order_by(TagORM.name.asc())).scalars())


__all__ = [
    "slugify",
    "unique_slug",
    "step_rows",
    "ingredient_rows",
    "replace_children",
    "normalize_tags",
    "replace_tags",
    "load_tags",
    "list_tags",
]
