"""Data access helpers for meals built from recipes."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from mealplan.models.catalog import IngredientLine, Meal, StepLine

from .catalog import (
    ingredient_rows,
    load_tags,
    normalize_tags,
    replace_children,
    replace_tags,
    step_rows,
    unique_slug,
)
from .models import (
    MealIngredientORM,
    MealORM,
    MealRecipeORM,
    MealStepORM,
    MealTagORM,
    PlanMealORM,
    RecipeORM,
    TagORM,
)
from .repository import session_scope

logger = logging.getLogger(__name__)


def _to_model(session: Session, row: MealORM) -> Meal:
    ingredients = session.execute(
        select(MealIngredientORM)
        .where(MealIngredientORM.meal_id == row.id)
        .order_by(MealIngredientORM.position.asc(), MealIngredientORM.id.asc())
    ).scalars()
    steps = session.execute(
        select(MealStepORM)
        .where(MealStepORM.meal_id == row.id)
        .order_by(MealStepORM.order.asc(), MealStepORM.id.asc())
    ).scalars()
    recipe_ids = session.execute(
        select(MealRecipeORM.recipe_id)
        .where(MealRecipeORM.meal_id == row.id)
        .order_by(MealRecipeORM.recipe_id.asc())
    ).scalars()
    return Meal.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "description": row.description,
            "slug": row.slug,
            "image": row.image,
            "ingredients": [
                {"id": item.id, "name": item.name, "amount": item.amount, "order": item.position}
                for item in ingredients
            ],
            "steps": [{"id": step.id, "text": step.text, "order": step.order} for step in steps],
            "recipes": [{"recipe_id": recipe_id} for recipe_id in recipe_ids],
            "tags": load_tags(session, MealTagORM, "meal_id", row.id),
        }
    )


def _validate(name: str, description: str) -> None:
    if not name.strip() or not description.strip():
        raise ValueError("name and description are required")


def _replace_recipes(session: Session, meal_id: int, recipe_ids: Iterable[int]) -> None:
    session.execute(delete(MealRecipeORM).where(MealRecipeORM.meal_id == meal_id))
    seen: set[int] = set()
    for recipe_id in recipe_ids:
        if recipe_id in seen:
            continue
        if session.get(RecipeORM, recipe_id) is None:
            raise ValueError(f"Recipe {recipe_id} not found")
        seen.add(recipe_id)
        session.add(MealRecipeORM(meal_id=meal_id, recipe_id=recipe_id))


def list_meals(tag: Optional[str] = None) -> List[Meal]:
    """Return meals ordered by name, optionally restricted to one tag."""

    with session_scope() as session:
        query = select(MealORM).order_by(MealORM.name.asc(), MealORM.id.asc())
        if tag:
            query = (
                query.join(MealTagORM, MealTagORM.meal_id == MealORM.id)
                .join(TagORM, TagORM.id == MealTagORM.tag_id)
                .where(TagORM.name == tag.strip().lower())
            )
        rows = session.execute(query).scalars().all()
        return [_to_model(session, row) for row in rows]


def get_meal(meal_id: int) -> Optional[Meal]:
    with session_scope() as session:
        row = session.get(MealORM, meal_id)
        if row is None:
            return None
        return _to_model(session, row)


def get_meal_id_from_slug(slug: str) -> Optional[int]:
    with session_scope() as session:
        return session.execute(select(MealORM.id).where(MealORM.slug == slug)).scalar_one_or_none()


def create_meal(
    *,
    name: str,
    description: str,
    image: Optional[str] = None,
    ingredients: Sequence[IngredientLine] = (),
    steps: Sequence[StepLine] = (),
    recipe_ids: Iterable[int] = (),
    tags: Iterable[str] = (),
) -> Meal:
    _validate(name, description)
    with session_scope() as session:
        db_meal = MealORM(
            name=name.strip(),
            description=description.strip(),
            slug=unique_slug(session, MealORM, name),
            image=image,
        )
        session.add(db_meal)
        session.flush()
        replace_children(
            session,
            MealIngredientORM,
            "meal_id",
            db_meal.id,
            [{**row, "id": None} for row in ingredient_rows(ingredients, with_calories=False)],
        )
        replace_children(
            session,
            MealStepORM,
            "meal_id",
            db_meal.id,
            [{**row, "id": None} for row in step_rows(steps)],
        )
        _replace_recipes(session, db_meal.id, recipe_ids)
        replace_tags(session, MealTagORM, "meal_id", db_meal.id, normalize_tags(tags))
        session.flush()
        logger.info("Created meal %s (%s)", db_meal.id, db_meal.slug)
        return _to_model(session, db_meal)


def update_meal(
    meal_id: int,
    *,
    name: str,
    description: str,
    image: Optional[str] = None,
    ingredients: Sequence[IngredientLine] = (),
    steps: Sequence[StepLine] = (),
    recipe_ids: Iterable[int] = (),
    tags: Optional[Iterable[str]] = None,
) -> Meal:
    """Replace a meal's fields, children and recipe links; ``tags=None`` keeps the current tags."""

    _validate(name, description)
    with session_scope() as session:
        db_meal = session.get(MealORM, meal_id)
        if db_meal is None:
            raise ValueError(f"Meal {meal_id} not found")

        if db_meal.name != name.strip():
            db_meal.slug = unique_slug(session, MealORM, name, exclude_id=meal_id)
        db_meal.name = name.strip()
        db_meal.description = description.strip()
        db_meal.image = image
        replace_children(
            session,
            MealIngredientORM,
            "meal_id",
            meal_id,
            ingredient_rows(ingredients, with_calories=False),
        )
        replace_children(session, MealStepORM, "meal_id", meal_id, step_rows(steps))
        _replace_recipes(session, meal_id, recipe_ids)
        replace_tags(session, MealTagORM, "meal_id", meal_id, tags)
        session.flush()
        return _to_model(session, db_meal)


def delete_meal(meal_id: int) -> None:
    """Remove a meal along with its plan memberships."""

    with session_scope() as session:
        db_meal = session.get(MealORM, meal_id)
        if db_meal is None:
            raise ValueError(f"Meal {meal_id} not found")
        session.execute(delete(PlanMealORM).where(PlanMealORM.meal_id == meal_id))
        session.execute(delete(MealRecipeORM).where(MealRecipeORM.meal_id == meal_id))
        session.execute(delete(MealTagORM).where(MealTagORM.meal_id == meal_id))
        session.execute(delete(MealStepORM).where(MealStepORM.meal_id == meal_id))
        session.execute(delete(MealIngredientORM).where(MealIngredientORM.meal_id == meal_id))
        session.delete(db_meal)
        logger.info("Deleted meal %s", meal_id)


__all__ = [
    "list_meals",
    "get_meal",
    "get_meal_id_from_slug",
    "create_meal",
    "update_meal",
    "delete_meal",
]
