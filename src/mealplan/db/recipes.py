"""Recipe catalog persistence helpers."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from mealplan.models.catalog import IngredientLine, Recipe, StepLine

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
    MealRecipeORM,
    RecipeIngredientORM,
    RecipeORM,
    RecipeStepORM,
    RecipeTagORM,
    TagORM,
)
from .repository import session_scope

logger = logging.getLogger(__name__)


def _to_model(session: Session, row: RecipeORM) -> Recipe:
    ingredients = session.execute(
        select(RecipeIngredientORM)
        .where(RecipeIngredientORM.recipe_id == row.id)
        .order_by(RecipeIngredientORM.position.asc(), RecipeIngredientORM.id.asc())
    ).scalars()
    steps = session.execute(
        select(RecipeStepORM)
        .where(RecipeStepORM.recipe_id == row.id)
        .order_by(RecipeStepORM.order.asc(), RecipeStepORM.id.asc())
    ).scalars()
    return Recipe.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "description": row.description,
            "slug": row.slug,
            "image": row.image,
            "ingredients": [
                {
                    "id": item.id,
                    "name": item.name,
                    "amount": item.amount,
                    "calories": item.calories,
                    "order": item.position,
                }
                for item in ingredients
            ],
            "steps": [{"id": step.id, "text": step.text, "order": step.order} for step in steps],
            "tags": load_tags(session, RecipeTagORM, "recipe_id", row.id),
        }
    )


def _validate(name: str, description: str) -> None:
    if not name.strip() or not description.strip():
        raise ValueError("name and description are required")


def list_recipes(tag: Optional[str] = None) -> List[Recipe]:
    """Return recipes ordered by name, optionally restricted to one tag."""

    with session_scope() as session:
        query = select(RecipeORM).order_by(RecipeORM.name.asc(), RecipeORM.id.asc())
        if tag:
            query = (
                query.join(RecipeTagORM, RecipeTagORM.recipe_id == RecipeORM.id)
                .join(TagORM, TagORM.id == RecipeTagORM.tag_id)
                .where(TagORM.name == tag.strip().lower())
            )
        rows = session.execute(query).scalars().all()
        return [_to_model(session, row) for row in rows]


def get_recipe(recipe_id: int) -> Optional[Recipe]:
    with session_scope() as session:
        row = session.get(RecipeORM, recipe_id)
        if row is None:
            return None
        return _to_model(session, row)


def get_recipe_id_from_slug(slug: str) -> Optional[int]:
    with session_scope() as session:
        return session.execute(select(RecipeORM.id).where(RecipeORM.slug == slug)).scalar_one_or_none()


def create_recipe(
    *,
    name: str,
    description: str,
    image: Optional[str] = None,
    ingredients: Sequence[IngredientLine] = (),
    steps: Sequence[StepLine] = (),
    tags: Iterable[str] = (),
) -> Recipe:
    """Insert a recipe with a unique slug derived from its name."""

    _validate(name, description)
    with session_scope() as session:
        db_recipe = RecipeORM(
            name=name.strip(),
            description=description.strip(),
            slug=unique_slug(session, RecipeORM, name),
            image=image,
        )
        session.add(db_recipe)
        session.flush()
        # Ids on a brand-new recipe never refer to its own rows.
        replace_children(
            session,
            RecipeIngredientORM,
            "recipe_id",
            db_recipe.id,
            [{**row, "id": None} for row in ingredient_rows(ingredients, with_calories=True)],
        )
        replace_children(
            session,
            RecipeStepORM,
            "recipe_id",
            db_recipe.id,
            [{**row, "id": None} for row in step_rows(steps)],
        )
        replace_tags(session, RecipeTagORM, "recipe_id", db_recipe.id, normalize_tags(tags))
        session.flush()
        logger.info("Created recipe %s (%s)", db_recipe.id, db_recipe.slug)
        return _to_model(session, db_recipe)


def update_recipe(
    recipe_id: int,
    *,
    name: str,
    description: str,
    image: Optional[str] = None,
    ingredients: Sequence[IngredientLine] = (),
    steps: Sequence[StepLine] = (),
    tags: Optional[Iterable[str]] = None,
) -> Recipe:
    """Replace a recipe's fields, ingredients and steps; ``tags=None`` keeps the current tags."""

    _validate(name, description)
    with session_scope() as session:
        db_recipe = session.get(RecipeORM, recipe_id)
        if db_recipe is None:
            raise ValueError(f"Recipe {recipe_id} not found")

        if db_recipe.name != name.strip():
            db_recipe.slug = unique_slug(session, RecipeORM, name, exclude_id=recipe_id)
        db_recipe.name = name.strip()
        db_recipe.description = description.strip()
        db_recipe.image = image
        replace_children(
            session,
            RecipeIngredientORM,
            "recipe_id",
            recipe_id,
            ingredient_rows(ingredients, with_calories=True),
        )
        replace_children(session, RecipeStepORM, "recipe_id", recipe_id, step_rows(steps))
        replace_tags(session, RecipeTagORM, "recipe_id", recipe_id, tags)
        session.flush()
        return _to_model(session, db_recipe)


def delete_recipe(recipe_id: int) -> None:
    with session_scope() as session:
        db_recipe = session.get(RecipeORM, recipe_id)
        if db_recipe is None:
            raise ValueError(f"Recipe {recipe_id} not found")
        session.execute(delete(MealRecipeORM).where(MealRecipeORM.recipe_id == recipe_id))
        session.execute(delete(RecipeTagORM).where(RecipeTagORM.recipe_id == recipe_id))
        session.execute(delete(RecipeStepORM).where(RecipeStepORM.recipe_id == recipe_id))
        session.execute(
            delete(RecipeIngredientORM).where(RecipeIngredientORM.recipe_id == recipe_id)
        )
        session.delete(db_recipe)
        logger.info("Deleted recipe %s", recipe_id)


__all__ = [
    "list_recipes",
    "get_recipe",
    "get_recipe_id_from_slug",
    "create_recipe",
    "update_recipe",
    "delete_recipe",
]
