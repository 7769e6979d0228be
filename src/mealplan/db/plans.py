"""Meal plan persistence helpers."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from mealplan.aggregate import aggregate_ingredients
from mealplan.models.plan import Plan, PlanIngredient

from .models import MealIngredientORM, MealORM, PlanMealORM, PlanORM, ShoppingStatusORM
from .repository import session_scope

logger = logging.getLogger(__name__)


def _to_model(session: Session, row: PlanORM) -> Plan:
    meal_ids = session.execute(
        select(PlanMealORM.meal_id).where(PlanMealORM.plan_id == row.id).order_by(PlanMealORM.id.asc())
    ).scalars()
    return Plan.model_validate(
        {
            "id": row.id,
            "start_date": row.start_date,
            "end_date": row.end_date,
            "household_id": row.household_id,
            "meals": list(meal_ids),
        }
    )


def validate_plan_dates(start_date: date, end_date: date, *, today: Optional[date] = None) -> None:
    """Raise ``ValueError`` unless both dates are today or later and start <= end."""

    today = today or date.today()
    if start_date < today or end_date < today:
        raise ValueError("start date and end date must be in the future")
    if start_date > end_date:
        raise ValueError("start date must be before end date")


def _owned_plan(session: Session, plan_id: int, household_id: Optional[int]) -> PlanORM:
    row = session.get(PlanORM, plan_id)
    if row is None:
        raise ValueError(f"Plan {plan_id} not found")
    if household_id is not None and row.household_id != household_id:
        raise PermissionError("Unauthorized request")
    return row


def _replace_meals(session: Session, plan_id: int, meal_ids: Iterable[int]) -> None:
    session.execute(delete(PlanMealORM).where(PlanMealORM.plan_id == plan_id))
    for meal_id in meal_ids:
        if session.get(MealORM, meal_id) is None:
            raise ValueError(f"Meal {meal_id} not found")
        session.add(PlanMealORM(plan_id=plan_id, meal_id=meal_id))


def list_plans(household_id: int) -> List[Plan]:
    with session_scope() as session:
        rows = session.execute(
            select(PlanORM)
            .where(PlanORM.household_id == household_id)
            .order_by(PlanORM.start_date.asc(), PlanORM.id.asc())
        ).scalars().all()
        return [_to_model(session, row) for row in rows]


def get_last_plan(household_id: int) -> Optional[Plan]:
    """Return the plan with the latest start date."""

    with session_scope() as session:
        row = session.execute(
            select(PlanORM)
            .where(PlanORM.household_id == household_id)
            .order_by(PlanORM.start_date.desc(), PlanORM.id.desc())
            .limit(1)
        ).scalar_one_or_none()
        return _to_model(session, row) if row is not None else None


def list_future_plans(household_id: int, *, today: Optional[date] = None) -> List[Plan]:
    """Return plans that have not ended yet, earliest first."""

    today = today or date.today()
    with session_scope() as session:
        rows = session.execute(
            select(PlanORM)
            .where(PlanORM.household_id == household_id, PlanORM.end_date >= today)
            .order_by(PlanORM.start_date.asc(), PlanORM.id.asc())
        ).scalars().all()
        return [_to_model(session, row) for row in rows]


def get_next_plan(household_id: int, *, today: Optional[date] = None) -> Optional[Plan]:
    """Return the current or upcoming plan, if any."""

    plans = list_future_plans(household_id, today=today)
    return plans[0] if plans else None


def get_plan(plan_id: int, household_id: Optional[int] = None) -> Optional[Plan]:
    """Return a plan; raises ``PermissionError`` when it belongs to another household."""

    with session_scope() as session:
        row = session.get(PlanORM, plan_id)
        if row is None:
            return None
        if household_id is not None and row.household_id != household_id:
            raise PermissionError("Unauthorized request")
        return _to_model(session, row)


def create_plan(
    household_id: int,
    *,
    start_date: date,
    end_date: date,
    meal_ids: Iterable[int] = (),
) -> Plan:
    validate_plan_dates(start_date, end_date)
    with session_scope() as session:
        row = PlanORM(start_date=start_date, end_date=end_date, household_id=household_id)
        session.add(row)
        session.flush()
        _replace_meals(session, row.id, meal_ids)
        session.flush()
        logger.info(
            "Created plan %s", row.id, extra={"household_id": household_id, "plan_id": row.id}
        )
        return _to_model(session, row)


def update_plan(
    plan_id: int,
    household_id: int,
    *,
    meal_ids: Iterable[int],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Plan:
    """Replace the plan's meals and, when given, its date range."""

    with session_scope() as session:
        row = _owned_plan(session, plan_id, household_id)
        new_start = start_date or row.start_date
        new_end = end_date or row.end_date
        if new_start > new_end:
            raise ValueError("start date must be before end date")
        row.start_date = new_start
        row.end_date = new_end
        _replace_meals(session, plan_id, meal_ids)
        session.flush()
        return _to_model(session, row)


def delete_plan(plan_id: int, household_id: int) -> None:
    with session_scope() as session:
        row = _owned_plan(session, plan_id, household_id)
        session.execute(delete(ShoppingStatusORM).where(ShoppingStatusORM.plan_id == plan_id))
        session.execute(delete(PlanMealORM).where(PlanMealORM.plan_id == plan_id))
        session.delete(row)
        logger.info("Deleted plan %s", plan_id, extra={"plan_id": plan_id})


def plan_ingredient_rows(plan_id: int) -> List[Tuple[str, str]]:
    """Raw ``(name, amount)`` rows for every meal in the plan, in plan order."""

    with session_scope() as session:
        rows = session.execute(
            select(MealIngredientORM.name, MealIngredientORM.amount)
            .join(PlanMealORM, PlanMealORM.meal_id == MealIngredientORM.meal_id)
            .where(PlanMealORM.plan_id == plan_id)
            .order_by(PlanMealORM.id.asc(), MealIngredientORM.position.asc(), MealIngredientORM.id.asc())
        ).all()
        return [(name, amount) for name, amount in rows]


def get_plan_ingredients(plan_id: int, household_id: Optional[int] = None) -> List[PlanIngredient]:
    """Aggregated ingredient requirements of a plan."""

    with session_scope() as session:
        _owned_plan(session, plan_id, household_id)
    return aggregate_ingredients(plan_ingredient_rows(plan_id))


__all__ = [
    "validate_plan_dates",
    "list_plans",
    "get_last_plan",
    "list_future_plans",
    "get_next_plan",
    "get_plan",
    "create_plan",
    "update_plan",
    "delete_plan",
    "plan_ingredient_rows",
    "get_plan_ingredients",
]
