"""Command-line interface for the meal planner."""

from __future__ import annotations

import json
from typing import Optional

import typer

from mealplan.config import get_settings
from mealplan.db.catalog import list_tags
from mealplan.db.households import purge_expired_join_codes
from mealplan.db.pantry import get_pantry
from mealplan.db.plans import get_plan
from mealplan.db.repository import init_database
from mealplan.db.shopping_list import get_shopping_list

app = typer.Typer(help="Meal planning maintenance commands.")


@app.command("init-db")
def init_db() -> None:
    """Create the SQLite database and its tables if they do not exist."""

    settings = get_settings()
    tables = init_database()
    typer.echo(f"Database ready at {settings.database_path} ({len(tables)} tables)")


@app.command("shopping-list")
def shopping_list(
    plan_id: int = typer.Argument(..., help="Plan ID to derive the list for."),
    pantry: bool = typer.Option(
        True, "--pantry/--no-pantry", help="Leave out items kept in the household pantry."
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Print the shopping list derived from a plan's meals.
    """

    plan = get_plan(plan_id)
    if plan is None:
        typer.secho(f"Plan {plan_id} not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    staples = get_pantry(plan.household_id).items if pantry and plan.household_id else []
    result = get_shopping_list(plan_id, pantry=staples)
    payload = result.model_dump(mode="json")
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command()
def tags() -> None:
    """List every known tag, one per line."""

    for tag in list_tags():
        typer.echo(tag)


@app.command("purge-join-codes")
def purge_join_codes() -> None:
    """Delete expired household join codes."""

    removed = purge_expired_join_codes()
    typer.echo(f"Removed {removed} expired join code(s).")


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``mealplan`` script."""
    app(prog_name="mealplan", args=argv)


if __name__ == "__main__":
    main()
