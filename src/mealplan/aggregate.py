"""Ingredient aggregation for plans and shopping lists."""

from __future__ import annotations

import re
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from mealplan.models.plan import PlanIngredient

_AMOUNT_PATTERN = re.compile(
    r"^\s*(?:(?P<whole>\d+)\s+)?(?P<number>\d+/\d+|\d+(?:\.\d+)?)\s*(?P<unit>.*?)\s*$"
)
_FRACTION_PATTERN = re.compile(r"^\s*(?:\d+\s+)?\d+/\d+")


def parse_amount(amount: str) -> Optional[Tuple[Fraction, str]]:
    """Split ``"1 1/2 cups"`` into ``(Fraction(3, 2), "cups")``; ``None`` when not numeric."""

    match = _AMOUNT_PATTERN.match(amount or "")
    if match is None:
        return None
    try:
        value = Fraction(match.group("number"))
    except ZeroDivisionError:
        return None
    if match.group("whole"):
        if value >= 1:
            # "2 3" is two numbers, not a mixed fraction.
            return None
        value += int(match.group("whole"))
    return value, match.group("unit").lower()


def format_amount(value: Fraction, unit: str, *, as_fraction: bool = False) -> str:
    """Render a summed amount; ``as_fraction`` keeps the "1 1/2" notation instead of decimals."""

    if value.denominator == 1:
        number = str(value.numerator)
    elif as_fraction:
        whole, rest = divmod(value.numerator, value.denominator)
        number = f"{rest}/{value.denominator}"
        if whole:
            number = f"{whole} {number}"
    else:
        number = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return f"{number} {unit}".strip()


class _Accumulator:
    def __init__(self, name: str) -> None:
        self.name = name
        self.totals: Dict[str, Fraction] = {}
        self.fractional: Set[str] = set()
        self.text: List[str] = []

    def add(self, amount: str) -> None:
        amount = (amount or "").strip()
        if not amount:
            return
        parsed = parse_amount(amount)
        if parsed is None:
            self.text.append(amount)
            return
        value, unit = parsed
        self.totals[unit] = self.totals.get(unit, Fraction(0)) + value
        if _FRACTION_PATTERN.match(amount):
            self.fractional.add(unit)

    def render(self) -> PlanIngredient:
        parts = [
            format_amount(value, unit, as_fraction=unit in self.fractional)
            for unit, value in self.totals.items()
        ]
        parts.extend(self.text)
        return PlanIngredient(name=self.name, amount=" + ".join(parts))


def aggregate_ingredients(rows: Iterable[Tuple[str, str]]) -> List[PlanIngredient]:
    """Merge ``(name, amount)`` rows by case-insensitive name, keeping first-seen order.

    Numeric amounts sharing a unit are summed; everything else is joined with ``" + "``.
    """

    merged: Dict[str, _Accumulator] = {}
    for name, amount in rows:
        display = (name or "").strip()
        if not display:
            continue
        key = display.lower()
        if key not in merged:
            merged[key] = _Accumulator(display)
        merged[key].add(amount)
    return [accumulator.render() for accumulator in merged.values()]


def without_pantry_items(
    ingredients: Sequence[PlanIngredient],
    pantry: Iterable[str],
) -> List[PlanIngredient]:
    """Drop ingredients whose lower-cased name contains any pantry item."""

    staples = [item.strip().lower() for item in pantry if item and item.strip()]
    return [
        ingredient
        for ingredient in ingredients
        if not any(staple in ingredient.name.lower() for staple in staples)
    ]


__all__ = ["parse_amount", "format_amount", "aggregate_ingredients", "without_pantry_items"]
