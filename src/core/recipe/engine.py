"""Distribution of a recipe's total volume across its liquids and solids."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from core.recipe.models import Liquid, RecipeState

DISPLAY_SIGNIFICANT_DIGITS = 4


@dataclass(frozen=True)
class RecipeLine:
    """One dispensed ingredient."""

    name: str
    amount: float
    units: str

    @property
    def display_amount(self) -> str:
        return to_precision(self.amount, DISPLAY_SIGNIFICANT_DIGITS)

    def __str__(self) -> str:
        return f"{self.name}: {self.display_amount} {self.units}"


@dataclass(frozen=True)
class RecipeBreakdown:
    """Intermediate volumes behind a computed recipe."""

    total_volume: float
    solids_displacement_volume: float
    percentage_liquid_volume: float
    remainder: float
    fill_liquids: tuple[Liquid, ...]
    percentage_liquids: tuple[Liquid, ...]

    @property
    def fill_share(self) -> float | None:
        """Volume each fill liquid receives, None when no liquid fills the remainder."""

        if not self.fill_liquids:
            return None
        return self.remainder / len(self.fill_liquids)


def is_set(value: float | None) -> bool:
    """True for finite numbers; None, NaN and infinities count as unset."""

    return value is not None and math.isfinite(value)


def compute_breakdown(state: RecipeState) -> RecipeBreakdown | None:
    """Compute the intermediate volumes, or None when the recipe cannot be computed."""

    volume = state.total_volume
    if not is_set(volume) or not state.liquids or not state.solids:
        return None

    liquids = state.liquids.values()
    fill_liquids = tuple(liquid for liquid in liquids if not is_set(liquid.amount))
    percentage_liquids = tuple(liquid for liquid in liquids if is_set(liquid.amount))

    solids_displacement_volume = sum(
        (_operand(solid.amount) * volume * _operand(solid.displacement) for solid in state.solids.values()),
        0.0,
    )
    percentage_liquid_volume = sum(((liquid.amount / 100) * volume for liquid in percentage_liquids), 0.0)
    remainder = volume - (solids_displacement_volume + percentage_liquid_volume)

    return RecipeBreakdown(
        total_volume=volume,
        solids_displacement_volume=solids_displacement_volume,
        percentage_liquid_volume=percentage_liquid_volume,
        remainder=remainder,
        fill_liquids=fill_liquids,
        percentage_liquids=percentage_liquids,
    )


def compute_recipe(state: RecipeState) -> list[RecipeLine]:
    """Return the dispensed amount of every ingredient.

    Rows come out as fill liquids, then percentage liquids, then solids, each group
    in insertion order. Displacement only shrinks the remainder shared by the fill
    liquids; a solid's own row is its concentration times the total volume.
    """

    breakdown = compute_breakdown(state)
    if breakdown is None:
        return []

    volume = breakdown.total_volume
    lines: list[RecipeLine] = []

    for liquid in breakdown.fill_liquids:
        lines.append(RecipeLine(liquid.name, breakdown.remainder / len(breakdown.fill_liquids), state.volume_units))

    for liquid in breakdown.percentage_liquids:
        lines.append(RecipeLine(liquid.name, volume * (liquid.amount / 100), state.volume_units))

    for solid in state.solids.values():
        lines.append(RecipeLine(solid.name, volume * _operand(solid.amount), state.mass_units))

    return lines


def to_precision(value: float, digits: int) -> str:
    """Format like JavaScript's Number.prototype.toPrecision."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0" if digits == 1 else "0." + "0" * (digits - 1)

    sign = "-" if value < 0 else ""
    magnitude = abs(Decimal(value))
    exponent = magnitude.adjusted()
    rounded = _round_significant(magnitude, exponent, digits)
    if rounded.adjusted() > exponent:
        # 9.9996 rounds up to 10.00
        exponent = rounded.adjusted()
        rounded = _round_significant(magnitude, exponent, digits)

    if exponent < -6 or exponent >= digits:
        mantissa = rounded.scaleb(-exponent)
        exponent_sign = "+" if exponent >= 0 else "-"
        return f"{sign}{mantissa:f}e{exponent_sign}{abs(exponent)}"
    return f"{sign}{rounded:f}"


def _round_significant(magnitude: Decimal, exponent: int, digits: int) -> Decimal:
    return magnitude.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=ROUND_HALF_UP)


def _operand(value: float | None) -> float:
    # Unset solid fields flow through the arithmetic as NaN
    return math.nan if value is None else value
