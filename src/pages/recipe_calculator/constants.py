"""Shared constants for the recipe calculator module."""

from __future__ import annotations

from dataclasses import dataclass

RECIPE_ROUTE: str = "/recipe_calculator"


@dataclass(frozen=True, slots=True)
class RecipeUILayout:
    """Typed container for the calculator's layout constants."""

    column_spacing: int
    container_padding: int
    container_border_radius: int
    button_spacing: int
    number_field_width: int
    name_field_width: int


RECIPE_UI_LAYOUT = RecipeUILayout(
    column_spacing=20,
    container_padding=20,
    container_border_radius=10,
    button_spacing=10,
    number_field_width=140,
    name_field_width=220,
)

LIQUIDS_HINT: str = "Liquids without an amount fill the rest of the total volume"
EMPTY_RECIPE_HINT: str = "👆 Enter a total volume, at least one liquid and one solid"
