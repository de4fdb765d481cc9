"""
UI component creation for the recipe calculator page.
Handles unit inputs, liquid and solid rows, and the computed recipe list.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Final

import flet as ft

from core.recipe.engine import RecipeLine, is_set
from core.recipe.models import Liquid, Solid

from .constants import RECIPE_UI_LAYOUT

TextHandler = Callable[[str], None]
IngredientTextHandler = Callable[[str, str], None]
IngredientHandler = Callable[[str], None]

_COPY_HEADER: Final[str] = "Ingredient\tAmount\tUnit"


def format_number(value: float | None) -> str:
    """Render a stored number back into an input field; unset and invalid show as blank."""

    if not is_set(value):
        return ""
    return format(value, ".15g")


def total_volume_label(volume_units: str) -> str:
    return f"Total Volume ({volume_units})"


class RecipeUIBuilder:
    """Builds UI components for the recipe calculator."""

    def create_styled_container(self, content: ft.Control, expand: int = 1) -> ft.Container:
        return ft.Container(
            content=content,
            padding=RECIPE_UI_LAYOUT.container_padding,
            border_radius=RECIPE_UI_LAYOUT.container_border_radius,
            bgcolor=ft.Colors.BLUE_GREY_100,
            expand=expand,
        )

    def create_units_row(
        self,
        volume_units: str,
        mass_units: str,
        on_volume_units_change: TextHandler,
        on_mass_units_change: TextHandler,
    ) -> ft.Row:
        """Create the volume and mass unit label inputs."""

        return ft.Row(
            controls=[
                ft.TextField(
                    label="Volume Units",
                    value=volume_units,
                    width=RECIPE_UI_LAYOUT.number_field_width,
                    on_change=lambda event: on_volume_units_change(event.control.value or ""),
                ),
                ft.TextField(
                    label="Mass Units",
                    value=mass_units,
                    width=RECIPE_UI_LAYOUT.number_field_width,
                    on_change=lambda event: on_mass_units_change(event.control.value or ""),
                ),
            ],
            spacing=RECIPE_UI_LAYOUT.button_spacing,
        )

    def create_total_volume_field(
        self,
        volume_units: str,
        total_volume: float | None,
        on_total_volume_change: TextHandler,
    ) -> ft.TextField:
        return ft.TextField(
            label=total_volume_label(volume_units),
            value=format_number(total_volume),
            width=RECIPE_UI_LAYOUT.name_field_width,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=lambda event: on_total_volume_change(event.control.value or ""),
        )

    def create_liquid_rows(
        self,
        liquids: Sequence[tuple[str, Liquid]],
        on_remove: IngredientHandler,
        on_name_change: IngredientTextHandler,
        on_amount_change: IngredientTextHandler,
    ) -> list[ft.Row]:
        """Create one editable row per liquid."""

        return [
            ft.Row(
                controls=[
                    ft.TextField(
                        label="Name",
                        value=liquid.name,
                        width=RECIPE_UI_LAYOUT.name_field_width,
                        on_change=lambda event, key=key: on_name_change(key, event.control.value or ""),
                    ),
                    ft.TextField(
                        label="Volume (%)",
                        value=format_number(liquid.amount),
                        width=RECIPE_UI_LAYOUT.number_field_width,
                        keyboard_type=ft.KeyboardType.NUMBER,
                        on_change=lambda event, key=key: on_amount_change(key, event.control.value or ""),
                    ),
                    self._create_remove_button(key, on_remove),
                ],
                spacing=RECIPE_UI_LAYOUT.button_spacing,
            )
            for key, liquid in liquids
        ]

    def create_solid_rows(
        self,
        solids: Sequence[tuple[str, Solid]],
        volume_units: str,
        mass_units: str,
        known_solid_names: Sequence[str],
        on_remove: IngredientHandler,
        on_name_change: IngredientTextHandler,
        on_known_solid_select: IngredientTextHandler,
        on_displacement_change: IngredientTextHandler,
        on_amount_change: IngredientTextHandler,
    ) -> list[ft.Row]:
        """Create one editable row per solid, with a catalog picker when one is loaded."""

        rows: list[ft.Row] = []
        for key, solid in solids:
            controls: list[ft.Control] = []
            if known_solid_names:
                controls.append(
                    ft.Dropdown(
                        label="Known solid",
                        value=solid.name if solid.name in known_solid_names else None,
                        options=[ft.dropdown.Option(name) for name in known_solid_names],
                        width=RECIPE_UI_LAYOUT.name_field_width,
                        on_change=lambda event, key=key: on_known_solid_select(key, event.control.value or ""),
                    )
                )
            controls.extend(
                [
                    ft.TextField(
                        label="Name",
                        value=solid.name,
                        width=RECIPE_UI_LAYOUT.name_field_width,
                        on_change=lambda event, key=key: on_name_change(key, event.control.value or ""),
                    ),
                    ft.TextField(
                        label=f"Displacement ({volume_units}/{mass_units})",
                        value=format_number(solid.displacement),
                        width=RECIPE_UI_LAYOUT.number_field_width,
                        keyboard_type=ft.KeyboardType.NUMBER,
                        on_change=lambda event, key=key: on_displacement_change(key, event.control.value or ""),
                    ),
                    ft.TextField(
                        label=f"Concentration ({mass_units}/{volume_units})",
                        value=format_number(solid.amount),
                        width=RECIPE_UI_LAYOUT.number_field_width,
                        keyboard_type=ft.KeyboardType.NUMBER,
                        on_change=lambda event, key=key: on_amount_change(key, event.control.value or ""),
                    ),
                    self._create_remove_button(key, on_remove),
                ]
            )
            rows.append(ft.Row(controls=controls, spacing=RECIPE_UI_LAYOUT.button_spacing, wrap=True))
        return rows

    def create_add_button(self, label: str, on_add: Callable[[ft.ControlEvent], None]) -> ft.ElevatedButton:
        return ft.ElevatedButton(
            label,
            on_click=on_add,
            style=ft.ButtonStyle(bgcolor=ft.Colors.PRIMARY, color=ft.Colors.WHITE),
        )

    def create_recipe_lines(self, lines: Sequence[RecipeLine]) -> ft.Column:
        """Create the computed recipe list, one selectable line per ingredient."""

        return ft.Column([ft.Text(str(line), size=16, selectable=True) for line in lines])

    def create_recipe_copy_section(self, lines: Sequence[RecipeLine]) -> ft.ExpansionTile:
        """Create the copy-friendly recipe section."""

        rows = [_COPY_HEADER]
        rows.extend(f"{line.name}\t{line.display_amount}\t{line.units}" for line in lines)

        return ft.ExpansionTile(
            title=ft.Text("📋 Copy Recipe"),
            controls=[
                ft.TextField(
                    value="\n".join(rows),
                    multiline=True,
                    read_only=True,
                    min_lines=3,
                    max_lines=15,
                )
            ],
            initially_expanded=False,
        )

    def _create_remove_button(self, key: str, on_remove: IngredientHandler) -> ft.IconButton:
        return ft.IconButton(
            icon=ft.Icons.DELETE_OUTLINE,
            tooltip="Remove",
            icon_color=ft.Colors.ERROR,
            on_click=lambda _event, key=key: on_remove(key),
        )
