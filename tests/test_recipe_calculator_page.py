from __future__ import annotations

from urllib.parse import unquote

import flet as ft

from core.recipe.persistence import InMemoryFragmentStore
from pages.recipe_calculator.page import RecipeCalculatorContent


def _content(store: InMemoryFragmentStore | None = None) -> RecipeCalculatorContent:
    content = RecipeCalculatorContent(store=store or InMemoryFragmentStore())
    content.build_content()
    return content


def _solid_labels(content: RecipeCalculatorContent) -> list[str]:
    row = content.solids_column.controls[0]
    return [control.label for control in row.controls if isinstance(control, ft.TextField)]


def test_columns_exist_before_build() -> None:
    content = RecipeCalculatorContent(store=InMemoryFragmentStore())

    content.render_ingredients()
    content.on_state_change(content.state_manager.state)

    assert content.settings_column.controls
    assert content.liquids_column.controls == []
    assert content.solids_column.controls == []
    assert content.recipe_column.controls


def test_volume_units_change_relabels_inputs() -> None:
    content = _content()
    content.add_solid(None)
    units_row = content.settings_column.controls[0]

    content.on_volume_units_change("L")

    assert content.total_volume_field.label == "Total Volume (L)"
    assert "Displacement (L/g)" in _solid_labels(content)
    assert "Concentration (g/L)" in _solid_labels(content)
    assert content.settings_column.controls[0] is units_row


def test_mass_units_change_relabels_solids() -> None:
    store = InMemoryFragmentStore()
    content = _content(store)
    content.add_solid(None)

    content.on_mass_units_change("oz")

    assert content.total_volume_field.label == "Total Volume (mL)"
    assert "Displacement (mL/oz)" in _solid_labels(content)
    assert "Concentration (oz/mL)" in _solid_labels(content)
    assert '"massUnits":"oz"' in unquote(store.fragment)
