"""Recipe calculator page orchestration."""

from __future__ import annotations

import asyncio
import logging

import flet as ft
from flet.core.control_event import ControlEvent

from core.recipe.exceptions import RecipeStateError
from core.recipe.models import RecipeState
from core.recipe.persistence import FragmentStore, RecipeStateRepository
from shared.known_solids_service import KnownSolidsLookup, get_known_solids_service

from .calculation_service import RecipeCalculationService
from .constants import EMPTY_RECIPE_HINT, LIQUIDS_HINT, RECIPE_UI_LAYOUT
from .route_store import FletRouteFragmentStore
from .state_manager import RecipeStateManager
from .ui_components import RecipeUIBuilder, total_volume_label

logger = logging.getLogger(__name__)


class RecipeCalculatorContent(ft.Container):
    def __init__(self, page: ft.Page | None = None, store: FragmentStore | None = None) -> None:
        super().__init__()
        logger.info("🚀 Initializing RecipeCalculatorContent")
        self.page: ft.Page | None = page
        if store is None:
            store = FletRouteFragmentStore(page)
        self.state_manager = RecipeStateManager(RecipeStateRepository(store))
        self.calculation_service = RecipeCalculationService(self.state_manager)
        self.known_solids = KnownSolidsLookup(get_known_solids_service())
        self.ui_builder = RecipeUIBuilder()
        self.settings_column = ft.Column(spacing=RECIPE_UI_LAYOUT.button_spacing)
        self.total_volume_field: ft.TextField | None = None
        self.liquids_column = ft.Column(spacing=RECIPE_UI_LAYOUT.button_spacing)
        self.solids_column = ft.Column(spacing=RECIPE_UI_LAYOUT.button_spacing)
        self.recipe_column = ft.Column()
        self.main_content: ft.Column | None = None

    def update(self) -> None:
        """Update the page if available."""

        if self.page:
            self.page.update()

    def build_content(self) -> "RecipeCalculatorContent":
        logger.info("🔧 Setting up UI...")
        self.setup_ui()
        logger.info("📋 Loading recipe from route...")
        self.state_manager.subscribe(self.on_state_change)
        self.state_manager.load()
        self.render_ingredients()
        self.start_known_solids_lookup()
        logger.info("✅ Build complete")
        self.content = self.main_content
        return self

    def will_unmount(self) -> None:
        self.known_solids.cancel()

    def setup_ui(self) -> None:
        """Lay out the input and recipe columns."""

        inputs = ft.Column(
            controls=[
                ft.Text("🧪 Recipe Calculator", size=24, weight=ft.FontWeight.BOLD),
                self.settings_column,
                ft.Text("💧 Liquids", size=20, weight=ft.FontWeight.BOLD),
                ft.Text(LIQUIDS_HINT, size=14, color=ft.Colors.GREY),
                self.ui_builder.create_add_button("➕ Add Liquid", self.add_liquid),
                self.liquids_column,
                ft.Text("🧂 Solids", size=20, weight=ft.FontWeight.BOLD),
                self.ui_builder.create_add_button("➕ Add Solid", self.add_solid),
                self.solids_column,
            ],
            spacing=RECIPE_UI_LAYOUT.column_spacing,
        )
        results = ft.Column(
            controls=[ft.Text("📋 Recipe", size=24, weight=ft.FontWeight.BOLD), self.recipe_column],
            spacing=RECIPE_UI_LAYOUT.column_spacing,
        )

        self.main_content = ft.Column(
            controls=[
                ft.Row(
                    controls=[
                        self.ui_builder.create_styled_container(inputs, expand=2),
                        self.ui_builder.create_styled_container(results, expand=1),
                    ],
                    vertical_alignment=ft.CrossAxisAlignment.START,
                    spacing=RECIPE_UI_LAYOUT.column_spacing,
                    expand=True,
                )
            ],
            expand=True,
        )

    def render_ingredients(self) -> None:
        """Rebuild the input rows from the current state."""

        state = self.state_manager.state
        self.total_volume_field = self.ui_builder.create_total_volume_field(
            state.volume_units,
            state.total_volume,
            self.on_total_volume_change,
        )
        self.settings_column.controls = [
            self.ui_builder.create_units_row(
                state.volume_units,
                state.mass_units,
                self.on_volume_units_change,
                self.on_mass_units_change,
            ),
            self.total_volume_field,
        ]
        self.liquids_column.controls = self.ui_builder.create_liquid_rows(
            state.liquids.items(),
            self.remove_ingredient,
            self.on_name_change,
            self.on_liquid_amount_change,
        )
        self.render_solids()

    def render_solids(self) -> None:
        state = self.state_manager.state
        self.solids_column.controls = self.ui_builder.create_solid_rows(
            state.solids.items(),
            state.volume_units,
            state.mass_units,
            self.known_solids.names(),
            self.remove_ingredient,
            self.on_name_change,
            self.on_known_solid_select,
            self.on_solid_displacement_change,
            self.on_solid_amount_change,
        )
        self.update()

    def render_unit_labels(self) -> None:
        """Relabel unit-dependent inputs without rebuilding the unit fields being edited."""

        if self.total_volume_field is not None:
            self.total_volume_field.label = total_volume_label(self.state_manager.state.volume_units)
        self.render_solids()

    def on_state_change(self, _state: RecipeState) -> None:
        """Recompute the recipe after every change."""

        lines = self.calculation_service.calculate()
        if not lines:
            self.recipe_column.controls = [ft.Text(EMPTY_RECIPE_HINT, size=14, color=ft.Colors.GREY)]
        else:
            self.recipe_column.controls = [
                self.ui_builder.create_recipe_lines(lines),
                self.ui_builder.create_recipe_copy_section(lines),
            ]
        self.update()

    def add_liquid(self, _event: ControlEvent) -> None:
        self.state_manager.add_liquid()
        self.render_ingredients()

    def add_solid(self, _event: ControlEvent) -> None:
        self.state_manager.add_solid()
        self.render_solids()

    def remove_ingredient(self, ingredient_id: str) -> None:
        try:
            self.state_manager.remove_ingredient(ingredient_id)
        except RecipeStateError:
            logger.exception("Could not remove ingredient %s", ingredient_id)
            return
        self.render_ingredients()

    def on_volume_units_change(self, value: str) -> None:
        self.state_manager.set_volume_units(value)
        self.render_unit_labels()

    def on_mass_units_change(self, value: str) -> None:
        self.state_manager.set_mass_units(value)
        self.render_unit_labels()

    def on_total_volume_change(self, value: str) -> None:
        self.state_manager.set_total_volume(value)

    def on_name_change(self, ingredient_id: str, value: str) -> None:
        self._update(ingredient_id, "name", value)

    def on_liquid_amount_change(self, ingredient_id: str, value: str) -> None:
        self._update_numeric(ingredient_id, "amount", value)

    def on_solid_displacement_change(self, ingredient_id: str, value: str) -> None:
        self._update_numeric(ingredient_id, "displacement", value)

    def on_solid_amount_change(self, ingredient_id: str, value: str) -> None:
        self._update_numeric(ingredient_id, "amount", value)

    def on_known_solid_select(self, ingredient_id: str, name: str) -> None:
        """Pre-fill a solid from the known-solids catalog."""
        displacement = self.known_solids.displacement_for(name)
        if displacement is None:
            logger.warning("Selected solid %s is not in the catalog", name)
            return
        try:
            self.state_manager.apply_known_solid(ingredient_id, name, displacement)
        except RecipeStateError:
            logger.exception("Could not apply known solid %s to %s", name, ingredient_id)
            return
        self.render_solids()

    def start_known_solids_lookup(self) -> None:
        catalog_key = self.state_manager.state.catalog_key
        if not catalog_key or not self.page:
            return
        self.page.run_task(self._load_known_solids, catalog_key)

    async def _load_known_solids(self, catalog_key: str) -> None:
        try:
            known_solids = await self.known_solids.refresh(catalog_key)
        except asyncio.CancelledError:
            logger.info("Known solids lookup for %s cancelled", catalog_key)
            raise
        logger.info("Loaded %d known solids", len(known_solids))
        if known_solids:
            self.render_solids()

    def _update(self, ingredient_id: str, field_name: str, value: str) -> None:
        try:
            self.state_manager.update_field(ingredient_id, field_name, value)
        except RecipeStateError:
            logger.exception("Could not update %s on %s", field_name, ingredient_id)

    def _update_numeric(self, ingredient_id: str, field_name: str, value: str) -> None:
        try:
            self.state_manager.update_numeric_field(ingredient_id, field_name, value)
        except RecipeStateError:
            logger.exception("Could not update %s on %s", field_name, ingredient_id)
