"""State management for the recipe calculator page."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Any

from core.recipe.models import RecipeState
from core.recipe.persistence import RecipeStateRepository

logger = logging.getLogger(__name__)

StateListener = Callable[[RecipeState], None]


def parse_numeric_input(text: str | None) -> float | None:
    """Turn raw field text into a number: blank is unset, garbage is NaN."""

    if text is None or not text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        logger.debug("Non-numeric input %r kept as NaN", text)
        return math.nan


class RecipeStateManager:
    """Owns the active recipe state and persists it after every change."""

    def __init__(self, repository: RecipeStateRepository) -> None:
        self.repository = repository
        self.state = RecipeState()
        self._listeners: list[StateListener] = []

    def load(self) -> RecipeState:
        """Replace the active state with the persisted one."""

        self.state = self.repository.load()
        self._notify()
        return self.state

    def subscribe(self, listener: StateListener) -> None:
        """Call `listener` with the state after every change."""

        self._listeners.append(listener)

    def add_liquid(self) -> str:
        ingredient_id = self.state.add_liquid()
        self._commit()
        return ingredient_id

    def add_solid(self) -> str:
        ingredient_id = self.state.add_solid()
        self._commit()
        return ingredient_id

    def remove_ingredient(self, ingredient_id: str) -> None:
        self.state.remove(ingredient_id)
        self._commit()

    def update_field(self, ingredient_id: str, field_name: str, value: Any) -> None:
        self.state.update_field(ingredient_id, field_name, value)
        self._commit()

    def update_numeric_field(self, ingredient_id: str, field_name: str, text: str | None) -> None:
        """Update a numeric ingredient field from raw input text."""

        self.update_field(ingredient_id, field_name, parse_numeric_input(text))

    def apply_known_solid(self, ingredient_id: str, name: str, displacement: float | None) -> None:
        """Pre-fill a solid's name and displacement from the known-solids catalog."""

        self.state.update_field(ingredient_id, "name", name)
        self.state.update_field(ingredient_id, "displacement", displacement)
        self._commit()
        logger.info("Applied known solid %s to %s", name, ingredient_id)

    def set_total_volume(self, text: str | None) -> None:
        self.state.set_total_volume(parse_numeric_input(text))
        self._commit()

    def set_volume_units(self, units: str) -> None:
        self.state.set_volume_units(units)
        self._commit()

    def set_mass_units(self, units: str) -> None:
        self.state.set_mass_units(units)
        self._commit()

    def has_ingredients(self) -> bool:
        return bool(self.state.liquids or self.state.solids)

    def _commit(self) -> None:
        self.repository.persist(self.state)
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.state)
