"""Business logic service for recipe calculations."""

from __future__ import annotations

import logging

from core.recipe.engine import RecipeBreakdown, RecipeLine, compute_breakdown, compute_recipe

from .state_manager import RecipeStateManager

logger = logging.getLogger(__name__)


class RecipeCalculationService:
    """Recomputes the recipe from the manager's current state on demand."""

    def __init__(self, state_manager: RecipeStateManager) -> None:
        self.state_manager = state_manager

    def calculate(self) -> list[RecipeLine]:
        """Compute the dispensed amounts for the current state."""

        lines = compute_recipe(self.state_manager.state)
        if lines:
            logger.info("Calculated %d recipe lines", len(lines))
        else:
            logger.debug("Recipe incomplete: need a total volume, a liquid and a solid")
        return lines

    def breakdown(self) -> RecipeBreakdown | None:
        return compute_breakdown(self.state_manager.state)

    def get_calculation_summary(self) -> dict[str, int]:
        """Get summary of the current recipe."""

        state = self.state_manager.state
        breakdown = compute_breakdown(state)
        return {
            "liquids": len(state.liquids),
            "solids": len(state.solids),
            "fill_liquids": len(breakdown.fill_liquids) if breakdown else 0,
            "percentage_liquids": len(breakdown.percentage_liquids) if breakdown else 0,
        }
