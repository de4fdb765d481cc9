from __future__ import annotations


class RecipeStateError(Exception):
    """Base class for invalid operations against a recipe state."""


class UnknownIngredientError(RecipeStateError, KeyError):
    """Raised when an ingredient id is not present in the recipe."""

    def __init__(self, ingredient_id: str) -> None:
        super().__init__(f"Unknown ingredient id {ingredient_id!r}")
        self.ingredient_id = ingredient_id

    def __str__(self) -> str:
        return self.args[0]


class DuplicateIngredientError(RecipeStateError, KeyError):
    """Raised when an ingredient id is inserted twice."""

    def __init__(self, ingredient_id: str) -> None:
        super().__init__(f"Ingredient id {ingredient_id!r} already exists")
        self.ingredient_id = ingredient_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownFieldError(RecipeStateError, ValueError):
    """Raised when an update targets a field the ingredient record does not have."""

    def __init__(self, ingredient_id: str, field_name: str) -> None:
        super().__init__(f"Ingredient {ingredient_id!r} has no field {field_name!r}")
        self.ingredient_id = ingredient_id
        self.field_name = field_name


class StateDecodeError(RecipeStateError, ValueError):
    """Raised internally when a persisted fragment cannot be turned into a recipe state."""
