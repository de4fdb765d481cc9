from core.recipe.codec import decode_state, default_state, encode_state, parse_state
from core.recipe.engine import (
    RecipeBreakdown,
    RecipeLine,
    compute_breakdown,
    compute_recipe,
    is_set,
    to_precision,
)
from core.recipe.exceptions import (
    DuplicateIngredientError,
    RecipeStateError,
    StateDecodeError,
    UnknownFieldError,
    UnknownIngredientError,
)
from core.recipe.models import IngredientTable, Liquid, RecipeState, Solid
from core.recipe.persistence import FragmentStore, InMemoryFragmentStore, RecipeStateRepository

__all__ = [
    "DuplicateIngredientError",
    "FragmentStore",
    "IngredientTable",
    "InMemoryFragmentStore",
    "Liquid",
    "RecipeBreakdown",
    "RecipeLine",
    "RecipeState",
    "RecipeStateError",
    "RecipeStateRepository",
    "Solid",
    "StateDecodeError",
    "UnknownFieldError",
    "UnknownIngredientError",
    "compute_breakdown",
    "compute_recipe",
    "decode_state",
    "default_state",
    "encode_state",
    "is_set",
    "parse_state",
    "to_precision",
]
