from __future__ import annotations

import logging
from typing import Protocol

from core.recipe.codec import decode_state, encode_state
from core.recipe.models import RecipeState

logger = logging.getLogger(__name__)


class FragmentStore(Protocol):
    """Somewhere the encoded recipe fragment lives, such as the page URL."""

    def read_fragment(self) -> str | None: ...

    def write_fragment(self, fragment: str) -> None: ...


class InMemoryFragmentStore:
    """Fragment store backed by a plain attribute."""

    def __init__(self, fragment: str | None = None) -> None:
        self.fragment = fragment
        self.writes = 0

    def read_fragment(self) -> str | None:
        return self.fragment

    def write_fragment(self, fragment: str) -> None:
        self.fragment = fragment
        self.writes += 1


class RecipeStateRepository:
    """Loads and persists recipe states through a fragment store."""

    def __init__(self, store: FragmentStore) -> None:
        self.store = store

    def load(self) -> RecipeState:
        state = decode_state(self.store.read_fragment())
        logger.info(
            "Loaded recipe with %d liquids and %d solids",
            len(state.liquids),
            len(state.solids),
        )
        return state

    def persist(self, state: RecipeState) -> None:
        fragment = encode_state(state)
        self.store.write_fragment(fragment)
        logger.debug("Persisted recipe fragment (%d chars)", len(fragment))
