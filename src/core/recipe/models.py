"""In-memory recipe state and the mutations the calculator page performs on it."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, fields, replace
from typing import Any, Generic, TypeVar

from core.config import settings
from core.recipe.exceptions import (
    DuplicateIngredientError,
    UnknownFieldError,
    UnknownIngredientError,
)

logger = logging.getLogger(__name__)


@dataclass
class Liquid:
    name: str = ""
    amount: float | None = None  # percent of total volume, None fills the remainder


@dataclass
class Solid:
    name: str = ""
    displacement: float | None = None
    amount: float | None = None  # concentration, mass per unit volume


RecordT = TypeVar("RecordT", Liquid, Solid)


class IngredientTable(Generic[RecordT]):
    """Ingredient records keyed by id, iterated in insertion order.

    Order is tracked in its own list so that replacing a record never moves it.
    """

    def __init__(self, entries: Iterable[tuple[str, RecordT]] = ()) -> None:
        self._order: list[str] = []
        self._records: dict[str, RecordT] = {}
        for ingredient_id, record in entries:
            self.insert(ingredient_id, record)

    def insert(self, ingredient_id: str, record: RecordT) -> None:
        if ingredient_id in self._records:
            raise DuplicateIngredientError(ingredient_id)
        self._order.append(ingredient_id)
        self._records[ingredient_id] = record

    def remove(self, ingredient_id: str) -> RecordT:
        if ingredient_id not in self._records:
            raise UnknownIngredientError(ingredient_id)
        self._order.remove(ingredient_id)
        return self._records.pop(ingredient_id)

    def replace(self, ingredient_id: str, record: RecordT) -> None:
        if ingredient_id not in self._records:
            raise UnknownIngredientError(ingredient_id)
        self._records[ingredient_id] = record

    def get(self, ingredient_id: str) -> RecordT:
        try:
            return self._records[ingredient_id]
        except KeyError:
            raise UnknownIngredientError(ingredient_id) from None

    def ids(self) -> list[str]:
        return list(self._order)

    def items(self) -> list[tuple[str, RecordT]]:
        return [(ingredient_id, self._records[ingredient_id]) for ingredient_id in self._order]

    def values(self) -> list[RecordT]:
        return [self._records[ingredient_id] for ingredient_id in self._order]

    def __contains__(self, ingredient_id: object) -> bool:
        return ingredient_id in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._order))

    def __len__(self) -> int:
        return len(self._order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IngredientTable):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"IngredientTable({self.items()!r})"


@dataclass
class RecipeState:
    """Everything a shared recipe link carries."""

    next_id: int = 0
    total_volume: float | None = None
    volume_units: str = field(default_factory=lambda: settings.DEFAULT_VOLUME_UNITS)
    mass_units: str = field(default_factory=lambda: settings.DEFAULT_MASS_UNITS)
    liquids: IngredientTable[Liquid] = field(default_factory=IngredientTable)
    solids: IngredientTable[Solid] = field(default_factory=IngredientTable)
    catalog_key: str | None = None

    def add_liquid(self) -> str:
        """Append an empty liquid and return its id."""

        ingredient_id = self._allocate_id()
        self.liquids.insert(ingredient_id, Liquid())
        logger.debug("Added liquid %s", ingredient_id)
        return ingredient_id

    def add_solid(self) -> str:
        """Append an empty solid and return its id."""

        ingredient_id = self._allocate_id()
        self.solids.insert(ingredient_id, Solid())
        logger.debug("Added solid %s", ingredient_id)
        return ingredient_id

    def remove(self, ingredient_id: str) -> None:
        """Remove a liquid or solid. The id is never handed out again."""

        self._table_for(ingredient_id).remove(ingredient_id)
        logger.debug("Removed ingredient %s", ingredient_id)

    def update_field(self, ingredient_id: str, field_name: str, value: Any) -> None:
        """Replace one field of one ingredient without touching its position."""

        table = self._table_for(ingredient_id)
        record = table.get(ingredient_id)
        if field_name not in {record_field.name for record_field in fields(record)}:
            raise UnknownFieldError(ingredient_id, field_name)
        table.replace(ingredient_id, replace(record, **{field_name: value}))
        logger.debug("Updated %s.%s", ingredient_id, field_name)

    def get_ingredient(self, ingredient_id: str) -> Liquid | Solid:
        return self._table_for(ingredient_id).get(ingredient_id)

    def set_total_volume(self, volume: float | None) -> None:
        self.total_volume = volume

    def set_volume_units(self, units: str) -> None:
        self.volume_units = units

    def set_mass_units(self, units: str) -> None:
        self.mass_units = units

    def _allocate_id(self) -> str:
        ingredient_id = str(self.next_id)
        self.next_id += 1
        return ingredient_id

    def _table_for(self, ingredient_id: str) -> IngredientTable:
        if ingredient_id in self.liquids:
            return self.liquids
        if ingredient_id in self.solids:
            return self.solids
        raise UnknownIngredientError(ingredient_id)
