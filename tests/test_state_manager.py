from __future__ import annotations

import math
from urllib.parse import quote

import pytest

from core.recipe.codec import decode_state
from core.recipe.exceptions import UnknownIngredientError
from core.recipe.models import RecipeState
from core.recipe.persistence import InMemoryFragmentStore, RecipeStateRepository
from pages.recipe_calculator.calculation_service import RecipeCalculationService
from pages.recipe_calculator.state_manager import RecipeStateManager, parse_numeric_input


def _manager(fragment: str | None = None) -> tuple[RecipeStateManager, InMemoryFragmentStore]:
    store = InMemoryFragmentStore(fragment)
    manager = RecipeStateManager(RecipeStateRepository(store))
    manager.load()
    return manager, store


@pytest.mark.parametrize(
    ("text", "expected"),
    [("", None), ("   ", None), (None, None), ("12.5", 12.5), ("0", 0.0), ("-3", -3.0)],
)
def test_parse_numeric_input(text: str | None, expected: float | None) -> None:
    assert parse_numeric_input(text) == expected


def test_parse_numeric_input_marks_garbage_as_nan() -> None:
    assert math.isnan(parse_numeric_input("12,5 ml"))


def test_load_decodes_persisted_fragment() -> None:
    manager, _ = _manager(quote('{"uid": 2, "volume": 300, "liquids": {"1": {"name": "Water"}}}'))

    assert manager.state.total_volume == 300.0
    assert manager.state.liquids.ids() == ["1"]


def test_every_mutation_persists_fragment() -> None:
    manager, store = _manager()

    liquid = manager.add_liquid()
    solid = manager.add_solid()
    manager.update_field(liquid, "name", "Water")
    manager.update_numeric_field(solid, "amount", "0.25")
    manager.set_total_volume("400")
    manager.set_volume_units("L")
    manager.set_mass_units("kg")

    assert store.writes == 7
    assert decode_state(store.fragment) == manager.state


def test_reload_from_store_reproduces_session() -> None:
    manager, store = _manager()
    manager.set_total_volume("100")
    water = manager.add_liquid()
    manager.update_field(water, "name", "Water")
    salt = manager.add_solid()
    manager.update_field(salt, "name", "Salt")
    manager.update_numeric_field(salt, "amount", "0.02")

    reloaded = RecipeStateManager(RecipeStateRepository(InMemoryFragmentStore(store.fragment)))
    reloaded.load()

    assert reloaded.state == manager.state
    assert reloaded.add_liquid() == "2"


def test_listeners_see_every_change() -> None:
    manager, _ = _manager()
    seen: list[int] = []
    manager.subscribe(lambda state: seen.append(len(state.liquids)))

    liquid = manager.add_liquid()
    manager.remove_ingredient(liquid)

    assert seen == [1, 0]


def test_failed_mutation_does_not_persist() -> None:
    manager, store = _manager()

    with pytest.raises(UnknownIngredientError):
        manager.remove_ingredient("9")

    assert store.writes == 0


def test_apply_known_solid_sets_name_and_displacement_once() -> None:
    manager, store = _manager()
    solid = manager.add_solid()

    manager.apply_known_solid(solid, "Sucrose", 0.63)

    assert manager.state.solids.get(solid).name == "Sucrose"
    assert manager.state.solids.get(solid).displacement == 0.63
    assert store.writes == 2


def test_calculation_service_recomputes_from_manager_state() -> None:
    manager, _ = _manager()
    service = RecipeCalculationService(manager)
    assert service.calculate() == []

    manager.set_total_volume("100")
    water = manager.add_liquid()
    manager.update_field(water, "name", "Water")
    sugar = manager.add_solid()
    manager.update_field(sugar, "name", "Sugar")
    manager.update_numeric_field(sugar, "amount", "0.5")
    manager.update_numeric_field(sugar, "displacement", "0.6")

    assert [str(line) for line in service.calculate()] == ["Water: 70.00 mL", "Sugar: 50.00 g"]
    assert service.get_calculation_summary() == {
        "liquids": 1,
        "solids": 1,
        "fill_liquids": 1,
        "percentage_liquids": 0,
    }


def test_manager_starts_with_empty_state_before_load() -> None:
    manager = RecipeStateManager(RecipeStateRepository(InMemoryFragmentStore()))

    assert manager.state == RecipeState()
    assert not manager.has_ingredients()
