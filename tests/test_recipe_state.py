from __future__ import annotations

import pytest

from core.recipe.exceptions import DuplicateIngredientError, UnknownFieldError, UnknownIngredientError
from core.recipe.models import IngredientTable, Liquid, RecipeState, Solid


def test_added_ingredients_share_one_id_counter() -> None:
    state = RecipeState()

    first_liquid = state.add_liquid()
    first_solid = state.add_solid()
    second_liquid = state.add_liquid()

    assert (first_liquid, first_solid, second_liquid) == ("0", "1", "2")
    assert state.next_id == 3
    assert state.liquids.get(first_liquid) == Liquid(name="", amount=None)
    assert state.solids.get(first_solid) == Solid(name="", displacement=None, amount=None)


def test_remove_keeps_order_and_never_recycles_ids() -> None:
    state = RecipeState()
    ids = [state.add_liquid() for _ in range(4)]

    state.remove(ids[1])
    readded = state.add_liquid()

    assert state.liquids.ids() == [ids[0], ids[2], ids[3], readded]
    assert int(readded) > max(int(ingredient_id) for ingredient_id in ids)


def test_remove_finds_solids() -> None:
    state = RecipeState()
    liquid = state.add_liquid()
    solid = state.add_solid()

    state.remove(solid)

    assert len(state.solids) == 0
    assert state.liquids.ids() == [liquid]


def test_remove_unknown_id_raises() -> None:
    state = RecipeState()

    with pytest.raises(UnknownIngredientError):
        state.remove("42")


def test_update_field_replaces_one_field_in_place() -> None:
    state = RecipeState()
    first = state.add_solid()
    second = state.add_solid()
    third = state.add_solid()
    state.update_field(second, "name", "Sugar")

    state.update_field(second, "displacement", 0.6)

    assert state.solids.ids() == [first, second, third]
    assert state.solids.get(second) == Solid(name="Sugar", displacement=0.6, amount=None)
    assert state.solids.get(first) == Solid()


def test_update_field_rejects_unknown_field() -> None:
    state = RecipeState()
    liquid = state.add_liquid()

    with pytest.raises(UnknownFieldError):
        state.update_field(liquid, "displacement", 1.0)


def test_update_field_rejects_unknown_id() -> None:
    with pytest.raises(UnknownIngredientError):
        RecipeState().update_field("0", "name", "Water")


def test_top_level_setters() -> None:
    state = RecipeState()

    state.set_total_volume(750.0)
    state.set_volume_units("L")
    state.set_mass_units("kg")

    assert (state.total_volume, state.volume_units, state.mass_units) == (750.0, "L", "kg")


def test_ingredient_table_rejects_duplicate_ids() -> None:
    table: IngredientTable[Liquid] = IngredientTable([("0", Liquid(name="Water"))])

    with pytest.raises(DuplicateIngredientError):
        table.insert("0", Liquid(name="Milk"))


def test_ingredient_table_iterates_in_insertion_order() -> None:
    table: IngredientTable[Liquid] = IngredientTable()
    for ingredient_id in ("5", "1", "3"):
        table.insert(ingredient_id, Liquid(name=f"L{ingredient_id}"))

    table.replace("1", Liquid(name="Replaced"))

    assert list(table) == ["5", "1", "3"]
    assert [liquid.name for liquid in table.values()] == ["L5", "Replaced", "L3"]
    assert "1" in table
    assert "2" not in table
