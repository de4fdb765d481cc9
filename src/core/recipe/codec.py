"""
Conversion between a recipe state and the text stored in the page fragment.

The fragment is percent-encoded JSON:

    {"uid": 3, "volume": 100.0, "volumeUnits": "mL", "massUnits": "g",
     "liquids": {"0": {"name": "Water", "amount": null}},
     "solids": {"2": {"name": "Sugar", "displacement": 0.6, "amount": 0.1}},
     "tinyurl": "abc123"}

`null` marks an unset number. NaN and infinities (left behind by invalid input)
are written with Python's JSON extensions so they do not collapse into `null`.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any
from urllib.parse import quote, unquote

from pydantic import BaseModel, Field, NonNegativeInt, StringConstraints, ValidationError

from core.config import settings
from core.recipe.exceptions import RecipeStateError, StateDecodeError
from core.recipe.models import IngredientTable, Liquid, RecipeState, Solid

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched besides the unreserved set
_URI_COMPONENT_SAFE = "!~*'()"

# Canonical ASCII decimals only, short enough to stay a plain int
IngredientId = Annotated[str, StringConstraints(pattern=r"^(0|[1-9][0-9]{0,17})$")]


class LiquidPayload(BaseModel):
    name: str = ""
    amount: float | None = None


class SolidPayload(BaseModel):
    name: str = ""
    displacement: float | None = None
    amount: float | None = None


class RecipeStatePayload(BaseModel):
    """Wire layout of the fragment."""

    uid: NonNegativeInt = 0
    volume: float | None = None
    volumeUnits: str = Field(default_factory=lambda: settings.DEFAULT_VOLUME_UNITS)
    massUnits: str = Field(default_factory=lambda: settings.DEFAULT_MASS_UNITS)
    liquids: dict[IngredientId, LiquidPayload] = Field(default_factory=dict)
    solids: dict[IngredientId, SolidPayload] = Field(default_factory=dict)
    tinyurl: str | None = None


def default_state(catalog_key: str | None = None) -> RecipeState:
    """Return the state used when nothing usable is persisted."""

    return RecipeState(
        next_id=0,
        total_volume=None,
        volume_units=settings.DEFAULT_VOLUME_UNITS,
        mass_units=settings.DEFAULT_MASS_UNITS,
        catalog_key=catalog_key,
    )


def encode_state(state: RecipeState) -> str:
    """Serialize a recipe state into percent-encoded fragment text."""

    document: dict[str, Any] = {
        "uid": state.next_id,
        "volume": state.total_volume,
        "volumeUnits": state.volume_units,
        "massUnits": state.mass_units,
        "liquids": {
            ingredient_id: {"name": liquid.name, "amount": liquid.amount}
            for ingredient_id, liquid in state.liquids.items()
        },
        "solids": {
            ingredient_id: {
                "name": solid.name,
                "displacement": solid.displacement,
                "amount": solid.amount,
            }
            for ingredient_id, solid in state.solids.items()
        },
    }
    if state.catalog_key is not None:
        document["tinyurl"] = state.catalog_key

    text = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    return quote(text, safe=_URI_COMPONENT_SAFE)


def decode_state(fragment: str | None) -> RecipeState:
    """Rebuild a recipe state from fragment text, falling back to the default state.

    Never raises: malformed text is logged and the default state is returned with
    the raw text kept as the catalog key.
    """

    if not fragment:
        return default_state()

    try:
        return parse_state(fragment)
    except RecipeStateError as error:
        logger.warning("Could not decode recipe fragment, using default state: %s", error)
        return default_state(catalog_key=fragment)


def parse_state(fragment: str) -> RecipeState:
    """Strict variant of `decode_state` that raises `StateDecodeError`."""

    text = unquote(fragment)
    try:
        document = json.loads(text)
    except (ValueError, RecursionError) as error:
        raise StateDecodeError(f"Fragment is not valid JSON: {error}") from error

    try:
        payload = RecipeStatePayload.model_validate(document)
    except (ValidationError, RecursionError) as error:
        raise StateDecodeError(f"Fragment does not describe a recipe: {error}") from error

    return _state_from_payload(payload)


def _state_from_payload(payload: RecipeStatePayload) -> RecipeState:
    shared_ids = payload.liquids.keys() & payload.solids.keys()
    if shared_ids:
        raise StateDecodeError(f"Ingredient ids used by both liquids and solids: {sorted(shared_ids)}")

    liquids = IngredientTable(
        (ingredient_id, Liquid(name=liquid.name, amount=liquid.amount))
        for ingredient_id, liquid in payload.liquids.items()
    )
    solids = IngredientTable(
        (
            ingredient_id,
            Solid(name=solid.name, displacement=solid.displacement, amount=solid.amount),
        )
        for ingredient_id, solid in payload.solids.items()
    )

    # next_id must stay ahead of every id already handed out
    used_ids = [int(ingredient_id) for ingredient_id in (*liquids.ids(), *solids.ids())]
    next_id = max([payload.uid, *(used_id + 1 for used_id in used_ids)])
    if next_id != payload.uid:
        logger.info("Raised next id from %d to %d to clear existing ingredient ids", payload.uid, next_id)

    return RecipeState(
        next_id=next_id,
        total_volume=payload.volume,
        volume_units=payload.volumeUnits,
        mass_units=payload.massUnits,
        liquids=liquids,
        solids=solids,
        catalog_key=payload.tinyurl,
    )
