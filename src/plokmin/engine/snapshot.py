"""JSON snapshots of game states for save files."""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plokmin.engine.cards import Card, parse_card
from plokmin.engine.errors import InvalidStateError, SerializationError
from plokmin.engine.rng import MAX_SAFE_SEED
from plokmin.engine.state import GameState, TableauColumn, check_invariants
from plokmin.engine.variants import get_variant

SNAPSHOT_VERSION = 1


class ColumnModel(BaseModel):
    """One tableau column, cards bottom-to-top."""

    model_config = ConfigDict(extra="forbid")

    cards: List[str]
    face_up_count: int = Field(ge=0)


class SnapshotModel(BaseModel):
    """Saved game document."""

    model_config = ConfigDict(extra="forbid")

    version: int
    variant: str
    draw_count: int = 1
    seed: int = Field(ge=-MAX_SAFE_SEED, le=MAX_SAFE_SEED)
    move_count: int = Field(ge=0)
    tableau: List[ColumnModel]
    free_cells: List[Optional[str]]
    foundations: List[List[str]]
    stock: List[str] = []
    waste: List[str] = []


def _ids(cards) -> List[str]:
    return [card.id for card in cards]


def _cards(ids: List[str]) -> tuple[Card, ...]:
    return tuple(parse_card(card_id) for card_id in ids)


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Convert GameState to a JSON-serializable dict."""
    return {
        "version": SNAPSHOT_VERSION,
        "variant": state.variant.key,
        "draw_count": state.variant.draw_count,
        "seed": state.seed,
        "move_count": state.move_count,
        "tableau": [
            {"cards": _ids(column.cards), "face_up_count": column.face_up_count}
            for column in state.tableau
        ],
        "free_cells": [cell.id if cell is not None else None for cell in state.free_cells],
        "foundations": [_ids(pile) for pile in state.foundations],
        "stock": _ids(state.stock),
        "waste": _ids(state.waste),
    }


def state_to_json(state: GameState, indent: int = 2) -> str:
    """Serialize GameState to a JSON string."""
    return json.dumps(state_to_dict(state), indent=indent, ensure_ascii=False)


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """Create a GameState from a snapshot dict.

    Raises:
        SerializationError: if the document is malformed or the state it
            describes breaks an invariant
    """
    try:
        doc = SnapshotModel.model_validate(data)
    except ValidationError as e:
        raise SerializationError(f"Invalid snapshot: {e}") from e

    if doc.version != SNAPSHOT_VERSION:
        raise SerializationError(f"Unsupported snapshot version {doc.version}")

    try:
        variant = get_variant(doc.variant, doc.draw_count)
        state = GameState(
            variant=variant,
            tableau=tuple(
                TableauColumn(cards=_cards(column.cards), face_up_count=column.face_up_count)
                for column in doc.tableau
            ),
            free_cells=tuple(parse_card(c) if c is not None else None for c in doc.free_cells),
            foundations=tuple(_cards(pile) for pile in doc.foundations),
            stock=_cards(doc.stock),
            waste=_cards(doc.waste),
            seed=doc.seed,
            move_count=doc.move_count,
        )
        check_invariants(state)
    except InvalidStateError as e:
        raise SerializationError(f"Snapshot describes an invalid state: {e}") from e
    except ValueError as e:
        raise SerializationError(f"Invalid snapshot: {e}") from e
    return state


def state_from_json(text: str) -> GameState:
    """Deserialize GameState from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SerializationError("Snapshot must be a JSON object")
    return state_from_dict(data)
