"""Deterministic FreeCell and Klondike rules engine."""

from plokmin.engine.cards import Card, Suit, create_deck, parse_card
from plokmin.engine.errors import (
    InvalidDeckError,
    InvalidSeedError,
    InvalidStateError,
    SerializationError,
)
from plokmin.engine.rng import Mulberry32, shuffle
from plokmin.engine.variants import (
    FREECELL,
    KLONDIKE,
    GameVariant,
    get_variant,
    klondike,
)
from plokmin.engine.state import (
    GameState,
    Location,
    LocationKind,
    Move,
    TableauColumn,
    check_invariants,
)
from plokmin.engine.dealer import deal, new_game
from plokmin.engine.rules import (
    can_stack_on_foundation,
    can_stack_on_tableau,
    get_max_movable_count,
    is_sequence_valid,
    max_movable_count,
)
from plokmin.engine.movegen import (
    can_move,
    generate_legal_moves,
    get_valid_destinations,
    rejection_reason,
)
from plokmin.engine.execute import MoveRejected, apply_move, draw_from_stock, is_won
from plokmin.engine.autoplay import (
    apply_safe_auto_moves,
    find_safe_auto_move,
    get_lowest_playable_cards,
)
from plokmin.engine.codec import decode_state, encode_state
from plokmin.engine.snapshot import state_from_dict, state_from_json, state_to_dict, state_to_json

__all__ = [
    # Cards and deck
    "Card",
    "Suit",
    "create_deck",
    "parse_card",
    "Mulberry32",
    "shuffle",
    # Errors
    "InvalidDeckError",
    "InvalidSeedError",
    "InvalidStateError",
    "SerializationError",
    # Variants
    "FREECELL",
    "KLONDIKE",
    "GameVariant",
    "get_variant",
    "klondike",
    # State
    "GameState",
    "Location",
    "LocationKind",
    "Move",
    "TableauColumn",
    "check_invariants",
    "deal",
    "new_game",
    # Rules and moves
    "can_stack_on_foundation",
    "can_stack_on_tableau",
    "get_max_movable_count",
    "is_sequence_valid",
    "max_movable_count",
    "can_move",
    "generate_legal_moves",
    "get_valid_destinations",
    "rejection_reason",
    "MoveRejected",
    "apply_move",
    "draw_from_stock",
    "is_won",
    "apply_safe_auto_moves",
    "find_safe_auto_move",
    "get_lowest_playable_cards",
    # Serialization
    "decode_state",
    "encode_state",
    "state_from_dict",
    "state_from_json",
    "state_to_dict",
    "state_to_json",
]
