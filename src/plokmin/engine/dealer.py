"""Initial layout for each variant."""

import logging
from typing import Sequence

from plokmin.engine.cards import Card, create_deck
from plokmin.engine.errors import InvalidDeckError
from plokmin.engine.rng import shuffle, validate_seed
from plokmin.engine.state import GameState, TableauColumn
from plokmin.engine.variants import DealStyle, GameVariant

logger = logging.getLogger(__name__)

DECK_SIZE = 52


def _validate_deck(deck: Sequence[Card]) -> tuple[Card, ...]:
    cards = tuple(deck)
    if len(cards) != DECK_SIZE:
        raise InvalidDeckError(f"Expected {DECK_SIZE} cards, got {len(cards)}")
    if set(cards) != set(create_deck()):
        raise InvalidDeckError("Deck must contain each of the 52 cards exactly once")
    return cards


def deal(deck: Sequence[Card], variant: GameVariant, seed: int = 0) -> GameState:
    """Distribute a 52-card deck into the variant's starting layout.

    Columns are filled in order, each taking the next cards from the front
    of the deck. Cards left over after the tableau become the stock, with
    the last card on top.

    Args:
        deck: Exactly the 52 unique cards, in deal order
        variant: Layout and rules to deal for
        seed: Seed recorded on the state (0 for hand-built decks)

    Returns:
        The initial GameState

    Raises:
        InvalidDeckError: if deck is not exactly the 52 unique cards
    """
    cards = _validate_deck(deck)

    if variant.dealt_card_count > DECK_SIZE:
        raise InvalidDeckError(f"{variant.name} layout needs {variant.dealt_card_count} cards")
    if not variant.uses_stock and variant.dealt_card_count != DECK_SIZE:
        raise InvalidDeckError(f"{variant.name} layout must use the whole deck")

    columns: list[TableauColumn] = []
    position = 0
    for size in variant.column_sizes:
        column_cards = cards[position:position + size]
        position += size
        if variant.deal_style == DealStyle.ALL_FACE_UP:
            face_up = len(column_cards)
        else:
            face_up = min(1, len(column_cards))
        columns.append(TableauColumn(cards=column_cards, face_up_count=face_up))

    state = GameState(
        variant=variant,
        tableau=tuple(columns),
        free_cells=(None,) * variant.free_cell_count,
        foundations=((),) * variant.foundation_count,
        stock=cards[position:],
        waste=(),
        seed=seed,
        move_count=0,
    )
    logger.debug(f"Dealt {variant.name} (seed {seed}): columns {[len(c) for c in columns]}, stock {len(state.stock)}")
    return state


def new_game(seed: int, variant: GameVariant) -> GameState:
    """Shuffle with `seed` and deal it for `variant`."""
    return deal(shuffle(validate_seed(seed)), variant, seed=seed)
