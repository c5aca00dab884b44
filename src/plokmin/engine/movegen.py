"""Move validation and legal move generation."""

import logging
from typing import List, Optional

from plokmin.engine.cards import Card
from plokmin.engine.rules import (
    can_stack_on_foundation,
    can_stack_on_tableau,
    get_max_movable_count,
    is_sequence_valid,
)
from plokmin.engine.state import GameState, Location, LocationKind, Move, is_won

logger = logging.getLogger(__name__)


def _pile_exists(state: GameState, location: Location) -> bool:
    """Whether the variant has the pile `location` refers to."""
    if isinstance(location.index, bool) or not isinstance(location.index, int):
        return False
    if location.kind == LocationKind.TABLEAU:
        return 0 <= location.index < len(state.tableau)
    if location.kind == LocationKind.FREE_CELL:
        return 0 <= location.index < len(state.free_cells)
    if location.kind == LocationKind.FOUNDATION:
        return 0 <= location.index < len(state.foundations)
    if location.kind in (LocationKind.STOCK, LocationKind.WASTE):
        return state.variant.uses_stock and location.index == 0
    return False


def source_cards(state: GameState, source: Location) -> Optional[tuple[Card, ...]]:
    """Cards picked up from `source`, lowest first, or None if unavailable.

    Tableau runs must lie within the face-up part of the column; every other
    pile only gives up its top card.
    """
    if not _pile_exists(state, source):
        return None
    count = source.card_count
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        return None

    if source.kind == LocationKind.TABLEAU:
        column = state.tableau[source.index]
        if count > column.face_up_count or count > len(column.cards):
            return None
        return column.cards[-count:]

    if count != 1:
        return None

    if source.kind == LocationKind.FREE_CELL:
        card = state.free_cells[source.index]
        return (card,) if card is not None else None
    if source.kind == LocationKind.FOUNDATION:
        pile = state.foundations[source.index]
        return (pile[-1],) if pile else None
    if source.kind == LocationKind.WASTE:
        return (state.waste[-1],) if state.waste else None
    return None


def rejection_reason(state: GameState, source: Location, destination: Location) -> Optional[str]:
    """Why moving `source` to `destination` is illegal, or None if it is legal.

    Never raises; malformed or out-of-range locations are reported as
    reasons.
    """
    if is_won(state):
        return "Game is already won"
    if not _pile_exists(state, source):
        return f"No such source pile: {source}"
    if not _pile_exists(state, destination):
        return f"No such destination pile: {destination}"
    if source.same_pile(destination):
        return "Source and destination are the same pile"

    # Klondike draw
    if source.kind == LocationKind.STOCK:
        if destination.kind != LocationKind.WASTE:
            return "Stock cards can only be drawn to the waste"
        if not state.stock and not state.waste:
            return "Stock and waste are both empty"
        return None
    if destination.kind in (LocationKind.STOCK, LocationKind.WASTE):
        return f"Cards cannot be placed on the {destination.kind.value}"

    cards = source_cards(state, source)
    if not cards:
        return "No movable cards in the source pile"
    count = len(cards)
    card = cards[0]
    variant = state.variant

    if destination.kind == LocationKind.FREE_CELL:
        if count > 1:
            return "Free cells hold a single card"
        if state.free_cells[destination.index] is not None:
            return "Free cell is occupied"
        return None

    if destination.kind == LocationKind.FOUNDATION:
        if source.kind == LocationKind.FOUNDATION:
            return "Cards cannot move between foundations"
        if count > 1:
            return "Foundations take one card at a time"
        if not can_stack_on_foundation(card, state.foundations[destination.index]):
            return f"{card} cannot go on that foundation"
        return None

    # Tableau destination
    column = state.tableau[destination.index]
    target = column.top
    target_face_up = not column.cards or column.face_up_count > 0
    if not can_stack_on_tableau(card, target, variant, target_face_up):
        if target is None:
            return f"{card} cannot start an empty column"
        return f"{card} cannot go on {target}"
    if count > 1:
        if not is_sequence_valid(cards, variant.stacking_rule):
            return "Cards do not form a valid sequence"
        limit = get_max_movable_count(state, source, destination)
        if count > limit:
            return f"Only {limit} cards can move together"
    return None


def can_move(state: GameState, source: Location, destination: Location) -> bool:
    """Whether moving `source` to `destination` is legal."""
    reason = rejection_reason(state, source, destination)
    if reason is not None:
        logger.debug(f"Illegal move {source} -> {destination}: {reason}")
    return reason is None


def _all_destinations(state: GameState, source: Location) -> List[Location]:
    destinations = [Location.tableau(i) for i in range(len(state.tableau))]
    destinations += [Location.foundation(i) for i in range(len(state.foundations))]
    destinations += [Location.free_cell(i) for i in range(len(state.free_cells))]
    if source.kind == LocationKind.STOCK and state.variant.uses_stock:
        destinations.append(Location.waste())
    return destinations


def get_valid_destinations(state: GameState, source: Location) -> List[Location]:
    """All piles `source` may legally move to.

    Ordered: tableau columns, foundations, free cells, then the waste (for
    a stock source).
    """
    return [
        destination
        for destination in _all_destinations(state, source)
        if rejection_reason(state, source, destination) is None
    ]


def _all_sources(state: GameState) -> List[Location]:
    sources: List[Location] = []
    for i, column in enumerate(state.tableau):
        for count in range(1, column.face_up_count + 1):
            sources.append(Location.tableau(i, count if count > 1 else None))
    sources += [Location.free_cell(i) for i, cell in enumerate(state.free_cells) if cell is not None]
    if state.variant.uses_stock:
        sources.append(Location.waste())
        sources.append(Location.stock())
    sources += [Location.foundation(i) for i, pile in enumerate(state.foundations) if pile]
    return sources


def generate_legal_moves(state: GameState) -> List[Move]:
    """Generate every legal move, including each legal run length."""
    moves: List[Move] = []
    for source in _all_sources(state):
        for destination in get_valid_destinations(state, source):
            moves.append(Move(source=source, destination=destination))
    return moves
