"""Auto-move and hint helpers."""

import logging
from typing import Iterator, Optional

from plokmin.engine.cards import KING, SUIT_ORDER, Card, Suit
from plokmin.engine.execute import MoveRejected, apply_move
from plokmin.engine.movegen import rejection_reason
from plokmin.engine.state import GameState, Location, Move

logger = logging.getLogger(__name__)

# Cards up to this many ranks above the lowest foundation are auto-played
AUTO_MOVE_MARGIN = 2


def _exposed_cards(state: GameState) -> Iterator[tuple[Location, Card]]:
    """Playable single cards: free cells, then the waste top, then tableau tops."""
    for i, cell in enumerate(state.free_cells):
        if cell is not None:
            yield Location.free_cell(i), cell
    if state.waste:
        yield Location.waste(), state.waste[-1]
    for i, column in enumerate(state.tableau):
        if column.cards:
            yield Location.tableau(i), column.cards[-1]


def _foundation_for(state: GameState, source: Location) -> Optional[Location]:
    for i in range(len(state.foundations)):
        destination = Location.foundation(i)
        if rejection_reason(state, source, destination) is None:
            return destination
    return None


def find_safe_auto_move(state: GameState) -> Optional[Move]:
    """First exposed card low enough to send to a foundation without a decision.

    A card qualifies when its rank is at most two above the shortest
    foundation and some foundation accepts it.
    """
    if not state.foundations:
        return None
    min_rank = min(len(pile) for pile in state.foundations)

    for source, card in _exposed_cards(state):
        if card.rank > min_rank + AUTO_MOVE_MARGIN:
            continue
        destination = _foundation_for(state, source)
        if destination is not None:
            return Move(source=source, destination=destination)
    return None


def apply_safe_auto_moves(state: GameState) -> GameState:
    """Play safe foundation moves until none remain."""
    moved = 0
    while True:
        move = find_safe_auto_move(state)
        if move is None:
            break
        result = apply_move(state, move.source, move.destination)
        if isinstance(result, MoveRejected):
            break
        state = result
        moved += 1
    if moved:
        logger.debug(f"Auto-moved {moved} card(s) to foundations")
    return state


def _next_needed(state: GameState) -> dict[Suit, int]:
    """Rank each suit's foundation needs next (13 + 1 once complete)."""
    needed = {suit: 1 for suit in SUIT_ORDER}
    for pile in state.foundations:
        if pile:
            needed[pile[0].suit] = len(pile) + 1
    return needed


def get_lowest_playable_cards(state: GameState) -> frozenset[str]:
    """Ids of the next card each foundation needs, where that card is visible.

    Visible means in a free cell, on top of the waste, or face-up in the
    tableau (not necessarily on top of its column).
    """
    needed = {
        suit: rank for suit, rank in _next_needed(state).items() if rank <= KING
    }

    visible: list[Card] = [cell for cell in state.free_cells if cell is not None]
    if state.waste:
        visible.append(state.waste[-1])
    for column in state.tableau:
        visible.extend(column.face_up_cards)

    return frozenset(card.id for card in visible if needed.get(card.suit) == card.rank)
