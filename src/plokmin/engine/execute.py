"""Move execution.

Every operation returns a new GameState; the input state is never modified.
Illegal moves come back as a MoveRejected value instead of raising.
"""

import logging
from dataclasses import dataclass
from typing import Union

from plokmin.engine.cards import Card
from plokmin.engine.movegen import rejection_reason, source_cards
from plokmin.engine.state import GameState, Location, LocationKind, TableauColumn, is_won

logger = logging.getLogger(__name__)

__all__ = ["MoveRejected", "MoveResult", "apply_move", "draw_from_stock", "is_won"]


@dataclass(frozen=True)
class MoveRejected:
    """Result of an illegal move request."""

    reason: str

    def __str__(self) -> str:
        return self.reason


MoveResult = Union[GameState, MoveRejected]


def _remove_from_source(state: GameState, source: Location) -> GameState:
    count = source.card_count

    if source.kind == LocationKind.TABLEAU:
        column = state.tableau[source.index]
        remaining = column.cards[:-count]
        face_up = column.face_up_count - count
        if remaining and face_up <= 0:
            face_up = 1  # reveal the new top card
        updated = TableauColumn(cards=remaining, face_up_count=max(0, face_up))
        tableau = state.tableau[:source.index] + (updated,) + state.tableau[source.index + 1:]
        return state.copy_with(tableau=tableau)

    if source.kind == LocationKind.FREE_CELL:
        cells = list(state.free_cells)
        cells[source.index] = None
        return state.copy_with(free_cells=tuple(cells))

    if source.kind == LocationKind.FOUNDATION:
        piles = list(state.foundations)
        piles[source.index] = piles[source.index][:-1]
        return state.copy_with(foundations=tuple(piles))

    if source.kind == LocationKind.WASTE:
        return state.copy_with(waste=state.waste[:-1])

    raise ValueError(f"Cannot take cards from {source}")


def _add_to_destination(state: GameState, destination: Location, cards: tuple[Card, ...]) -> GameState:
    if destination.kind == LocationKind.TABLEAU:
        column = state.tableau[destination.index]
        updated = TableauColumn(
            cards=column.cards + cards,
            face_up_count=column.face_up_count + len(cards),
        )
        tableau = state.tableau[:destination.index] + (updated,) + state.tableau[destination.index + 1:]
        return state.copy_with(tableau=tableau)

    if destination.kind == LocationKind.FREE_CELL:
        cells = list(state.free_cells)
        cells[destination.index] = cards[0]
        return state.copy_with(free_cells=tuple(cells))

    if destination.kind == LocationKind.FOUNDATION:
        piles = list(state.foundations)
        piles[destination.index] = piles[destination.index] + cards
        return state.copy_with(foundations=tuple(piles))

    raise ValueError(f"Cannot place cards on {destination}")


def draw_from_stock(state: GameState) -> MoveResult:
    """Klondike draw: turn up to draw_count cards from the stock onto the waste.

    An empty stock is first refilled from the waste (reversed, so the first
    card drawn is again first). Drawn cards keep their relative order.
    Counts as a single move.
    """
    if not state.variant.uses_stock:
        return MoveRejected(f"{state.variant.name} has no stock")
    if is_won(state):
        return MoveRejected("Game is already won")
    if not state.stock and not state.waste:
        return MoveRejected("Stock and waste are both empty")

    stock, waste = state.stock, state.waste
    if not stock:
        stock, waste = tuple(reversed(waste)), ()
        logger.debug(f"Recycled {len(stock)} waste cards into the stock")

    n = min(state.variant.draw_count, len(stock))
    drawn = stock[-n:]
    return state.copy_with(
        stock=stock[:-n],
        waste=waste + drawn,
        move_count=state.move_count + 1,
    )


def apply_move(state: GameState, source: Location, destination: Location) -> MoveResult:
    """Validate and perform a move.

    Args:
        state: Current game state
        source: Pile (and run length, for tableau columns) to move from
        destination: Pile to move to

    Returns:
        The resulting GameState, or MoveRejected with the reason the move
        is illegal
    """
    reason = rejection_reason(state, source, destination)
    if reason is not None:
        logger.debug(f"Rejected {source} -> {destination}: {reason}")
        return MoveRejected(reason)

    if source.kind == LocationKind.STOCK:
        return draw_from_stock(state)

    cards = source_cards(state, source)
    if not cards:
        return MoveRejected("No movable cards in the source pile")
    next_state = _remove_from_source(state, source)
    next_state = _add_to_destination(next_state, destination, cards)
    return next_state.copy_with(move_count=state.move_count + 1)
