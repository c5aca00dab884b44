"""Immutable game state representation."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from plokmin.engine.cards import ACE, Card, create_deck
from plokmin.engine.errors import InvalidStateError
from plokmin.engine.variants import GameVariant


class LocationKind(Enum):
    """Card pile kinds."""

    TABLEAU = "tableau"
    FREE_CELL = "free_cell"
    FOUNDATION = "foundation"
    STOCK = "stock"
    WASTE = "waste"


@dataclass(frozen=True)
class Location:
    """Reference to a pile, optionally to a run of cards on top of it.

    `count` is how many cards from the top of a tableau column are meant;
    None means a single card.
    """

    kind: LocationKind
    index: int = 0
    count: Optional[int] = None

    @property
    def card_count(self) -> int:
        return 1 if self.count is None else self.count

    def pile(self) -> "Location":
        """Same pile without a card count."""
        return Location(self.kind, self.index)

    def same_pile(self, other: "Location") -> bool:
        return self.kind == other.kind and self.index == other.index

    @staticmethod
    def tableau(index: int, count: Optional[int] = None) -> "Location":
        return Location(LocationKind.TABLEAU, index, count)

    @staticmethod
    def free_cell(index: int) -> "Location":
        return Location(LocationKind.FREE_CELL, index)

    @staticmethod
    def foundation(index: int) -> "Location":
        return Location(LocationKind.FOUNDATION, index)

    @staticmethod
    def stock() -> "Location":
        return Location(LocationKind.STOCK, 0)

    @staticmethod
    def waste() -> "Location":
        return Location(LocationKind.WASTE, 0)

    def __str__(self) -> str:
        if self.kind in (LocationKind.STOCK, LocationKind.WASTE):
            return self.kind.value
        suffix = f"x{self.count}" if self.count is not None else ""
        return f"{self.kind.value}[{self.index}]{suffix}"


@dataclass(frozen=True)
class Move:
    """A move from one location to another."""

    source: Location
    destination: Location

    def __str__(self) -> str:
        return f"{self.source} -> {self.destination}"


@dataclass(frozen=True)
class TableauColumn:
    """Tableau column, cards bottom-to-top; the last face_up_count are face-up."""

    cards: tuple[Card, ...] = ()
    face_up_count: int = 0

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    @property
    def face_up_cards(self) -> tuple[Card, ...]:
        if self.face_up_count <= 0:
            return ()
        return self.cards[-self.face_up_count:]

    @property
    def face_down_count(self) -> int:
        return len(self.cards) - self.face_up_count

    def is_face_up(self, position: int) -> bool:
        """Whether the card at `position` (0 = bottom) is face-up."""
        return position >= self.face_down_count


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game in progress.

    All nested structures are tuples. Free cells hold a Card or None;
    stock and waste have their top card last.
    """

    variant: GameVariant
    tableau: tuple[TableauColumn, ...]
    free_cells: tuple[Optional[Card], ...]
    foundations: tuple[tuple[Card, ...], ...]
    stock: tuple[Card, ...] = ()
    waste: tuple[Card, ...] = ()
    seed: int = 0
    move_count: int = 0

    def copy_with(self, **changes) -> "GameState":  # type: ignore
        """Create a new state with specified changes."""
        current = {
            "variant": self.variant,
            "tableau": self.tableau,
            "free_cells": self.free_cells,
            "foundations": self.foundations,
            "stock": self.stock,
            "waste": self.waste,
            "seed": self.seed,
            "move_count": self.move_count,
        }
        current.update(changes)
        return GameState(**current)

    def iter_cards(self) -> Iterator[Card]:
        """Every card in every pile."""
        for column in self.tableau:
            yield from column.cards
        for cell in self.free_cells:
            if cell is not None:
                yield cell
        for pile in self.foundations:
            yield from pile
        yield from self.stock
        yield from self.waste

    @property
    def empty_free_cell_count(self) -> int:
        return sum(1 for cell in self.free_cells if cell is None)

    def empty_column_indices(self) -> list[int]:
        return [i for i, column in enumerate(self.tableau) if not column.cards]

    def foundation_height(self, index: int) -> int:
        return len(self.foundations[index])


def check_invariants(state: GameState) -> None:
    """Raise InvalidStateError if `state` breaks a structural invariant.

    Checks card conservation, foundation runs, free-cell layout and
    tableau face-up counts.
    """
    variant = state.variant

    if len(state.tableau) != variant.column_count:
        raise InvalidStateError(
            f"Expected {variant.column_count} tableau columns, got {len(state.tableau)}"
        )
    if len(state.free_cells) != variant.free_cell_count:
        raise InvalidStateError(
            f"Expected {variant.free_cell_count} free cells, got {len(state.free_cells)}"
        )
    if len(state.foundations) != variant.foundation_count:
        raise InvalidStateError(
            f"Expected {variant.foundation_count} foundations, got {len(state.foundations)}"
        )
    if not variant.uses_stock and (state.stock or state.waste):
        raise InvalidStateError(f"{variant.name} has no stock or waste")
    if state.move_count < 0:
        raise InvalidStateError("Move count cannot be negative")

    counts = Counter(state.iter_cards())
    duplicates = sorted(card.id for card, n in counts.items() if n > 1)
    if duplicates:
        raise InvalidStateError(f"Duplicated cards: {', '.join(duplicates)}")
    missing = [card.id for card in create_deck() if card not in counts]
    if missing:
        raise InvalidStateError(f"Missing cards: {', '.join(missing)}")

    for index, pile in enumerate(state.foundations):
        for height, card in enumerate(pile):
            if card.rank != ACE + height or card.suit != pile[0].suit:
                raise InvalidStateError(f"Foundation {index} is not an ascending single-suit run")

    for index, column in enumerate(state.tableau):
        if not 0 <= column.face_up_count <= len(column.cards):
            raise InvalidStateError(
                f"Column {index} face-up count {column.face_up_count} out of range"
            )
        if column.cards and column.face_up_count == 0:
            raise InvalidStateError(f"Column {index} has no face-up card")


def is_won(state: GameState) -> bool:
    """All foundations complete (Ace through King)."""
    return len(state.foundations) == 4 and all(len(pile) == 13 for pile in state.foundations)
