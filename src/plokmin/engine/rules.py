"""Stacking, foundation and supermove rules.

Small pure predicates shared by every variant; variant differences come from
the GameVariant rule fields rather than per-game code paths.
"""

from typing import Optional, Sequence

from plokmin.engine.cards import ACE, KING, Card
from plokmin.engine.state import GameState, Location, LocationKind
from plokmin.engine.variants import EmptyColumnRule, GameVariant, StackingRule


def is_red(card: Card) -> bool:
    return card.is_red


def alternating_color(a: Card, b: Card) -> bool:
    """True if one card is red and the other black."""
    return a.is_red != b.is_red


def same_suit(a: Card, b: Card) -> bool:
    return a.suit == b.suit


def descending_by_one(a: Card, b: Card) -> bool:
    """True if `a` is exactly one rank below `b`."""
    return a.rank == b.rank - 1


def matches_stacking_rule(card: Card, target: Card, rule: StackingRule) -> bool:
    """Colour/suit relation required between a card and the card below it."""
    if rule == StackingRule.ALTERNATING_COLORS:
        return alternating_color(card, target)
    if rule == StackingRule.SAME_SUIT:
        return same_suit(card, target)
    return True


def is_sequence_valid(
    cards: Sequence[Card],
    rule: StackingRule = StackingRule.ALTERNATING_COLORS,
) -> bool:
    """Check a bottom-to-top run: each card stacks on the one below it.

    Empty and single-card runs are valid.
    """
    for lower, upper in zip(cards, cards[1:]):
        if not (descending_by_one(upper, lower) and matches_stacking_rule(upper, lower, rule)):
            return False
    return True


def can_stack_on_tableau(
    card: Card,
    target: Optional[Card],
    variant: GameVariant,
    target_face_up: bool = True,
) -> bool:
    """Whether `card` may be placed on tableau card `target` (None = empty column).

    Examples:
        7♥ on 8♠ in FreeCell -> True
        7♥ on 8♥ in FreeCell -> False (same colour)
        Q♠ on empty column in Klondike -> False (kings only)
    """
    if target is None:
        if variant.empty_column_rule == EmptyColumnRule.KINGS_ONLY:
            return card.rank == KING
        return True

    if not target_face_up:
        return False

    return descending_by_one(card, target) and matches_stacking_rule(card, target, variant.stacking_rule)


def can_stack_on_foundation(card: Card, pile: Sequence[Card]) -> bool:
    """Empty foundations take an Ace; otherwise same suit, one rank higher."""
    if not pile:
        return card.rank == ACE
    top = pile[-1]
    return same_suit(card, top) and card.rank == top.rank + 1


def max_movable_count(
    free_cells_empty: int,
    tableau_columns_empty: int,
    destination_is_empty_column: bool,
) -> int:
    """Supermove capacity: (free cells + 1) * 2 ** empty columns.

    An empty destination column is not counted as spare room.

    Example:
        max_movable_count(2, 1, False) == (2 + 1) * 2 ** 1 == 6
    """
    spare_columns = tableau_columns_empty - (1 if destination_is_empty_column else 0)
    return (max(0, free_cells_empty) + 1) * 2 ** max(0, spare_columns)


def get_max_movable_count(state: GameState, source: Location, destination: Location) -> int:
    """Longest run that may move from `source` to `destination` in one action.

    Variants with a supermove limit use the capacity formula with the empty
    columns other than the source and destination. Without a limit the whole
    face-up part of the source column may move.
    """
    variant = state.variant
    if not variant.supermove_limit:
        if source.kind == LocationKind.TABLEAU and 0 <= source.index < len(state.tableau):
            return state.tableau[source.index].face_up_count
        return 1

    excluded = set()
    for location in (source, destination):
        if location.kind == LocationKind.TABLEAU:
            excluded.add(location.index)
    empty_columns = sum(1 for i in state.empty_column_indices() if i not in excluded)
    return max_movable_count(state.empty_free_cell_count, empty_columns, False)
