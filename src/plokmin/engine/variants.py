"""Variant configuration for solitaire games.

Each variant is a small frozen table of rules and layout parameters; the
dealer and rule engine read these fields instead of branching on game names.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class StackingRule(Enum):
    """How a card must relate to the tableau card it is placed on."""

    ALTERNATING_COLORS = "alternating_colors"
    SAME_SUIT = "same_suit"
    ANY_SUIT = "any_suit"


class EmptyColumnRule(Enum):
    """Which cards may start an empty tableau column."""

    ANY_CARD = "any_card"
    KINGS_ONLY = "kings_only"


class FoundationRule(Enum):
    """How foundations are built (always ascending from Ace)."""

    SAME_SUIT = "same_suit"


class DealStyle(Enum):
    """Face-up state of freshly dealt tableau columns."""

    ALL_FACE_UP = "all_face_up"
    LAST_FACE_UP = "last_face_up"


@dataclass(frozen=True)
class GameVariant:
    """Complete rule and layout configuration for one solitaire variant."""

    key: str
    name: str
    game_type: int  # share-code game type byte
    column_sizes: tuple[int, ...]
    deal_style: DealStyle
    free_cell_count: int
    foundation_count: int = 4
    stacking_rule: StackingRule = StackingRule.ALTERNATING_COLORS
    empty_column_rule: EmptyColumnRule = EmptyColumnRule.ANY_CARD
    foundation_rule: FoundationRule = FoundationRule.SAME_SUIT
    supermove_limit: bool = False
    uses_stock: bool = False
    draw_count: int = 1

    @property
    def column_count(self) -> int:
        return len(self.column_sizes)

    @property
    def dealt_card_count(self) -> int:
        return sum(self.column_sizes)

    @property
    def config_byte(self) -> int:
        """Variant-config byte of the share code."""
        return self.draw_count


FREECELL = GameVariant(
    key="freecell",
    name="FreeCell",
    game_type=0,
    column_sizes=(7, 7, 7, 7, 6, 6, 6, 6),
    deal_style=DealStyle.ALL_FACE_UP,
    free_cell_count=4,
    empty_column_rule=EmptyColumnRule.ANY_CARD,
    supermove_limit=True,
)

KLONDIKE = GameVariant(
    key="klondike",
    name="Klondike",
    game_type=1,
    column_sizes=(1, 2, 3, 4, 5, 6, 7),
    deal_style=DealStyle.LAST_FACE_UP,
    free_cell_count=0,
    empty_column_rule=EmptyColumnRule.KINGS_ONLY,
    uses_stock=True,
    draw_count=1,
)

VARIANTS = {v.key: v for v in (FREECELL, KLONDIKE)}

DRAW_COUNTS = (1, 3)


def klondike(draw_count: int = 1) -> GameVariant:
    """Klondike configured for Draw-1 or Draw-3."""
    if draw_count not in DRAW_COUNTS:
        raise ValueError(f"Klondike draw count must be 1 or 3, got {draw_count}")
    if draw_count == KLONDIKE.draw_count:
        return KLONDIKE
    return replace(KLONDIKE, draw_count=draw_count)


def get_variant(key: str, draw_count: Optional[int] = None) -> GameVariant:
    """Look up a variant by key, optionally overriding the Klondike draw count."""
    variant = VARIANTS.get(key.lower())
    if variant is None:
        raise ValueError(f"Unknown variant {key!r} (expected one of: {', '.join(VARIANTS)})")
    if draw_count is not None and variant.uses_stock:
        return klondike(draw_count)
    return variant


def variant_from_header(game_type: int, config_byte: int) -> GameVariant:
    """Rebuild a variant from share-code header bytes."""
    for variant in VARIANTS.values():
        if variant.game_type == game_type:
            if variant.uses_stock:
                return klondike(config_byte)
            return variant
    raise ValueError(f"Unknown game type byte {game_type}")
