"""Playing card types shared by every solitaire variant."""

from dataclasses import dataclass
from enum import Enum


class Suit(Enum):
    """Card suits, in canonical deck order."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def code(self) -> int:
        """2-bit suit code used by the share-code format."""
        return SUIT_ORDER.index(self)


SUIT_ORDER = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)

RANK_LABELS = {
    1: "A",
    11: "J",
    12: "Q",
    13: "K",
}

ACE = 1
KING = 13


def rank_label(rank: int) -> str:
    """Return the printed label for a rank (A, 2..10, J, Q, K)."""
    return RANK_LABELS.get(rank, str(rank))


@dataclass(frozen=True)
class Card:
    """Immutable playing card.

    Identity is value equality on suit and rank; rank runs 1 (Ace) to
    13 (King).
    """

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit!r}")
        if isinstance(self.rank, bool) or not isinstance(self.rank, int) or not ACE <= self.rank <= KING:
            raise ValueError(f"Invalid rank: {self.rank!r}")

    @property
    def id(self) -> str:
        return f"{rank_label(self.rank)}{self.suit.value}"

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    def __str__(self) -> str:
        return self.id


def create_deck() -> tuple[Card, ...]:
    """Create the ordered 52-card deck (suit-major, Ace to King)."""
    return tuple(
        Card(suit=suit, rank=rank)
        for suit in SUIT_ORDER
        for rank in range(ACE, KING + 1)
    )


def parse_card(text: str) -> Card:
    """Parse a card id such as "7♥", "10♠" or "Q♣".

    Also accepts the ASCII suit letters S/H/D/C ("7H", "10s").
    """
    text = text.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card: {text!r}")

    label, suit_text = text[:-1].upper(), text[-1]
    ascii_suits = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}
    try:
        suit = Suit(suit_text)
    except ValueError:
        if suit_text.upper() not in ascii_suits:
            raise ValueError(f"Invalid suit in card: {text!r}") from None
        suit = ascii_suits[suit_text.upper()]

    labels = {v: k for k, v in RANK_LABELS.items()}
    if label in labels:
        rank = labels[label]
    elif label.isdigit() and 2 <= int(label) <= 10:
        rank = int(label)
    else:
        raise ValueError(f"Invalid rank in card: {text!r}")

    return Card(suit=suit, rank=rank)
