"""Seeded deck shuffling.

Deals are shared by seed alone, so the generator is fixed bit-for-bit:
Mulberry32 over unsigned 32-bit arithmetic, driving a Fisher-Yates shuffle.
Other implementations produce identical deals by following the same steps.
"""

from plokmin.engine.cards import Card, create_deck
from plokmin.engine.errors import InvalidSeedError

MASK32 = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5

# Largest integer a double represents exactly (Number.MAX_SAFE_INTEGER)
MAX_SAFE_SEED = 2**53 - 1


def validate_seed(seed: object) -> int:
    """Return seed if it is a usable integer, else raise InvalidSeedError."""
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidSeedError(f"Seed must be an integer, got {type(seed).__name__}")
    if abs(seed) > MAX_SAFE_SEED:
        raise InvalidSeedError(f"Seed {seed} is outside the safe integer range")
    return seed


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32-bit multiply."""
    return (a * b) & MASK32


class Mulberry32:
    """Mulberry32 pseudo-random generator.

    State is the seed reduced modulo 2**32; each draw advances it by a fixed
    increment and mixes it into a 32-bit output.
    """

    def __init__(self, seed: int) -> None:
        self.state = validate_seed(seed) & MASK32

    def next_uint32(self) -> int:
        """Advance the generator and return the next unsigned 32-bit value."""
        self.state = (self.state + MULBERRY_INCREMENT) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return (t ^ (t >> 14)) & MASK32

    def random(self) -> float:
        """Float in [0, 1), computed as uint32 / 2**32."""
        return self.next_uint32() / 4294967296

    def randbelow(self, n: int) -> int:
        """Integer in [0, n).

        Computed as (u * n) >> 32, which equals floor(random() * n) exactly
        for n below 2**21.
        """
        if n <= 0:
            raise ValueError("n must be positive")
        return (self.next_uint32() * n) >> 32


def shuffle_cards(cards: tuple[Card, ...], seed: int) -> tuple[Card, ...]:
    """Fisher-Yates shuffle of `cards` driven by Mulberry32(seed)."""
    rng = Mulberry32(seed)
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randbelow(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return tuple(shuffled)


def shuffle(seed: int) -> tuple[Card, ...]:
    """Return the deterministic 52-card permutation for `seed`.

    Raises:
        InvalidSeedError: if seed is not an integer within +/-(2**53 - 1)
    """
    return shuffle_cards(create_deck(), seed)
