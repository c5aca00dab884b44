"""Exceptions raised by the solitaire engine.

Illegal moves are not exceptions: rule predicates return False and
apply_move returns a MoveRejected value.
"""


class InvalidSeedError(ValueError):
    """Seed is not an integer in the safe-integer range."""


class InvalidDeckError(ValueError):
    """Deck handed to the dealer is not exactly the 52 unique cards."""


class InvalidStateError(ValueError):
    """Game state violates a structural invariant."""


class SerializationError(ValueError):
    """Share code or snapshot could not be decoded into a valid state."""
