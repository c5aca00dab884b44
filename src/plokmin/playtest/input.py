"""Human input parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from plokmin.engine.state import Location, LocationKind, Move
from plokmin.engine.variants import GameVariant

COMMANDS = {
    "d": "draw",
    "draw": "draw",
    "u": "undo",
    "undo": "undo",
    "r": "redo",
    "redo": "redo",
    "a": "auto",
    "auto": "auto",
    "h": "hint",
    "hint": "hint",
    "?": "help",
    "help": "help",
}

QUIT_WORDS = ("q", "quit", "exit")

HELP_TEXT = """Moves: <from> <to>
  t1..t8   tableau column (t3x2 = top two cards of column 3)
  c1..c4   free cell
  f1..f4   foundation
  w        waste
  s        stock (s w draws)
Commands: d draw, u undo, r redo, a auto-move, h hint, q quit"""

_PILE = re.compile(r"^(?P<kind>[tcfws])(?P<index>\d*)(?:x(?P<count>\d+))?$")


@dataclass
class InputResult:
    """Result of parsing one line of input."""

    move: Optional[Move] = None
    command: Optional[str] = None
    quit: bool = False
    error: Optional[str] = None


def parse_location(token: str, variant: GameVariant) -> Location:
    """Parse a pile token such as "t3", "t3x2", "c1", "f4", "w" or "s".

    Raises:
        ValueError: if the token does not name a pile of this variant
    """
    match = _PILE.match(token)
    if not match:
        raise ValueError(f"Unknown pile '{token}'")

    kind = match.group("kind")
    index_text = match.group("index")
    count_text = match.group("count")

    if count_text is not None and kind != "t":
        raise ValueError(f"Only tableau columns take a card count: '{token}'")

    if kind in ("w", "s"):
        if index_text:
            raise ValueError(f"Unknown pile '{token}'")
        if not variant.uses_stock:
            raise ValueError(f"{variant.name} has no stock or waste")
        return Location.waste() if kind == "w" else Location.stock()

    if not index_text:
        raise ValueError(f"Pile '{token}' needs a number")
    number = int(index_text)

    limits = {
        "t": variant.column_count,
        "c": variant.free_cell_count,
        "f": variant.foundation_count,
    }
    limit = limits[kind]
    if limit == 0:
        raise ValueError(f"{variant.name} has no free cells")
    if not 1 <= number <= limit:
        raise ValueError(f"'{token}' is out of range (1-{limit})")

    if kind == "t":
        count = int(count_text) if count_text is not None else None
        if count is not None and count < 1:
            raise ValueError(f"Card count must be at least 1: '{token}'")
        return Location.tableau(number - 1, count if count != 1 else None)
    if kind == "c":
        return Location.free_cell(number - 1)
    return Location.foundation(number - 1)


_TOKEN_PREFIX = {
    LocationKind.TABLEAU: "t",
    LocationKind.FREE_CELL: "c",
    LocationKind.FOUNDATION: "f",
}


def format_location(location: Location) -> str:
    """Pile token the player can type back in, e.g. "t5", "t3x2", "c1" or "w"."""
    if location.kind == LocationKind.WASTE:
        return "w"
    if location.kind == LocationKind.STOCK:
        return "s"
    token = f"{_TOKEN_PREFIX[location.kind]}{location.index + 1}"
    if location.count is not None and location.count > 1:
        token += f"x{location.count}"
    return token


def format_move(move: Move) -> str:
    """A move as typed input, e.g. "t5 f1"."""
    return f"{format_location(move.source)} {format_location(move.destination)}"


def parse_command(raw: str, variant: GameVariant) -> InputResult:
    """Parse one line of player input.

    Args:
        raw: Text as typed
        variant: Variant being played (decides which piles exist)

    Returns:
        InputResult with a move, a command name, the quit flag, or an error
    """
    text = raw.strip().lower()
    if not text:
        return InputResult(error="Enter a move or command ('?' for help).")

    if text in QUIT_WORDS:
        return InputResult(quit=True)

    if text in COMMANDS:
        command = COMMANDS[text]
        if command == "draw":
            if not variant.uses_stock:
                return InputResult(error=f"{variant.name} has no stock to draw from.")
            return InputResult(move=Move(Location.stock(), Location.waste()))
        return InputResult(command=command)

    tokens = text.split()
    if len(tokens) != 2:
        return InputResult(error=f"Invalid input '{raw.strip()}'. Expected '<from> <to>' ('?' for help).")

    try:
        source = parse_location(tokens[0], variant)
        destination = parse_location(tokens[1], variant)
    except ValueError as e:
        return InputResult(error=str(e))

    return InputResult(move=Move(source, destination))
