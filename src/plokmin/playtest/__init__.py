"""Terminal playtesting for solitaire games."""

from plokmin.playtest.history import HistoryManager
from plokmin.playtest.display import StateRenderer, format_card
from plokmin.playtest.input import (
    InputResult,
    format_location,
    format_move,
    parse_command,
    parse_location,
)
from plokmin.playtest.session import PlaytestSession, SessionConfig, SessionResult

__all__ = [
    "HistoryManager",
    "StateRenderer",
    "format_card",
    "InputResult",
    "format_location",
    "format_move",
    "parse_command",
    "parse_location",
    "PlaytestSession",
    "SessionConfig",
    "SessionResult",
]
