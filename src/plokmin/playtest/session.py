"""Playtest session management."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from plokmin.engine.autoplay import (
    apply_safe_auto_moves,
    find_safe_auto_move,
    get_lowest_playable_cards,
)
from plokmin.engine.codec import encode_state
from plokmin.engine.dealer import new_game
from plokmin.engine.execute import MoveRejected, apply_move, is_won
from plokmin.engine.movegen import generate_legal_moves
from plokmin.engine.state import GameState, LocationKind, Move
from plokmin.engine.variants import get_variant
from plokmin.playtest.display import StateRenderer
from plokmin.playtest.history import DEFAULT_HISTORY_SIZE, HistoryManager
from plokmin.playtest.input import HELP_TEXT, InputResult, format_move, parse_command

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Configuration for a playtest session."""

    variant: str = "freecell"  # freecell, klondike
    draw_count: int = 1
    seed: Optional[int] = None
    auto_move: bool = True
    hints: bool = False
    history_limit: int = DEFAULT_HISTORY_SIZE

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)


@dataclass
class SessionResult:
    """Outcome of a finished session."""

    variant: str
    seed: int
    won: bool
    moves: int
    quit_early: bool
    share_code: str


class PlaytestSession:
    """Plays one game in the terminal, owning the undo/redo history."""

    def __init__(self, config: SessionConfig, initial_state: Optional[GameState] = None):
        """Initialize session.

        Args:
            config: Session settings
            initial_state: Start from this state (e.g. a loaded share code)
                instead of dealing a new game from config.seed
        """
        self.config = config
        self.renderer = StateRenderer()
        self.history: HistoryManager[GameState] = HistoryManager(max_size=config.history_limit)

        if initial_state is None:
            variant = get_variant(config.variant, config.draw_count)
            initial_state = new_game(config.seed, variant)
            if config.auto_move:
                initial_state = apply_safe_auto_moves(initial_state)
        else:
            # Loaded positions are kept exactly as saved
            self.config.seed = initial_state.seed
        self.history.push(initial_state)
        logger.info(
            f"Started {initial_state.variant.name} session (seed {initial_state.seed})"
        )

    @property
    def state(self) -> GameState:
        return self.history.current()

    @property
    def is_won(self) -> bool:
        return is_won(self.state)

    def play(self, move: Move) -> Optional[str]:
        """Apply a move (plus auto-moves when enabled).

        Returns:
            None on success, otherwise the reason the move was rejected
        """
        result = apply_move(self.state, move.source, move.destination)
        if isinstance(result, MoveRejected):
            return result.reason
        if self.config.auto_move:
            result = apply_safe_auto_moves(result)
        self.history.push(result)
        if is_won(result):
            logger.info(f"Game won in {result.move_count} moves (seed {result.seed})")
        return None

    def auto(self) -> int:
        """Play every safe foundation move now; returns how many were made."""
        before = self.state
        after = apply_safe_auto_moves(before)
        moved = after.move_count - before.move_count
        if moved:
            self.history.push(after)
        return moved

    def undo(self) -> bool:
        state = self.history.undo()
        if state is not None:
            logger.debug(f"Undo to move {state.move_count}")
        return state is not None

    def redo(self) -> bool:
        state = self.history.redo()
        if state is not None:
            logger.debug(f"Redo to move {state.move_count}")
        return state is not None

    def hint(self) -> str:
        """Suggest a move, preferring safe foundation plays."""
        move = find_safe_auto_move(self.state)
        if move is None:
            moves = [
                m for m in generate_legal_moves(self.state)
                if m.source.kind != LocationKind.FOUNDATION
            ]
            foundation_moves = [m for m in moves if m.destination.kind == LocationKind.FOUNDATION]
            candidates = foundation_moves or moves
            move = candidates[0] if candidates else None

        needed = sorted(get_lowest_playable_cards(self.state))
        lines = []
        if needed:
            lines.append(f"Next foundation cards in view: {' '.join(needed)}")
        lines.append(f"Try: {format_move(move)}" if move else "No moves available. Undo or quit.")
        return "\n".join(lines)

    def handle(self, result: InputResult, output_fn: Callable[[str], None]) -> None:
        """Act on one parsed input line."""
        if result.error:
            output_fn(result.error)
            return

        if result.move is not None:
            reason = self.play(result.move)
            if reason is not None:
                output_fn(f"Illegal move {format_move(result.move)}: {reason}")
            return

        if result.command == "undo":
            if not self.undo():
                output_fn("Nothing to undo.")
        elif result.command == "redo":
            if not self.redo():
                output_fn("Nothing to redo.")
        elif result.command == "auto":
            moved = self.auto()
            output_fn(f"Auto-moved {moved} card(s)." if moved else "No safe auto-moves.")
        elif result.command == "hint":
            output_fn(self.hint())
        elif result.command == "help":
            output_fn(HELP_TEXT)

    def run(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> SessionResult:
        """Run the interactive loop until the game is won or the player quits.

        Args:
            input_fn: Function to read a line (default: input)
            output_fn: Function to output text (default: print)

        Returns:
            SessionResult describing the finished game
        """
        output_fn(f"Seed: {self.state.seed} (use --seed {self.state.seed} to replay)")
        output_fn("Type '?' for help.")
        quit_early = False

        while True:
            hints = get_lowest_playable_cards(self.state) if self.config.hints else frozenset()
            output_fn("")
            output_fn(self.renderer.render(self.state, hints))

            if self.is_won:
                output_fn("")
                output_fn(f"=== You Win! ({self.state.move_count} moves) ===")
                break

            try:
                raw = input_fn("> ")
            except (EOFError, KeyboardInterrupt):
                quit_early = True
                break

            result = parse_command(raw, self.state.variant)
            if result.quit:
                quit_early = True
                break
            self.handle(result, output_fn)

        share_code = encode_state(self.state)
        if quit_early:
            output_fn(f"Share code: {share_code}")
            logger.info(f"Session quit at move {self.state.move_count}")

        return SessionResult(
            variant=self.state.variant.key,
            seed=self.state.seed,
            won=self.is_won,
            moves=self.state.move_count,
            quit_early=quit_early,
            share_code=share_code,
        )
