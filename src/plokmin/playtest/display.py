"""Terminal display for solitaire boards."""

from __future__ import annotations

from typing import AbstractSet, Optional

from plokmin.engine.cards import Card
from plokmin.engine.state import GameState, is_won

FACE_DOWN = "##"
EMPTY_SLOT = "[  ]"
COLUMN_WIDTH = 5


def format_card(card: Optional[Card], hints: AbstractSet[str] = frozenset()) -> str:
    """Format card as its id, starred when it is a hinted card."""
    if card is None:
        return EMPTY_SLOT
    return f"{card.id}*" if card.id in hints else card.id


class StateRenderer:
    """Renders a game state as plain text."""

    def render(self, state: GameState, hints: AbstractSet[str] = frozenset()) -> str:
        """Render the whole board.

        Cards whose ids are in `hints` are marked with a star.
        """
        lines: list[str] = []
        variant = state.variant

        title = variant.name
        if variant.uses_stock:
            title += f" (draw {variant.draw_count})"
        lines.append(f"=== {title} | seed {state.seed} | move {state.move_count} ===")
        lines.append("")

        foundations = "  ".join(
            f"f{i + 1} {format_card(pile[-1] if pile else None, hints)}"
            for i, pile in enumerate(state.foundations)
        )
        lines.append(f"Foundations: {foundations}")

        if state.free_cells:
            cells = "  ".join(
                f"c{i + 1} {format_card(cell, hints)}"
                for i, cell in enumerate(state.free_cells)
            )
            lines.append(f"Free cells:  {cells}")

        if variant.uses_stock:
            lines.append(self._render_stock(state, hints))

        lines.append("")
        lines.extend(self._render_tableau(state, hints))

        if is_won(state):
            lines.append("")
            lines.append("*** Solved! ***")

        return "\n".join(lines)

    def _render_stock(self, state: GameState, hints: AbstractSet[str]) -> str:
        stock = f"s [{len(state.stock)}]" if state.stock else "s [  ]"
        # Draw-3 shows the last drawn fan
        shown = state.waste[-state.variant.draw_count:]
        waste = " ".join(format_card(card, hints) for card in shown) if shown else EMPTY_SLOT
        return f"Stock: {stock}  Waste: w {waste}"

    def _render_tableau(self, state: GameState, hints: AbstractSet[str]) -> list[str]:
        header = "".join(f"t{i + 1}".ljust(COLUMN_WIDTH) for i in range(len(state.tableau)))
        rows = [header.rstrip()]

        height = max((len(column) for column in state.tableau), default=0)
        for position in range(height):
            cells = []
            for column in state.tableau:
                if position >= len(column):
                    text = ""
                elif column.is_face_up(position):
                    text = format_card(column.cards[position], hints)
                else:
                    text = FACE_DOWN
                cells.append(text.ljust(COLUMN_WIDTH))
            rows.append("".join(cells).rstrip())

        if height == 0:
            rows.append("(empty)")
        return rows
