"""Tests for input parsing."""

import pytest

from plokmin.engine.state import Location, Move
from plokmin.engine.variants import FREECELL, KLONDIKE
from plokmin.playtest.input import format_location, format_move, parse_command, parse_location


class TestParseLocation:
    """Tests for pile tokens."""

    def test_piles(self):
        assert parse_location("t1", FREECELL) == Location.tableau(0)
        assert parse_location("t8", FREECELL) == Location.tableau(7)
        assert parse_location("c4", FREECELL) == Location.free_cell(3)
        assert parse_location("f2", FREECELL) == Location.foundation(1)
        assert parse_location("w", KLONDIKE) == Location.waste()
        assert parse_location("s", KLONDIKE) == Location.stock()

    def test_run_count(self):
        assert parse_location("t3x2", FREECELL) == Location.tableau(2, 2)
        assert parse_location("t3x1", FREECELL) == Location.tableau(2)

    @pytest.mark.parametrize("token", ["t0", "t9", "c5", "f5", "x1", "t", "c1x2", "t1x0", "w2"])
    def test_rejects_bad_tokens(self, token):
        with pytest.raises(ValueError):
            parse_location(token, FREECELL)

    def test_variant_specific_piles(self):
        with pytest.raises(ValueError):
            parse_location("c1", KLONDIKE)
        with pytest.raises(ValueError):
            parse_location("t8", KLONDIKE)
        with pytest.raises(ValueError):
            parse_location("w", FREECELL)


class TestFormatLocation:
    """Tests for the typed form of piles and moves."""

    def test_piles(self):
        assert format_location(Location.tableau(4)) == "t5"
        assert format_location(Location.tableau(2, 2)) == "t3x2"
        assert format_location(Location.tableau(2, 1)) == "t3"
        assert format_location(Location.free_cell(0)) == "c1"
        assert format_location(Location.foundation(3)) == "f4"
        assert format_location(Location.waste()) == "w"
        assert format_location(Location.stock()) == "s"

    def test_move(self):
        assert format_move(Move(Location.tableau(4), Location.foundation(0))) == "t5 f1"

    @pytest.mark.parametrize(
        "move, variant",
        [
            (Move(Location.tableau(7, 3), Location.tableau(0)), FREECELL),
            (Move(Location.free_cell(3), Location.foundation(2)), FREECELL),
            (Move(Location.foundation(1), Location.free_cell(0)), FREECELL),
            (Move(Location.stock(), Location.waste()), KLONDIKE),
            (Move(Location.waste(), Location.tableau(6)), KLONDIKE),
        ],
    )
    def test_parses_back(self, move, variant):
        assert parse_command(format_move(move), variant).move == move


class TestParseCommand:
    """Tests for parse_command."""

    def test_move(self):
        result = parse_command("t1 t2", FREECELL)
        assert result.move == Move(Location.tableau(0), Location.tableau(1))
        assert result.error is None

    def test_case_and_whitespace(self):
        result = parse_command("  T3X2   F1 ", FREECELL)
        assert result.move == Move(Location.tableau(2, 2), Location.foundation(0))

    def test_draw(self):
        assert parse_command("d", KLONDIKE).move == Move(Location.stock(), Location.waste())
        assert parse_command("s w", KLONDIKE).move == Move(Location.stock(), Location.waste())
        assert parse_command("d", FREECELL).error is not None

    @pytest.mark.parametrize(
        "raw, command",
        [("u", "undo"), ("r", "redo"), ("a", "auto"), ("h", "hint"), ("?", "help"), ("undo", "undo")],
    )
    def test_commands(self, raw, command):
        assert parse_command(raw, FREECELL).command == command

    @pytest.mark.parametrize("raw", ["q", "quit", "exit", "Q"])
    def test_quit(self, raw):
        assert parse_command(raw, FREECELL).quit

    @pytest.mark.parametrize("raw", ["", "t1", "t1 t2 t3", "hello world", "t1 z9"])
    def test_errors(self, raw):
        result = parse_command(raw, FREECELL)
        assert result.error
        assert result.move is None
        assert not result.quit
