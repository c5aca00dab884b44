"""Tests for move execution and Klondike draws."""

from plokmin.engine.cards import SUIT_ORDER, Card, parse_card
from plokmin.engine.dealer import new_game
from plokmin.engine.execute import MoveRejected, apply_move, draw_from_stock, is_won
from plokmin.engine.state import GameState, Location, TableauColumn
from plokmin.engine.variants import FREECELL, KLONDIKE, klondike


def cards(*ids: str):
    """Helper to create a tuple of cards from ids."""
    return tuple(parse_card(i) for i in ids)


def freecell_state(columns, free_cells=(None, None, None, None), foundations=((), (), (), ())) -> GameState:
    """Create FreeCell state with fully face-up columns (padded to 8)."""
    columns = list(columns) + [[]] * (8 - len(columns))
    return GameState(
        variant=FREECELL,
        tableau=tuple(TableauColumn(cards(*col), len(col)) for col in columns),
        free_cells=tuple(parse_card(c) if c else None for c in free_cells),
        foundations=tuple(cards(*pile) for pile in foundations),
    )


def klondike_state(columns, stock=(), waste=(), draw_count=1) -> GameState:
    """Create Klondike state from (card ids, face-up count) pairs (padded to 7)."""
    columns = list(columns) + [([], 0)] * (7 - len(columns))
    return GameState(
        variant=klondike(draw_count),
        tableau=tuple(TableauColumn(cards(*ids), up) for ids, up in columns),
        free_cells=(),
        foundations=((), (), (), ()),
        stock=cards(*stock),
        waste=cards(*waste),
    )


class TestApplyMove:
    """Tests for apply_move."""

    def test_tableau_to_tableau(self):
        state = freecell_state([["K♣", "7♥"], ["8♠"]])
        result = apply_move(state, Location.tableau(0), Location.tableau(1))

        assert isinstance(result, GameState)
        assert result.tableau[0].cards == cards("K♣")
        assert result.tableau[1].cards == cards("8♠", "7♥")
        assert result.tableau[1].face_up_count == 2
        assert result.move_count == 1

    def test_does_not_mutate_input(self):
        state = freecell_state([["K♣", "7♥"], ["8♠"]])
        apply_move(state, Location.tableau(0), Location.tableau(1))
        assert state.tableau[0].cards == cards("K♣", "7♥")
        assert state.move_count == 0

    def test_run_move(self):
        state = freecell_state([["K♣", "8♠", "7♥"], ["9♦"]])
        result = apply_move(state, Location.tableau(0, 2), Location.tableau(1))

        assert result.tableau[1].cards == cards("9♦", "8♠", "7♥")
        assert result.tableau[0].cards == cards("K♣")

    def test_to_free_cell_and_back(self):
        state = freecell_state([["K♣", "7♥"]])
        result = apply_move(state, Location.tableau(0), Location.free_cell(2))
        assert result.free_cells == (None, None, parse_card("7♥"), None)

        back = apply_move(result, Location.free_cell(2), Location.tableau(5))
        assert back.free_cells == (None, None, None, None)
        assert back.tableau[5].cards == cards("7♥")
        assert back.move_count == 2

    def test_to_foundation(self):
        state = freecell_state([["K♣", "A♥"]])
        result = apply_move(state, Location.tableau(0), Location.foundation(1))
        assert result.foundations[1] == cards("A♥")

    def test_from_foundation(self):
        state = freecell_state([["3♥"]], foundations=(("A♠", "2♠"), (), (), ()))
        result = apply_move(state, Location.foundation(0), Location.tableau(0))
        assert result.foundations[0] == cards("A♠")
        assert result.tableau[0].cards == cards("3♥", "2♠")

    def test_rejected_move(self):
        state = freecell_state([["7♥"], ["8♥"]])
        result = apply_move(state, Location.tableau(0), Location.tableau(1))

        assert isinstance(result, MoveRejected)
        assert "7♥" in result.reason

    def test_empty_source_rejected(self):
        """Empty piles give a rejection, never an exception."""
        state = freecell_state([["7♥"]])
        for source in (Location.tableau(3), Location.free_cell(0), Location.foundation(0)):
            result = apply_move(state, source, Location.tableau(1))
            assert isinstance(result, MoveRejected)
            assert result.reason.startswith("No movable cards")

    def test_reveals_face_down_card(self):
        state = klondike_state([(["5♣", "Q♥"], 1), (["K♠"], 1)])
        result = apply_move(state, Location.tableau(0), Location.tableau(1))

        assert result.tableau[0].cards == cards("5♣")
        assert result.tableau[0].face_up_count == 1
        assert result.tableau[1].face_up_count == 2

    def test_partial_run_keeps_face_up_count(self):
        state = klondike_state([(["5♣", "K♠", "Q♥", "J♣"], 3), (["Q♦"], 1)])
        result = apply_move(state, Location.tableau(0), Location.tableau(1))

        assert result.tableau[0].face_up_count == 2
        assert result.tableau[0].face_down_count == 1

    def test_emptied_column_has_no_face_up(self):
        state = klondike_state([(["K♠"], 1)], waste=())
        result = apply_move(state, Location.tableau(0), Location.tableau(1))
        assert result.tableau[0] == TableauColumn()

    def test_waste_to_tableau(self):
        state = klondike_state([(["8♠"], 1)], waste=("A♦", "7♥"))
        result = apply_move(state, Location.waste(), Location.tableau(0))
        assert result.waste == cards("A♦")
        assert result.tableau[0].cards == cards("8♠", "7♥")

    def test_stock_move_delegates_to_draw(self):
        state = klondike_state([(["K♠"], 1)], stock=("2♣", "3♣"))
        assert apply_move(state, Location.stock(), Location.waste()) == draw_from_stock(state)


class TestDrawFromStock:
    """Tests for Klondike draws."""

    def test_draw_one(self):
        state = klondike_state([(["K♠"], 1)], stock=("2♣", "3♣", "4♣"))
        result = draw_from_stock(state)

        assert result.stock == cards("2♣", "3♣")
        assert result.waste == cards("4♣")
        assert result.move_count == 1

    def test_draw_three_keeps_order(self):
        state = klondike_state([(["K♠"], 1)], stock=("2♣", "3♣", "4♣", "5♣"), draw_count=3)
        result = draw_from_stock(state)

        assert result.stock == cards("2♣")
        assert result.waste == cards("3♣", "4♣", "5♣")

    def test_draw_three_with_short_stock(self):
        state = klondike_state([(["K♠"], 1)], stock=("2♣",), waste=("9♦",), draw_count=3)
        result = draw_from_stock(state)

        assert result.stock == ()
        assert result.waste == cards("9♦", "2♣")

    def test_recycles_waste_reversed(self):
        state = klondike_state([(["K♠"], 1)], waste=("2♣", "3♣", "4♣"))
        result = draw_from_stock(state)

        # recycled stock is 4,3,2 (top last): the first card drawn is 2♣ again
        assert result.waste == cards("2♣")
        assert result.stock == cards("4♣", "3♣")
        assert result.move_count == 1

    def test_both_empty_rejected(self):
        state = klondike_state([(["K♠"], 1)])
        assert isinstance(draw_from_stock(state), MoveRejected)

    def test_freecell_has_no_stock(self):
        assert isinstance(draw_from_stock(new_game(1, FREECELL)), MoveRejected)

    def test_full_pass_returns_to_start(self):
        state = new_game(12345, KLONDIKE)
        current = state
        for _ in range(25):
            current = draw_from_stock(current)
        # 24 draws empty the stock, the 25th recycles and draws the first card again
        assert current.waste == state.stock[-1:]
        assert current.stock == state.stock[:-1]


class TestIsWon:
    """Tests for is_won."""

    def test_new_game_not_won(self):
        assert not is_won(new_game(1, FREECELL))

    def test_full_foundations_won(self):
        foundations = tuple(
            tuple(Card(suit, rank) for rank in range(1, 14)) for suit in SUIT_ORDER
        )
        state = GameState(
            variant=FREECELL,
            tableau=(TableauColumn(),) * 8,
            free_cells=(None,) * 4,
            foundations=foundations,
        )
        assert is_won(state)
