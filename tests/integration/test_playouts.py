"""End-to-end playouts through the engine and the playtest session."""

import random

import pytest

from plokmin.engine.autoplay import apply_safe_auto_moves
from plokmin.engine.codec import decode_state, encode_state
from plokmin.engine.dealer import new_game
from plokmin.engine.execute import MoveRejected, apply_move, is_won
from plokmin.engine.movegen import generate_legal_moves
from plokmin.engine.state import GameState, LocationKind, check_invariants
from plokmin.engine.variants import FREECELL, KLONDIKE, klondike
from plokmin.playtest.session import PlaytestSession, SessionConfig


def greedy_playout(state: GameState, rng: random.Random, max_moves: int = 300) -> GameState:
    """Prefer foundation moves, never undo them, otherwise move at random."""
    for _ in range(max_moves):
        if is_won(state):
            break
        moves = [
            m for m in generate_legal_moves(state)
            if m.source.kind != LocationKind.FOUNDATION
        ]
        if not moves:
            break
        to_foundation = [m for m in moves if m.destination.kind == LocationKind.FOUNDATION]
        move = to_foundation[0] if to_foundation else rng.choice(moves)
        result = apply_move(state, move.source, move.destination)
        assert not isinstance(result, MoveRejected), result
        state = apply_safe_auto_moves(result)
        check_invariants(state)
    return state


@pytest.mark.parametrize("variant", [FREECELL, KLONDIKE, klondike(3)], ids=lambda v: f"{v.key}-{v.draw_count}")
@pytest.mark.parametrize("seed", [1, 12345, 99999])
def test_greedy_playout_keeps_state_valid(variant, seed):
    """Long playouts stay valid and keep round-tripping through share codes."""
    state = greedy_playout(new_game(seed, variant), random.Random(seed))

    check_invariants(state)
    assert decode_state(encode_state(state)) == state
    assert state.move_count > 0


def test_playout_is_reproducible():
    """Same seed and same choices give the same game."""
    first = greedy_playout(new_game(2024, FREECELL), random.Random(7))
    second = greedy_playout(new_game(2024, FREECELL), random.Random(7))
    assert first == second


def test_session_replays_engine_moves():
    """Moves typed into a session match applying them to the engine directly."""
    config = SessionConfig(seed=4242, auto_move=False)
    session = PlaytestSession(config)
    state = new_game(4242, FREECELL)
    rng = random.Random(1)

    for _ in range(15):
        moves = generate_legal_moves(state)
        if not moves:
            break
        move = rng.choice(moves)
        state = apply_move(state, move.source, move.destination)
        assert session.play(move) is None
        assert session.state == state

    for _ in range(15):
        session.undo()
    assert session.state == new_game(4242, FREECELL)


def test_resume_from_share_code():
    """A game saved mid-way resumes in a new session at the same position."""
    state = greedy_playout(new_game(555, KLONDIKE), random.Random(3), max_moves=40)
    code = encode_state(state)

    session = PlaytestSession(SessionConfig(auto_move=False), initial_state=decode_state(code))
    assert session.state == state
    assert session.config.seed == 555
