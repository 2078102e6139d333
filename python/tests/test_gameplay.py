"""Game session: moves, taps, drags, reset and custom boards.

Boards are written in the layout format, row by row::

    0x1133_1133_4455_6677_0800

``1``/``3`` are 2x2 blocks, ``4``–``7`` are 2x1 bars and ``8`` is a
single cell with free space on both sides.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gamecodec import BoardFormatError
from backend.engine.gamegenerator import DEFAULT_LAYOUT, GameGenerator
from backend.engine.gameplay import DRAG_THRESHOLD, GamePlay
from backend.engine.gamestate import LastMove
from backend.engine.gamestatus import INSTRUCTIONS
from backend.models.board import Direction, Piece

CORRIDOR = "0x1133_1133_4455_6677_0800"
OPEN = "0x0000_0800_0000_0000_0000"


# -- helpers ------------------------------------------------------------------


def _assert_settled(game: GamePlay) -> None:
    """Every piece inside the board and no two pieces sharing a cell."""
    board = game.board
    seen: dict[tuple[int, int], str] = {}
    for p in board.pieces:
        assert not board.is_out_of_bounds(p, 0, 0), p
        for x in range(p.x, p.x + p.w):
            for y in range(p.y, p.y + p.h):
                assert (x, y) not in seen, f"{p.id} overlaps {seen[(x, y)]}"
                seen[(x, y)] = p.id


def _history(game: GamePlay) -> tuple:
    h = game.state.history
    return h.last_moved, list(h.directions), h.moves


# -- move_if_possible / do_move -----------------------------------------------


def test_legal_move_applies() -> None:
    game = GamePlay()
    assert game.move_if_possible("7", 0, 1)
    assert game.board.get_piece("7") == Piece("7", 1, 4)
    assert _history(game) == ("7", [(0, 1)], 1)


def test_illegal_move_has_no_side_effects() -> None:
    game = GamePlay()
    calls: list[GamePlay] = []
    game.subscribe(calls.append)

    assert not game.move_if_possible("1", 0, 1)
    assert not game.move_if_possible("9", -1, 0)

    assert game.pieces == GameGenerator.default_pieces()
    assert _history(game) == (LastMove.NONE, [], 0)
    assert calls == []


def test_stale_piece_record_is_resolved_by_id() -> None:
    game = GamePlay()
    nine = game.board.get_piece("9")
    assert game.move_if_possible(nine, 1, 0)
    # ``nine`` still says x=0; the live piece at x=1 is the one that moves.
    assert game.move_if_possible(nine, 1, 0)
    assert game.board.get_piece("9").x == 2
    assert not game.move_if_possible(nine, 1, 0)


def test_move_by_direction() -> None:
    game = GamePlay()
    assert game.move("a", Direction.LEFT)
    assert game.board.get_piece("a") == Piece("a", 2, 4)


def test_right_then_left_cancels() -> None:
    game = GamePlay.from_encoding("0x0110_0110_0000_0000_0000")
    assert game.move_if_possible("1", 1, 0)
    assert game.move_if_possible("1", -1, 0)

    assert game.state.moves == 0
    assert game.state.history.last_moved is LastMove.CANCELLED
    assert game.state.history.last_moved != "1"
    assert game.state.history.directions == []


def test_do_move_notifies_listeners() -> None:
    game = GamePlay()
    calls: list[GamePlay] = []
    game.subscribe(calls.append)

    game.do_move("9", 1, 0)

    assert calls == [game]


def test_random_play_keeps_board_settled() -> None:
    rng = random.Random(1234)
    game = GamePlay()
    ids = [p.id for p in game.pieces]
    for _ in range(2000):
        piece = rng.choice(ids)
        kind = rng.random()
        if kind < 0.4:
            game.move(piece, rng.choice(list(Direction)))
        elif kind < 0.7:
            game.auto_move_if_possible(piece)
        else:
            game.drag(piece, rng.uniform(-40, 40), rng.uniform(-40, 40))
        _assert_settled(game)
        assert len(game.state.history.directions) <= 2


# -- auto-move ----------------------------------------------------------------


def test_tap_with_single_free_direction() -> None:
    game = GamePlay()
    assert game.movable_directions("7") == [Direction.DOWN]
    assert game.auto_move_if_possible("7")
    assert game.board.get_piece("7") == Piece("7", 1, 4)


def test_tap_on_blocked_piece_does_nothing() -> None:
    game = GamePlay()
    assert game.movable_directions("1") == []
    assert not game.auto_move_if_possible("1")
    assert _history(game) == (LastMove.NONE, [], 0)


@pytest.mark.parametrize(
    ("layout", "free"),
    [
        (OPEN, 4),
        ("0x0000_8000_0000_0000_0000", 3),
    ],
)
def test_tap_with_three_or_four_free_directions_does_nothing(
    layout: str, free: int
) -> None:
    game = GamePlay.from_encoding(layout)
    assert len(game.movable_directions("8")) == free
    assert not game.auto_move_if_possible("8")
    assert game.pieces == GamePlay.from_encoding(layout).pieces


def test_tap_with_two_free_directions_picks_first() -> None:
    game = GamePlay.from_encoding("0x1133_1133_4455_6677_0080")
    assert game.movable_directions("8") == [Direction.LEFT, Direction.RIGHT]
    assert game.auto_move_if_possible("8")
    assert game.board.get_piece("8") == Piece("8", 1, 4)


def test_tap_avoids_undoing_the_step() -> None:
    game = GamePlay.from_encoding(CORRIDOR)
    game.move("8", Direction.RIGHT)
    assert game.board.get_piece("8") == Piece("8", 2, 4)
    assert game.movable_directions("8") == [Direction.LEFT, Direction.RIGHT]

    # LEFT would undo the step, so the tap keeps going right.
    assert game.auto_move_if_possible("8")

    assert game.board.get_piece("8") == Piece("8", 3, 4)
    assert _history(game) == ("8", [(1, 0), (1, 0)], 1)


def test_tap_mid_step_continues_first_direction() -> None:
    game = GamePlay.from_encoding("0x1133_1133_4455_6677_0080")
    game.move("8", Direction.LEFT)
    assert game.movable_directions("8") == [Direction.LEFT, Direction.RIGHT]

    assert game.auto_move_if_possible("8")

    assert game.board.get_piece("8") == Piece("8", 0, 4)
    assert _history(game) == ("8", [(-1, 0), (-1, 0)], 1)


def test_tap_after_cancel_is_not_mid_step() -> None:
    game = GamePlay.from_encoding(CORRIDOR)
    game.move("8", Direction.RIGHT)
    game.move("8", Direction.LEFT)
    assert game.state.history.last_moved is LastMove.CANCELLED

    assert game.auto_move_if_possible("8")

    assert game.board.get_piece("8") == Piece("8", 0, 4)


def test_tap_other_piece_in_between_resets_preference() -> None:
    game = GamePlay.from_encoding("0x1133_1133_4450_6677_0800")
    game.move("8", Direction.RIGHT)
    assert game.move("5", Direction.RIGHT)
    # "8" is no longer mid-step, so the first free direction wins.
    assert game.auto_move_if_possible("8")
    assert game.board.get_piece("8") == Piece("8", 1, 4)


# -- gestures -----------------------------------------------------------------


def test_short_gesture_is_a_tap() -> None:
    game = GamePlay()
    assert game.drag("7", 1, 2)
    assert game.board.get_piece("7") == Piece("7", 1, 4)


def test_threshold_boundary_is_a_drag() -> None:
    # "9" can only go right, so a tap moves it but an upward drag cannot.
    game = GamePlay()
    assert not game.drag("9", 0, -DRAG_THRESHOLD)
    assert _history(game) == (LastMove.NONE, [], 0)

    assert game.drag("9", 0, -(DRAG_THRESHOLD - 1))
    assert game.board.get_piece("9") == Piece("9", 1, 4)


def test_drag_uses_dominant_axis() -> None:
    game = GamePlay()
    assert game.drag("9", 30, -12)
    assert game.board.get_piece("9") == Piece("9", 1, 4)

    game = GamePlay()
    assert not game.drag("9", 12, -30)


def test_drag_tie_goes_vertical() -> None:
    game = GamePlay()
    assert game.drag("7", 20, 20)
    assert game.board.get_piece("7") == Piece("7", 1, 4)


def test_begin_and_end_gesture() -> None:
    game = GamePlay()
    game.begin_gesture(100, 100, game.board.get_piece("a"))
    assert game.end_gesture(60, 104)
    assert game.board.get_piece("a") == Piece("a", 2, 4)


def test_end_gesture_without_start() -> None:
    game = GamePlay()
    assert not game.end_gesture(10, 10)
    game.begin_gesture(0, 0, "9")
    game.end_gesture(50, 0)
    assert not game.end_gesture(100, 0)


# -- commands -----------------------------------------------------------------


def test_reset_restores_initial_layout() -> None:
    game = GamePlay()
    calls: list[GamePlay] = []
    game.subscribe(calls.append)
    game.move("9", Direction.RIGHT)
    game.move("a", Direction.LEFT)

    game.reset()

    assert game.pieces == GameGenerator.default_pieces()
    assert _history(game) == (LastMove.NONE, [], 0)
    assert game.message == INSTRUCTIONS
    assert len(calls) == 3


def test_load_board_replaces_initial_layout() -> None:
    game = GamePlay()
    game.move("9", Direction.RIGHT)

    game.load_board(CORRIDOR)

    assert {p.id for p in game.pieces} == {"1", "3", "4", "5", "6", "7", "8"}
    assert _history(game) == (LastMove.NONE, [], 0)

    game.move("8", Direction.RIGHT)
    game.reset()
    assert game.board.get_piece("8") == Piece("8", 1, 4)


def test_load_board_failure_changes_nothing() -> None:
    game = GamePlay()
    game.move("9", Direction.RIGHT)
    game.move("9", Direction.RIGHT)
    pieces, history = game.pieces, _history(game)
    calls: list[GamePlay] = []
    game.subscribe(calls.append)

    with pytest.raises(BoardFormatError):
        game.load_board("0x2113_2113")

    assert game.pieces == pieces
    assert _history(game) == history
    assert calls == []

    # the rejected text did not become the reset target either
    game.reset()
    assert game.pieces == GameGenerator.default_pieces()


def test_from_encoding() -> None:
    game = GamePlay.from_encoding(DEFAULT_LAYOUT)
    assert sorted(game.pieces, key=lambda p: p.id) == sorted(
        GamePlay().pieces, key=lambda p: p.id
    )

    with pytest.raises(BoardFormatError):
        GamePlay.from_encoding("nope")


def test_win_after_move() -> None:
    game = GamePlay.from_encoding("0x0000_0000_0110_0110_0000")
    assert not game.is_won
    game.move("1", Direction.DOWN)
    assert game.is_won
    assert game.message == "Congratulations! You reached the goal in 1 moves!"


@pytest.mark.parametrize(
    "directions",
    [
        (Direction.RIGHT, Direction.RIGHT, Direction.RIGHT),
        (Direction.RIGHT, Direction.DOWN, Direction.RIGHT),
    ],
)
def test_three_moves_of_one_piece_count_once(directions) -> None:
    game = GamePlay.from_encoding("0x8000_0000_0000_0000_0000")
    for d in directions:
        assert game.move("8", d)
    assert game.state.moves == 1
    assert game.message.startswith("Step 1: Move piece #8: ")
