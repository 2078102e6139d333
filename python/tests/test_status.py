"""Status line wording."""

from __future__ import annotations

import pytest

from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import LastMove, MoveHistory
from backend.engine.gamestatus import INSTRUCTIONS, build_message, direction_name
from backend.models.board import Board, Direction, Piece


@pytest.mark.parametrize(
    ("vector", "name"),
    [((0, 1), "Down"), ((0, -1), "Up"), ((1, 0), "Right"), ((-1, 0), "Left")],
)
def test_direction_name(vector: tuple[int, int], name: str) -> None:
    assert direction_name(*vector) == name


def test_instructions_before_any_move() -> None:
    assert GamePlay().message == INSTRUCTIONS


def test_single_move() -> None:
    game = GamePlay()
    game.move("7", Direction.DOWN)
    assert game.message == "Step 1: Move piece #7: Down"


def test_two_legs_joined_with_and() -> None:
    game = GamePlay.from_encoding("0x0000_0800_0000_0000_0000")
    game.move("8", Direction.RIGHT)
    game.move("8", Direction.DOWN)
    assert game.message == "Step 1: Move piece #8: Right and Down"


def test_cancelled_step() -> None:
    game = GamePlay()
    game.move("9", Direction.RIGHT)
    game.move("a", Direction.LEFT)
    game.move("a", Direction.RIGHT)
    assert game.message == "(Step 2: Cancelled)"


def test_cancelling_the_first_step_shows_instructions() -> None:
    game = GamePlay()
    game.move("9", Direction.RIGHT)
    game.move("9", Direction.LEFT)
    assert game.state.history.last_moved is LastMove.CANCELLED
    assert game.message == INSTRUCTIONS


def test_goal_reached() -> None:
    board = Board(pieces=[Piece("1", 1, 3, 2, 2)])
    history = MoveHistory(last_moved="1", directions=[(0, 1)], moves=5)
    assert (
        build_message(board, history)
        == "Congratulations! You reached the goal in 5 moves!"
    )


def test_goal_reached_by_another_piece_last() -> None:
    board = Board(pieces=[Piece("1", 1, 3, 2, 2), Piece("9", 0, 4)])
    history = MoveHistory(last_moved="9", directions=[(-1, 0)], moves=12)
    assert (
        build_message(board, history)
        == "Congratulations! You reached the goal in 12 moves!"
    )


def test_cancelled_wins_over_goal() -> None:
    board = Board(pieces=[Piece("1", 1, 3, 2, 2)])
    history = MoveHistory(last_moved=LastMove.CANCELLED, directions=[], moves=5)
    assert build_message(board, history) == "(Step 6: Cancelled)"
