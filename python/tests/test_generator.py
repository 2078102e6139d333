"""Starting boards."""

from __future__ import annotations

import pytest

from backend.engine.gamecodec import BoardFormatError
from backend.engine.gamegenerator import GameGenerator
from backend.models.board import Piece


def test_default_board_is_fresh_each_time() -> None:
    a = GameGenerator.default()
    a.shift("9", 1, 0)
    b = GameGenerator.default()
    assert b.get_piece("9") == Piece("9", 0, 4)
    assert (b.width, b.height) == (4, 5)


def test_default_pieces_are_settled() -> None:
    board = GameGenerator.default()
    cells = [c for row in board.grid() for c in row]
    assert cells.count("0") == 2
    assert sum(p.w * p.h for p in board.pieces) == 18


def test_from_encoding() -> None:
    board = GameGenerator.from_encoding("120_340", width=3, height=2)
    assert (board.width, board.height) == (3, 2)
    assert [p.id for p in board.pieces] == ["1", "2", "3", "4"]

    with pytest.raises(BoardFormatError):
        GameGenerator.from_encoding("120_340")
