"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from backend.models.board import Board, Piece

Vector = tuple[int, int]


class LastMove(enum.Enum):
    """Markers for ``MoveHistory.last_moved`` that are never a piece id."""

    NONE = "none"
    CANCELLED = "cancelled"


@dataclass
class MoveHistory:
    """Counts moves, merging consecutive moves of one piece into one step.

    ``directions`` is the current streak: the displacements applied to
    ``last_moved`` since it became the active piece. It holds at most two
    vectors.
    """

    last_moved: str | LastMove = LastMove.NONE
    directions: list[Vector] = field(default_factory=list)
    moves: int = 0

    def record(self, piece_id: str, dx: int, dy: int) -> None:
        back = (-dx, -dy)

        if self.last_moved != piece_id:
            self.last_moved = piece_id
            self.directions = [(dx, dy)]
            self.moves += 1
        elif len(self.directions) == 1 and self.directions[0] == back:
            # Undoing the only move of the step takes the step back.
            self.last_moved = LastMove.CANCELLED
            self.directions = []
            self.moves -= 1
        elif len(self.directions) == 2 and self.directions[1] == back:
            self.directions = self.directions[:1]
        elif len(self.directions) == 2:
            # Still the same step; the latest leg replaces the second one.
            self.directions = [self.directions[0], (dx, dy)]
        else:
            self.directions.append((dx, dy))

    def is_streak_of(self, piece_id: str) -> bool:
        return self.last_moved == piece_id and bool(self.directions)


class GameState:
    """Holds the current board, its starting snapshot, and the move history."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.initial: tuple[Piece, ...] = tuple(board.pieces)
        self.history = MoveHistory()

    @property
    def moves(self) -> int:
        return self.history.moves

    @property
    def is_solved(self) -> bool:
        return self.board.is_goal_reached()

    def restore(self) -> None:
        """Put the starting pieces back and forget all moves."""
        self.board = Board(
            pieces=list(self.initial),
            width=self.board.width,
            height=self.board.height,
        )
        self.history = MoveHistory()
