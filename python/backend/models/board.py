"""Board model for the sliding-block puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum

BOARD_WIDTH = 4
BOARD_HEIGHT = 5

GOAL_PIECE_ID = "1"
GOAL_POSITION = (1, 3)


class Direction(StrEnum):
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"

    @property
    def vector(self) -> tuple[int, int]:
        return _VECTORS[self]


_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


@dataclass(frozen=True)
class Piece:
    """A rectangular block. ``(x, y)`` is the top-left cell."""

    id: str
    x: int
    y: int
    w: int = 1
    h: int = 1

    def moved(self, dx: int, dy: int) -> Piece:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def covers(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h


@dataclass
class Board:
    """Represents the puzzle board.

    Pieces are kept in a list whose order only matters for rendering.
    Empty cells are not stored.
    """

    pieces: list[Piece] = field(default_factory=list)
    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT

    # -- geometry -------------------------------------------------------------

    def is_out_of_bounds(self, piece: Piece, dx: int, dy: int) -> bool:
        new_x = piece.x + dx
        new_y = piece.y + dy
        return (
            new_x < 0
            or new_y < 0
            or new_x + piece.w > self.width
            or new_y + piece.h > self.height
        )

    @staticmethod
    def is_overlap(piece: Piece, dx: int, dy: int, other: Piece) -> bool:
        """Check whether *piece* shifted by ``(dx, dy)`` intersects *other*."""
        new_x = piece.x + dx
        new_y = piece.y + dy
        return (
            new_x < other.x + other.w
            and new_x + piece.w > other.x
            and new_y < other.y + other.h
            and new_y + piece.h > other.y
        )

    def is_movable(self, piece: Piece, dx: int, dy: int) -> bool:
        if self.is_out_of_bounds(piece, dx, dy):
            return False
        return not any(
            self.is_overlap(piece, dx, dy, other)
            for other in self.pieces
            if other.id != piece.id
        )

    # -- queries --------------------------------------------------------------

    def get_piece(self, piece_id: str) -> Piece:
        for p in self.pieces:
            if p.id == piece_id:
                return p
        raise KeyError(f"No piece {piece_id!r} on the board.")

    def piece_at(self, x: int, y: int) -> Piece | None:
        for p in self.pieces:
            if p.covers(x, y):
                return p
        return None

    def grid(self) -> list[list[str]]:
        """Return the board as rows of cell characters, ``"0"`` for empty."""
        cells = [["0"] * self.width for _ in range(self.height)]
        for p in self.pieces:
            for y in range(p.y, p.y + p.h):
                for x in range(p.x, p.x + p.w):
                    cells[y][x] = p.id
        return cells

    def is_goal_reached(self) -> bool:
        gx, gy = GOAL_POSITION
        return any(
            p.id == GOAL_PIECE_ID and p.x == gx and p.y == gy for p in self.pieces
        )

    # -- mutation -------------------------------------------------------------

    def shift(self, piece_id: str, dx: int, dy: int) -> Piece:
        """Move a piece without any legality check and return its new record."""
        for i, p in enumerate(self.pieces):
            if p.id == piece_id:
                self.pieces[i] = p.moved(dx, dy)
                return self.pieces[i]
        raise KeyError(f"No piece {piece_id!r} on the board.")
