"""Builds starting boards for a game session."""

from __future__ import annotations

from backend.engine.gamecodec import parse_board
from backend.models.board import BOARD_HEIGHT, BOARD_WIDTH, Board, Piece

DEFAULT_LAYOUT = "0x2113_2113_4556_4786_900a"

# Hakoiri-Musume: the 2x2 piece starts top centre and must reach (1, 3).
_DEFAULT_PIECES: tuple[Piece, ...] = (
    Piece("1", 1, 0, 2, 2),
    Piece("2", 0, 0, 1, 2),
    Piece("3", 3, 0, 1, 2),
    Piece("4", 0, 2, 1, 2),
    Piece("5", 1, 2, 2, 1),
    Piece("6", 3, 2, 1, 2),
    Piece("7", 1, 3, 1, 1),
    Piece("8", 2, 3, 1, 1),
    Piece("9", 0, 4, 1, 1),
    Piece("a", 3, 4, 1, 1),
)


class GameGenerator:
    """Stateless board factory: all methods are static."""

    @staticmethod
    def default_pieces() -> tuple[Piece, ...]:
        return _DEFAULT_PIECES

    @staticmethod
    def default() -> Board:
        """Return a fresh board in the classic starting layout."""
        return Board(pieces=list(_DEFAULT_PIECES))

    @staticmethod
    def from_encoding(
        text: str, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT
    ) -> Board:
        """Return a board parsed from a layout string.

        Raises ``BoardFormatError`` if *text* is malformed.
        """
        return Board(pieces=parse_board(text, width, height), width=width, height=height)
