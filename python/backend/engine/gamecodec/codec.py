"""Text encoding of board layouts.

A layout is a row-major string of ``width * height`` cells, optionally
prefixed with ``0x`` and split by ``_`` for readability::

    0x2113_2113_4556_4786_900a

``0`` marks an empty cell; any other character names the piece that
covers the cell.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from backend.models.board import BOARD_HEIGHT, BOARD_WIDTH, Piece

logger = logging.getLogger(__name__)

EMPTY = "0"


class BoardFormatError(ValueError):
    """Raised when a layout string cannot be turned into a board."""


def parse_board(
    text: str, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT
) -> list[Piece]:
    """Parse a layout string into pieces, in first-appearance order.

    Each piece becomes the bounding box of the cells carrying its id.
    The cells are not checked to actually fill that box, so an L-shaped
    or split group of characters silently becomes one rectangle.
    """
    cells = text.removeprefix("0x").replace("_", "")
    if len(cells) != width * height:
        raise BoardFormatError(
            f"Invalid state string length: expected {width * height} cells "
            f"for a {width}×{height} board, got {len(cells)}."
        )

    found: dict[str, Piece] = {}
    for y in range(height):
        for x in range(width):
            cell = cells[y * width + x]
            if cell == EMPTY:
                continue
            piece = found.get(cell)
            if piece is None:
                found[cell] = Piece(cell, x, y)
            else:
                found[cell] = Piece(
                    cell,
                    piece.x,
                    piece.y,
                    max(piece.w, x - piece.x + 1),
                    max(piece.h, y - piece.y + 1),
                )

    logger.debug("Parsed %d pieces from %r", len(found), text)
    return list(found.values())


def format_board(
    pieces: Iterable[Piece],
    width: int = BOARD_WIDTH,
    height: int = BOARD_HEIGHT,
    *,
    prefix: bool = True,
    separator: str = "_",
) -> str:
    """Encode *pieces* as a layout string, one ``separator``-joined group per row."""
    rows = [[EMPTY] * width for _ in range(height)]
    for p in pieces:
        for y in range(p.y, p.y + p.h):
            for x in range(p.x, p.x + p.w):
                rows[y][x] = p.id
    body = separator.join("".join(row) for row in rows)
    return f"0x{body}" if prefix else body
