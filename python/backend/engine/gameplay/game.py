"""Core gameplay logic: validates and applies moves, resolves taps and drags."""

from __future__ import annotations

import logging
from collections.abc import Callable

from backend.engine.gamecodec import BoardFormatError, parse_board
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState
from backend.engine.gamestatus import build_message
from backend.models.board import Board, Direction, Piece

logger = logging.getLogger(__name__)

# Pointer travel (Manhattan, in shell units) below which a gesture is a tap.
DRAG_THRESHOLD = 4

# Enumeration order for auto-move; earlier entries win ties.
_AUTO_DIRECTIONS = (Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN)

Listener = Callable[["GamePlay"], None]


def _sign(v: float) -> int:
    return (v > 0) - (v < 0)


class GamePlay:
    """Orchestrates a single game session.

    Every method taking a *piece* accepts either a ``Piece`` or its id;
    the piece is always looked up on the live board by id.
    """

    def __init__(self, board: Board | None = None) -> None:
        self.state = GameState(board if board is not None else GameGenerator.default())
        self._listeners: list[Listener] = []
        self._gesture: tuple[float, float, str] | None = None

    @classmethod
    def from_encoding(cls, text: str) -> "GamePlay":
        """Create a session from a layout string (see ``parse_board``)."""
        return cls(GameGenerator.from_encoding(text))

    # -- render contract --------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return tuple(self.state.board.pieces)

    @property
    def message(self) -> str:
        return build_message(self.state.board, self.state.history)

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    def subscribe(self, listener: Listener) -> None:
        """Call *listener* with this game after every change to board or history."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    # -- movement ---------------------------------------------------------------

    def _resolve(self, piece: Piece | str) -> Piece:
        piece_id = piece.id if isinstance(piece, Piece) else piece
        return self.state.board.get_piece(piece_id)

    def movable_directions(self, piece: Piece | str) -> list[Direction]:
        p = self._resolve(piece)
        return [d for d in _AUTO_DIRECTIONS if self.state.board.is_movable(p, *d.vector)]

    def move_if_possible(self, piece: Piece | str, dx: int, dy: int) -> bool:
        """Apply the move if it is legal. Returns True if the piece moved."""
        p = self._resolve(piece)
        if not self.state.board.is_movable(p, dx, dy):
            return False
        self.do_move(p, dx, dy)
        return True

    def move(self, piece: Piece | str, direction: Direction) -> bool:
        return self.move_if_possible(piece, *direction.vector)

    def do_move(self, piece: Piece | str, dx: int, dy: int) -> None:
        """Shift a piece and update the move count. The move is not validated."""
        p = self._resolve(piece)
        self.state.board.shift(p.id, dx, dy)
        self.state.history.record(p.id, dx, dy)
        logger.debug(
            "Moved piece %s by (%d, %d); step %d", p.id, dx, dy, self.state.moves
        )
        self._notify()

    def auto_move_if_possible(self, piece: Piece | str) -> bool:
        """Move a tapped piece when the direction is unambiguous.

        With one free direction the piece goes there. With two, the first
        in left/up/right/down order wins, unless the piece is mid-step and
        that direction would take it straight back where the step started.
        """
        p = self._resolve(piece)
        dirs = self.movable_directions(p)

        if len(dirs) == 1:
            choice = dirs[0]
        elif len(dirs) == 2:
            choice = dirs[0]
            history = self.state.history
            if history.is_streak_of(p.id):
                fx, fy = dirs[0].vector
                if history.directions[0] == (-fx, -fy):
                    choice = dirs[1]
        else:
            logger.debug("Tap on piece %s ignored: %d free directions", p.id, len(dirs))
            return False

        logger.debug("Tap on piece %s resolved to %s", p.id, choice.value)
        self.do_move(p, *choice.vector)
        return True

    # -- gestures ---------------------------------------------------------------

    def drag(self, piece: Piece | str, dx: float, dy: float) -> bool:
        """Dispatch a pointer gesture with raw displacement ``(dx, dy)``."""
        if abs(dx) + abs(dy) < DRAG_THRESHOLD:
            return self.auto_move_if_possible(piece)
        if abs(dx) > abs(dy):
            return self.move_if_possible(piece, _sign(dx), 0)
        return self.move_if_possible(piece, 0, _sign(dy))

    def begin_gesture(self, x: float, y: float, piece: Piece | str) -> None:
        self._gesture = (x, y, self._resolve(piece).id)

    def end_gesture(self, x: float, y: float) -> bool:
        if self._gesture is None:
            return False
        x0, y0, piece_id = self._gesture
        self._gesture = None
        return self.drag(piece_id, x - x0, y - y0)

    # -- commands ---------------------------------------------------------------

    def reset(self) -> None:
        """Restore the starting layout and clear the move count."""
        self.state.restore()
        self._gesture = None
        logger.info("Board reset")
        self._notify()

    def load_board(self, text: str) -> None:
        """Replace the starting layout with *text* and reset.

        On ``BoardFormatError`` the current board and history are left as
        they were.
        """
        board = self.state.board
        try:
            pieces = parse_board(text, board.width, board.height)
        except BoardFormatError as e:
            logger.warning("Rejected board %r: %s", text, e)
            raise
        self.state.initial = tuple(pieces)
        logger.info("Loaded board %s with %d pieces", text, len(pieces))
        self.reset()
