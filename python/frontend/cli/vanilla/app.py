"""Vanilla terminal frontend: no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Type a piece id to select it, then drag it with the arrow keys or tap it
with Space to let the game pick the direction.
"""

from __future__ import annotations

import sys

from backend.engine.gamecodec import BoardFormatError, format_board
from backend.engine.gamegenerator import DEFAULT_LAYOUT
from backend.engine.gameplay import GamePlay
from backend.models.board import GOAL_PIECE_ID, Direction
from frontend.cli.input_handler import get_key


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset
_SEL = "\033[46;30m"  # cyan bg, black fg (selected piece)


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- board rendering ----------------------------------------------------------


def _render_board(game: GamePlay, selected: str) -> str:
    """Return an ANSI-coloured drawing of the board.

    Walls are only drawn between cells that belong to different pieces,
    so each piece shows up as one outlined block.
    """
    grid = game.board.grid()
    height, width = len(grid), len(grid[0])

    def at(x: int, y: int) -> str | None:
        if 0 <= x < width and 0 <= y < height:
            return grid[y][x]
        return None

    def cell(v: str) -> str:
        if v == "0":
            return f"{_DIM} · {_R}"
        if v == selected:
            return f"{_SEL} {v} {_R}"
        if v == GOAL_PIECE_ID:
            return f"{_Y} {v} {_R}"
        return f" {v} "

    lines: list[str] = []
    for y in range(height + 1):
        border = "+"
        for x in range(width):
            border += ("---" if at(x, y - 1) != at(x, y) else "   ") + "+"
        lines.append(border)
        if y == height:
            break
        row = ""
        for x in range(width + 1):
            row += "|" if at(x - 1, y) != at(x, y) else " "
            if x < width:
                row += cell(grid[y][x])
        lines.append(row)
    return "\n".join("  " + line for line in lines)


# -- screens ------------------------------------------------------------------


def _show_game(game: GamePlay, selected: str, status: str = "") -> None:
    _clear()
    board = game.board
    colour = _G if game.is_won else _C
    print(f"  {colour}=== Klotski ({board.width}×{board.height}) ==={_R}")
    print()
    print(_render_board(game, selected))
    print()
    print(f"  {_G if game.is_won else _BOLD}{game.message}{_R}")
    print(f"  {_DIM}Selected:{_R} #{selected}   {_DIM}Layout:{_R} {format_board(game.pieces, board.width, board.height)}")
    print()
    print(
        f"  {_C}id{_R}: select  |  "
        f"{_C}Arrows{_R}: drag  |  "
        f"{_C}Space{_R}: tap  |  "
        f"{_C}^R{_R}: reset  |  "
        f"{_C}^L{_R}: load  |  "
        f"{_C}Esc{_R}: quit"
    )
    if status:
        print(f"\n  {status}")


def _load(game: GamePlay) -> str:
    """Prompt for a layout string and load it.  Returns a status message."""
    _clear()
    print(f"  {_C}=== Load board ==={_R}\n")
    print(f"  Enter the board state as a hexadecimal string (e.g. {DEFAULT_LAYOUT}):")
    try:
        text = input("  > ").strip()
    except EOFError:
        text = ""
    if not text:
        return f"{_Y}Input was cancelled.{_R}"
    try:
        game.load_board(text)
    except BoardFormatError as e:
        return f"{_RED}Invalid input: {e}{_R}"
    return f"{_G}Board loaded.{_R}"


# -- game loop ----------------------------------------------------------------


def _default_selection(game: GamePlay, preferred: str) -> str:
    ids = [p.id for p in game.pieces]
    if preferred in ids:
        return preferred
    return ids[0] if ids else ""


def _play(game: GamePlay) -> None:
    ids = {p.id for p in game.pieces}
    selected = _default_selection(game, GOAL_PIECE_ID)
    status = ""

    while True:
        _show_game(game, selected, status)
        status = ""
        key = get_key()

        if key in _DIRECTIONS and selected:
            game.move(selected, _DIRECTIONS[key])
        elif key == "tap" and selected:
            game.auto_move_if_possible(selected)
        elif key == "reset":
            game.reset()
        elif key == "load":
            status = _load(game)
            ids = {p.id for p in game.pieces}
            selected = _default_selection(game, selected)
        elif key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key in ids:
            selected = key


# -- public entry point -------------------------------------------------------


def run(board: str | None = None) -> None:
    """Launch the vanilla CLI, optionally starting from layout *board*."""
    game = GamePlay.from_encoding(board) if board else GamePlay()
    _play(game)
