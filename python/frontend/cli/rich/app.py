"""Rich terminal frontend: coloured tables and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler and backend as the vanilla CLI.  Each piece gets its own
background colour so multi-cell blocks read as one shape.
"""

from __future__ import annotations

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from backend.engine.gamecodec import BoardFormatError, format_board
from backend.engine.gamegenerator import DEFAULT_LAYOUT
from backend.engine.gameplay import GamePlay
from backend.models.board import GOAL_PIECE_ID, Direction
from frontend.cli.input_handler import get_key

console = Console()

# Catppuccin Mocha accents, cycled over piece ids.
_PALETTE = (
    "#89b4fa",
    "#a6e3a1",
    "#f5c2e7",
    "#fab387",
    "#94e2d5",
    "#cba6f7",
    "#f9e2af",
    "#b4befe",
)
_GOAL_STYLE = "bold #1e1e2e on #f38ba8"

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- board rendering ----------------------------------------------------------


def _piece_style(piece_id: str, order: dict[str, int], selected: str) -> str:
    if piece_id == GOAL_PIECE_ID:
        style = _GOAL_STYLE
    else:
        colour = _PALETTE[order[piece_id] % len(_PALETTE)]
        style = f"bold #1e1e2e on {colour}"
    if piece_id == selected:
        style += " underline reverse"
    return style


def _render_board(game: GamePlay, selected: str) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    board = game.board
    order = {p.id: i for i, p in enumerate(board.pieces)}
    table = Table(
        show_header=False,
        show_edge=True,
        show_lines=True,
        pad_edge=False,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(board.width):
        table.add_column(width=5, justify="center")

    for row in board.grid():
        cells: list[Text] = []
        for val in row:
            if val == "0":
                cells.append(Text("  ·  ", style="dim"))
            else:
                cells.append(Text(f"  {val}  ", style=_piece_style(val, order, selected)))
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_game(game: GamePlay, selected: str, status: str = "") -> None:
    console.clear()
    board = game.board

    message = Text(game.message, style="bold green" if game.is_won else "bold")

    info = Text()
    info.append("Selected: ", style="dim")
    info.append(f"#{selected}", style="bold yellow")
    info.append("    Layout: ", style="dim")
    info.append(format_board(game.pieces, board.width, board.height), style="cyan")

    controls = Text()
    controls.append("  id", style="bold cyan")
    controls.append("  select   ", style="dim")
    controls.append("↑↓←→", style="bold cyan")
    controls.append("  drag   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  tap   ", style="dim")
    controls.append("^R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("^L", style="bold cyan")
    controls.append("  load   ", style="dim")
    controls.append("Esc", style="bold cyan")
    controls.append("  quit", style="dim")

    border = "bold green" if game.is_won else "bright_blue"
    panel = Panel(
        Group(
            Align.center(_render_board(game, selected)),
            Text(""),
            Align.center(message),
        ),
        title=f"[bold cyan]Klotski  {board.width}×{board.height}[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(info))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _load(game: GamePlay) -> str:
    """Prompt for a layout string and load it.  Returns a status message."""
    console.print()
    try:
        text = Prompt.ask(
            "  Enter the board state as a hexadecimal string",
            default=DEFAULT_LAYOUT,
            console=console,
        ).strip()
    except (EOFError, KeyboardInterrupt):
        text = ""
    if not text:
        return "[yellow]Input was cancelled.[/yellow]"
    try:
        game.load_board(text)
    except BoardFormatError as e:
        return f"[red]Invalid input: {e}[/red]"
    return "[green]Board loaded.[/green]"


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
        _draw_game(game, selected, status)
        status = ""
        key = get_key()

        if key in _DIRECTIONS and selected:
            game.move(selected, _DIRECTIONS[key])
        elif key == "tap" and selected:
            game.auto_move_if_possible(selected)
        elif key == "reset":
            game.reset()
            status = "[yellow]Reset![/yellow]"
        elif key == "load":
            status = _load(game)
            ids = {p.id for p in game.pieces}
            selected = _default_selection(game, selected)
        elif key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ids:
            selected = key


# -- public entry point -------------------------------------------------------


def run(board: str | None = None) -> None:
    """Launch the Rich CLI, optionally starting from layout *board*."""
    game = GamePlay.from_encoding(board) if board else GamePlay()
    _play(game)
