#!/usr/bin/env python3
"""Klotski sliding-block puzzle.

Usage::

    python main.py                          # interactive menu
    python main.py -f rich                  # Rich terminal
    python main.py -f pygame -b 0x2113_2113_4556_4786_900a
    python main.py -f vanilla -v --log-file klotski.log
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamecodec import BoardFormatError, parse_board  # noqa: E402

logger = logging.getLogger("klotski")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}

_MENU = {
    "1": Frontend.vanilla,
    "2": Frontend.rich,
    "3": Frontend.pygame,
    "4": Frontend.pyqt,
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool, log_file: Optional[Path]) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=str(log_file) if log_file else None,
    )


def _validate_board(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        parse_board(value)
    except BoardFormatError as e:
        raise typer.BadParameter(str(e)) from e
    return value


def _launch(frontend: Frontend, board: Optional[str]) -> None:
    logger.info("Starting %s frontend", frontend.value)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(board=board)


def _menu_loop(board: Optional[str]) -> None:
    while True:
        print()
        print("  ====================================")
        print("            K L O T S K I             ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (Pygame GUI)")
        print("  4.  Play  (PyQt GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in _MENU:
            _launch(_MENU[choice], board)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    board: Optional[str] = typer.Option(
        None, "-b", "--board",
        callback=_validate_board,
        help="Starting layout, e.g. 0x2113_2113_4556_4786_900a.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log every move at DEBUG level.",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Write log records to this file instead of stderr.",
    ),
) -> None:
    """Klotski sliding-block puzzle."""
    _configure_logging(verbose, log_file)

    if frontend is None:
        _menu_loop(board)
        return

    _launch(frontend, board)


if __name__ == "__main__":
    app()
