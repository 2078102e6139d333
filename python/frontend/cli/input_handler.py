"""Cross-platform single-keypress reader for CLI frontends.

Arrow keys and control keys are mapped to actions. Every other printable
character comes back as-is, since any character can be a piece id.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getwch()


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    " ": "tap",
    "\r": "tap",
    "\n": "tap",
    "\x03": "quit",  # Ctrl-C
    "\x12": "reset",  # Ctrl-R
    "\x0c": "load",  # Ctrl-L
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

# Windows sends a prefix byte followed by a scan code.
_WIN_ARROW_MAP: dict[str, str] = {
    "H": "up",
    "P": "down",
    "M": "right",
    "K": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "up", "down", "left", "right"  -> arrow keys
        "tap"                          -> Space / Enter
        "reset"                        -> Ctrl-R
        "load"                         -> Ctrl-L
        "quit"                         -> Ctrl-C / Escape
        "<char>"                       -> any other printable char
        ""                             -> unrecognised key
    """
    ch = _getch()

    if ch in ("\x00", "\xe0"):
        return _WIN_ARROW_MAP.get(_getch(), "")

    # Arrow keys (Unix escape sequences: ESC [ A/B/C/D)
    if ch == "\x1b":
        ch2 = _getch()
        if ch2 == "[":
            ch3 = _getch()
            return _ARROW_MAP.get(ch3, "")
        return "quit"  # bare Escape

    return _resolve(ch)
