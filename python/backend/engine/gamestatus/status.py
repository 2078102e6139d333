"""Human-readable status line for the current game."""

from __future__ import annotations

from backend.engine.gamestate.state import LastMove, MoveHistory
from backend.models.board import Board

INSTRUCTIONS = "You can move pieces by clicking or dragging."


def direction_name(dx: int, dy: int) -> str:
    if dx == 0:
        return "Down" if dy > 0 else "Up"
    return "Right" if dx > 0 else "Left"


def build_message(board: Board, history: MoveHistory) -> str:
    if history.last_moved is LastMove.NONE or history.moves == 0:
        return INSTRUCTIONS
    if not history.directions:
        return f"(Step {history.moves + 1}: Cancelled)"
    if board.is_goal_reached():
        return f"Congratulations! You reached the goal in {history.moves} moves!"
    dirs = " and ".join(direction_name(dx, dy) for dx, dy in history.directions)
    return f"Step {history.moves}: Move piece #{history.last_moved}: {dirs}"
