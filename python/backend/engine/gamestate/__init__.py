from backend.engine.gamestate.state import GameState, LastMove, MoveHistory

__all__ = ["GameState", "LastMove", "MoveHistory"]
