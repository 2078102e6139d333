from backend.engine.gameplay.game import DRAG_THRESHOLD, GamePlay

__all__ = ["DRAG_THRESHOLD", "GamePlay"]
