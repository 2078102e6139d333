from backend.engine.gamegenerator.generator import DEFAULT_LAYOUT, GameGenerator

__all__ = ["DEFAULT_LAYOUT", "GameGenerator"]
