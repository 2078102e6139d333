from backend.engine.gamestatus.status import INSTRUCTIONS, build_message, direction_name

__all__ = ["INSTRUCTIONS", "build_message", "direction_name"]
