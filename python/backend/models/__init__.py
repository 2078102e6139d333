from backend.models.board import Board, Direction, Piece

__all__ = ["Board", "Direction", "Piece"]
