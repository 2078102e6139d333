from backend.engine.gamecodec.codec import BoardFormatError, format_board, parse_board

__all__ = ["BoardFormatError", "format_board", "parse_board"]
