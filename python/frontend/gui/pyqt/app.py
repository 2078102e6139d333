"""PyQt6 GUI frontend: fully self-contained.

The board is a custom-painted widget: pressing on a piece starts a
gesture, releasing finishes it.  Reset and Load buttons sit under the
status line.  No terminal interaction required.
"""

from __future__ import annotations

import sys

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QKeyEvent, QMouseEvent, QPainter, QPaintEvent
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gamecodec import BoardFormatError, format_board
from backend.engine.gamegenerator import DEFAULT_LAYOUT
from backend.engine.gameplay import GamePlay
from backend.models.board import GOAL_PIECE_ID

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_BLUE = "#89b4fa"
_GREEN = "#a6e3a1"
_PINK = "#f5c2e7"
_RED = "#f38ba8"
_RED_H = "#f5a0b8"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_TILE_PX = 80
_GAP = 4


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    min_w: int = 0,
    min_h: int = 40,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:8px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )
    return btn


# ═══════════════════════════════════════════════════════════════════════════
# Board widget
# ═══════════════════════════════════════════════════════════════════════════


class _BoardWidget(QWidget):
    """Paints the pieces and turns mouse press/release into gestures."""

    def __init__(self, game: GamePlay) -> None:
        super().__init__()
        self.game = game
        self.sync_size()

    def sync_size(self) -> None:
        board = self.game.board
        self.setFixedSize(
            board.width * (_TILE_PX + _GAP) + _GAP,
            board.height * (_TILE_PX + _GAP) + _GAP,
        )

    def _cell_at(self, x: float, y: float) -> tuple[int, int]:
        return int((x - _GAP) // (_TILE_PX + _GAP)), int((y - _GAP) // (_TILE_PX + _GAP))

    # -- painting --

    def paintEvent(self, event: QPaintEvent | None) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(_MANTLE))
        painter.drawRoundedRect(QRectF(self.rect()), 10, 10)

        painter.setFont(QFont("Helvetica", 22, QFont.Weight.Bold))
        for p in self.game.pieces:
            rect = QRectF(
                _GAP + p.x * (_TILE_PX + _GAP),
                _GAP + p.y * (_TILE_PX + _GAP),
                p.w * _TILE_PX + (p.w - 1) * _GAP,
                p.h * _TILE_PX + (p.h - 1) * _GAP,
            )
            if p.id == GOAL_PIECE_ID:
                colour = _GREEN if self.game.is_won else _RED
            else:
                colour = _BLUE
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(colour))
            painter.drawRoundedRect(rect, 8, 8)
            painter.setPen(QColor(_BASE))
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, p.id)
        painter.end()

    # -- gestures --

    def mousePressEvent(self, event: QMouseEvent | None) -> None:  # noqa: N802
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        piece = self.game.board.piece_at(*self._cell_at(pos.x(), pos.y()))
        if piece is not None:
            self.game.begin_gesture(pos.x(), pos.y(), piece)

    def mouseReleaseEvent(self, event: QMouseEvent | None) -> None:  # noqa: N802
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self.game.end_gesture(pos.x(), pos.y())


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════


class _MainWindow(QMainWindow):
    def __init__(self, game: GamePlay) -> None:
        super().__init__()
        self.game = game

        self.setWindowTitle("Klotski")
        self.setStyleSheet(_GLOBAL_CSS)

        page = QWidget()
        page.setObjectName("page")
        root = QVBoxLayout(page)
        root.setSpacing(10)
        root.setContentsMargins(20, 14, 20, 14)

        title = QLabel("K L O T S K I")
        title.setFont(QFont("Helvetica", 22, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        self._board = _BoardWidget(game)
        root.addWidget(self._board, alignment=Qt.AlignmentFlag.AlignCenter)

        self._message = QLabel()
        self._message.setFont(QFont("Helvetica", 13))
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message.setWordWrap(True)
        root.addWidget(self._message)

        hbox = QHBoxLayout()
        hbox.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hbox.setSpacing(12)
        self.reset_btn = _styled_btn("R E S E T", bg=_RED, hover=_RED_H, fg=_BASE, min_w=140)
        self.reset_btn.clicked.connect(self.game.reset)
        hbox.addWidget(self.reset_btn)
        self.load_btn = _styled_btn("L O A D", min_w=140)
        self.load_btn.clicked.connect(self._load)
        hbox.addWidget(self.load_btn)
        root.addLayout(hbox)

        hint = QLabel("Drag or click pieces     R  reset     L  load     Esc  quit")
        hint.setFont(QFont("Helvetica", 11))
        hint.setStyleSheet(f"color:{_OVERLAY0};")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(hint)

        self.setCentralWidget(page)

        game.subscribe(lambda _: self._sync())
        self._sync()

    # -- helpers ---

    def _sync(self) -> None:
        colour = _GREEN if self.game.is_won else _PINK
        self._message.setStyleSheet(f"color:{colour};")
        self._message.setText(self.game.message)
        self._board.sync_size()
        self._board.update()
        self.adjustSize()

    def _load(self) -> None:
        board = self.game.board
        text, ok = QInputDialog.getText(
            self,
            "Load board",
            f"Enter the board state as a hexadecimal string (e.g. {DEFAULT_LAYOUT}):",
            QLineEdit.EchoMode.Normal,
            format_board(self.game.state.initial, board.width, board.height),
        )
        if not ok or not text.strip():
            QMessageBox.information(self, "Load board", "Input was cancelled.")
            return
        try:
            self.game.load_board(text.strip())
        except BoardFormatError as e:
            QMessageBox.warning(self, "Load board", f"Invalid input: {e}")

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        if key == Qt.Key.Key_R:
            self.game.reset()
        elif key == Qt.Key.Key_L:
            self._load()
        elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self.close()
        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(board: str | None = None) -> None:
    """Launch the PyQt6 GUI, optionally starting from layout *board*."""
    game = GamePlay.from_encoding(board) if board else GamePlay()
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(game)
    window.show()
    qapp.exec()
