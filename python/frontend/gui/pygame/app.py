"""Pygame GUI frontend: fully self-contained.

Pieces are dragged with the mouse: a press on a piece starts a gesture
and the release anywhere in the window finishes it.  A click without
movement lets the game pick the direction.  Custom layouts are typed
into an in-window text field.
"""

from __future__ import annotations

import enum

import pygame

from backend.engine.gamecodec import BoardFormatError, format_board
from backend.engine.gamegenerator import DEFAULT_LAYOUT
from backend.engine.gameplay import GamePlay
from backend.models.board import GOAL_PIECE_ID, Piece

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 440, 640
TILE_GAP = 4
MARGIN = 20
BOARD_TOP = 64
BOARD_MAX_W = WIN_W - 2 * MARGIN
BOARD_MAX_H = 440


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    PLAYING = "playing"
    LOADING = "loading"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, game: GamePlay) -> None:
        self._game = game
        self._screen = _Screen.PLAYING
        self._status_msg: str = ""
        self._input_text: str = ""

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Klotski")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)
        self._f_mono = pygame.font.SysFont("Courier", 18, bold=True)

        self._build_game_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_game_btns(self) -> None:
        """Build in-game action buttons (placed below the board)."""
        bw, gap = 120, 12
        sx = _cx(2 * bw + gap)
        self._reset_btn = _Btn(
            (sx, 0, bw, 36), "RESET (R)", self._f_btn_sm,
            bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE,
        )
        self._load_btn = _Btn(
            (sx + bw + gap, 0, bw, 36), "LOAD (L)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._game_action_btns = [self._reset_btn, self._load_btn]

    # ── helpers ─────────────────────────────────────────────────────────────

    def _tile_layout(self) -> tuple[int, int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_w, total_h)."""
        board = self._game.board
        tile_px = min(
            (BOARD_MAX_W - (board.width + 1) * TILE_GAP) // board.width,
            (BOARD_MAX_H - (board.height + 1) * TILE_GAP) // board.height,
        )
        total_w = board.width * tile_px + (board.width + 1) * TILE_GAP
        total_h = board.height * tile_px + (board.height + 1) * TILE_GAP
        ox = _cx(total_w) + TILE_GAP
        oy = BOARD_TOP + TILE_GAP
        return tile_px, ox, oy, total_w, total_h

    def _piece_rect(self, p: Piece, tpx: int, ox: int, oy: int) -> pygame.Rect:
        return pygame.Rect(
            ox + p.x * (tpx + TILE_GAP),
            oy + p.y * (tpx + TILE_GAP),
            p.w * tpx + (p.w - 1) * TILE_GAP,
            p.h * tpx + (p.h - 1) * TILE_GAP,
        )

    def _piece_under(self, pos: tuple[int, int]) -> Piece | None:
        tpx, ox, oy, _, _ = self._tile_layout()
        for p in self._game.pieces:
            if self._piece_rect(p, tpx, ox, oy).collidepoint(pos):
                return p
        return None

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        board = game.board
        tpx, ox, oy, total_w, total_h = self._tile_layout()
        f_tile = pygame.font.SysFont("Helvetica", max(14, tpx // 3), bold=True)

        _blit_center(
            self._surf,
            self._f_title.render(
                f"Klotski  {board.width}×{board.height}", True, COL_TEXT
            ),
            14,
        )

        # board bg
        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total_w), BOARD_TOP, total_w, total_h),
            border_radius=10,
        )

        # pieces
        for p in game.pieces:
            rect = self._piece_rect(p, tpx, ox, oy)
            col = COL_RED if p.id == GOAL_PIECE_ID else COL_BLUE
            if game.is_won and p.id == GOAL_PIECE_ID:
                col = COL_GREEN
            pygame.draw.rect(self._surf, col, rect, border_radius=6)
            lbl = f_tile.render(p.id, True, COL_BASE)
            self._surf.blit(
                lbl,
                (
                    rect.centerx - lbl.get_width() // 2,
                    rect.centery - lbl.get_height() // 2,
                ),
            )

        # status line
        msg_y = BOARD_TOP + total_h + 12
        _blit_center(
            self._surf,
            self._f_body.render(
                game.message, True, COL_GREEN if game.is_won else COL_PINK
            ),
            msg_y,
        )

        # action buttons row
        btn_y = msg_y + 30
        for btn in self._game_action_btns:
            btn.rect.y = btn_y
            btn.draw(self._surf)

        footer_y = btn_y + 46
        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_YELLOW),
                footer_y,
            )
            footer_y += 20

        _blit_center(
            self._surf,
            self._f_small.render(
                "Drag or click pieces     R  reset     L  load     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            footer_y,
        )

    def _draw_loading(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf, self._f_title.render("Load board", True, COL_TEXT), 80
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                "Enter the board state as a hexadecimal string", True, COL_SUBTEXT
            ),
            140,
        )
        _blit_center(
            self._surf,
            self._f_small.render(f"e.g. {DEFAULT_LAYOUT}", True, COL_OVERLAY0),
            166,
        )

        field = pygame.Rect(MARGIN, 210, WIN_W - 2 * MARGIN, 44)
        pygame.draw.rect(self._surf, COL_SURFACE0, field, border_radius=8)
        txt = self._f_mono.render(self._input_text + "_", True, COL_TEXT)
        self._surf.blit(txt, (field.x + 10, field.centery - txt.get_height() // 2))

        _blit_center(
            self._surf,
            self._f_small.render(
                "Enter  load     Esc  cancel", True, COL_OVERLAY0
            ),
            280,
        )

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game

        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_action_btns:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._reset_btn.hit(ev.pos):
                self._do_reset()
                return True
            if self._load_btn.hit(ev.pos):
                self._open_loading()
                return True
            piece = self._piece_under(ev.pos)
            if piece is not None:
                game.begin_gesture(ev.pos[0], ev.pos[1], piece)
        elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
            if game.end_gesture(ev.pos[0], ev.pos[1]):
                self._status_msg = ""
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_r:
                self._do_reset()
            elif ev.key == pygame.K_l:
                self._open_loading()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    def _ev_loading(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.TEXTINPUT:
            self._input_text += ev.text
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_BACKSPACE:
                self._input_text = self._input_text[:-1]
            elif ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._submit_loading()
            elif ev.key == pygame.K_ESCAPE:
                self._status_msg = "Input was cancelled."
                self._close_loading()
        return True

    # ── actions ─────────────────────────────────────────────────────────────

    def _do_reset(self) -> None:
        self._game.reset()
        self._status_msg = ""

    def _open_loading(self) -> None:
        board = self._game.board
        self._input_text = format_board(self._game.state.initial, board.width, board.height)
        self._screen = _Screen.LOADING
        pygame.key.start_text_input()

    def _close_loading(self) -> None:
        pygame.key.stop_text_input()
        self._screen = _Screen.PLAYING

    def _submit_loading(self) -> None:
        text = self._input_text.strip()
        if not text:
            self._status_msg = "Input was cancelled."
        else:
            try:
                self._game.load_board(text)
            except BoardFormatError as e:
                self._status_msg = f"Invalid input: {e}"
            else:
                self._status_msg = "Board loaded."
        self._close_loading()

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.PLAYING: self._ev_game,
            _Screen.LOADING: self._ev_loading,
        }
        _draw = {
            _Screen.PLAYING: self._draw_game,
            _Screen.LOADING: self._draw_loading,
        }

        pygame.key.stop_text_input()
        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            drawer = _draw.get(self._screen)
            if drawer:
                drawer()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(board: str | None = None) -> None:
    """Launch the Pygame GUI, optionally starting from layout *board*."""
    game = GamePlay.from_encoding(board) if board else GamePlay()
    app = PygameApp(game)
    app.run_loop()
