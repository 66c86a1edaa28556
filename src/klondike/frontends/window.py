# window.py - pygame front end drawing the same character grid in a window
from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Tuple

import pygame

from klondike import layout as L
from klondike.board import Shuffle
from klondike.game import Event, Game, Highlight, Visibility
from klondike.positions import Position

logger = logging.getLogger(__name__)

# ---------- Configuration ----------
FONT_SIZE = 22
MARGIN = 12
FPS = 30

TABLE_BG = (2, 100, 40)
WHITE = (245, 245, 245)
BLACK = (20, 20, 20)
RED = (200, 20, 20)
BACK_FG = (34, 96, 200)
BACK_BG = (150, 190, 240)
EMPTY_FG = (150, 230, 150)
HUD_FG = (255, 255, 180)

KIND_COLORS = {
    L.KIND_FACE: (BLACK, WHITE),
    L.KIND_BACK: (BACK_FG, BACK_BG),
    L.KIND_EMPTY: (EMPTY_FG, TABLE_BG),
    L.KIND_BLANK: (WHITE, TABLE_BG),
}

HIGHLIGHT_BG = {
    Highlight.CURSOR: (255, 255, 120),
    Highlight.SELECTED: (0, 190, 190),
    Highlight.CURSOR_AND_SELECTED: (140, 240, 240),
}

KEYMAP: Dict[int, Event] = {
    pygame.K_LEFT: Event.MOVE_LEFT,
    pygame.K_RIGHT: Event.MOVE_RIGHT,
    pygame.K_UP: Event.EXPAND_RUN,
    pygame.K_DOWN: Event.CONTRACT_RUN,
    pygame.K_SPACE: Event.ACTIVATE,
    pygame.K_RETURN: Event.ACTIVATE,
    pygame.K_KP_ENTER: Event.ACTIVATE,
    pygame.K_r: Event.FORCE_REDRAW,
    pygame.K_n: Event.NEW_GAME,
    pygame.K_q: Event.QUIT,
    pygame.K_ESCAPE: Event.QUIT,
}


def decode_event(e) -> Optional[Event]:
    if e.type == pygame.QUIT:
        return Event.QUIT
    if e.type == pygame.KEYDOWN:
        return KEYMAP.get(e.key)
    return None


def load_font(size: int = FONT_SIZE):
    # Suit glyphs need a Unicode-capable monospace font; fall back to pygame's default
    try:
        font = pygame.font.SysFont("dejavusansmono,menlo,consolas,couriernew", size)
    except Exception:
        font = None
    if font is None:
        font = pygame.font.Font(None, size)
    return font


class WindowRenderer:
    """Render sink that paints :mod:`klondike.layout` cells onto a pygame surface."""

    def __init__(self, surface: pygame.Surface, font):
        self.surface = surface
        self.font = font
        self.char_w, self.char_h = font.size("M")
        self.game: Optional[Game] = None

    def bind(self, game: Game):
        self.game = game

    @staticmethod
    def window_size(font) -> Tuple[int, int]:
        w, h = font.size("M")
        return L.GRID_COLS * w + 2 * MARGIN, (L.GRID_ROWS + 1) * h + 2 * MARGIN

    def cell_rect(self, row: int, col: int, width: int = L.SLOT_W) -> pygame.Rect:
        return pygame.Rect(
            MARGIN + col * self.char_w,
            MARGIN + row * self.char_h,
            width * self.char_w,
            self.char_h,
        )

    def cell_colors(self, cell: L.Cell):
        fg, bg = KIND_COLORS[cell.kind]
        if cell.red:
            fg = RED
        bg = HIGHLIGHT_BG.get(cell.highlight, bg)
        return fg, bg

    def _paint(self, cells):
        for cell in cells:
            fg, bg = self.cell_colors(cell)
            rect = self.cell_rect(cell.row, cell.col)
            pygame.draw.rect(self.surface, bg, rect)
            text = self.font.render(cell.text, True, fg)
            self.surface.blit(text, rect.topleft)

    # ---------- RenderSink ----------
    def render_slot(self, position: Position, visibility: Visibility, highlight: Highlight) -> None:
        self._paint(L.slot_cells(self.game.board, position, visibility, highlight))

    def render_board(self) -> None:
        self.surface.fill(TABLE_BG)
        self._paint(L.board_cells(self.game.board))

    def render_message(self, text: str) -> None:
        rect = self.cell_rect(L.STATUS_ROW, 0, L.GRID_COLS)
        pygame.draw.rect(self.surface, TABLE_BG, rect)
        if text:
            self.surface.blit(self.font.render(text, True, HUD_FG), rect.topleft)


def main(shuffle: Shuffle, recycle_limit=None, debug_invariants=False) -> Game:
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()
    font = load_font()
    screen = pygame.display.set_mode(WindowRenderer.window_size(font))
    pygame.display.set_caption("Klondike")
    clock = pygame.time.Clock()

    renderer = WindowRenderer(screen, font)
    game = Game(renderer, shuffle, recycle_limit=recycle_limit, debug_invariants=debug_invariants)
    renderer.bind(game)
    game.redraw()
    pygame.display.flip()

    while game.running:
        clock.tick(FPS)
        for e in pygame.event.get():
            event = decode_event(e)
            if event is None:
                continue
            game.handle_event(event)
            if not game.running:
                break
        pygame.display.flip()

    logger.info("window session ended")
    pygame.quit()
    return game
