# terminal.py - curses front end: paints the layout grid and decodes keys
from __future__ import annotations

import curses
import logging
from typing import Dict, Optional, Tuple

from klondike import layout as L
from klondike.board import Shuffle
from klondike.game import Event, Game, Highlight, Visibility
from klondike.positions import Position

logger = logging.getLogger(__name__)

KEY_ESC = 27

KEYMAP: Dict[int, Event] = {
    curses.KEY_LEFT: Event.MOVE_LEFT,
    curses.KEY_RIGHT: Event.MOVE_RIGHT,
    curses.KEY_UP: Event.EXPAND_RUN,
    curses.KEY_DOWN: Event.CONTRACT_RUN,
    curses.KEY_ENTER: Event.ACTIVATE,
    ord(" "): Event.ACTIVATE,
    ord("\n"): Event.ACTIVATE,
    ord("\r"): Event.ACTIVATE,
    ord("r"): Event.FORCE_REDRAW,
    ord("n"): Event.NEW_GAME,
    ord("q"): Event.QUIT,
    KEY_ESC: Event.QUIT,
}

HINTS = "arrows: move  space: pick/drop  r: redraw  n: new  q: quit"


def decode_key(key: int) -> Optional[Event]:
    return KEYMAP.get(key)


def safe_addstr(win, y, x, text, attr=0):
    # Writing the bottom-right cell raises even though the text lands
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        pass


class TerminalRenderer:
    """Render sink that paints :mod:`klondike.layout` cells with curses."""

    # (foreground, background) per cell kind; background is replaced by the highlight colour
    KIND_COLORS = {
        L.KIND_FACE: (curses.COLOR_BLACK, curses.COLOR_WHITE),
        L.KIND_BACK: (curses.COLOR_BLUE, curses.COLOR_CYAN),
        L.KIND_EMPTY: (curses.COLOR_GREEN, curses.COLOR_BLACK),
        L.KIND_BLANK: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    }
    HIGHLIGHT_BG = {
        Highlight.CURSOR: curses.COLOR_YELLOW,
        Highlight.SELECTED: curses.COLOR_CYAN,
        Highlight.CURSOR_AND_SELECTED: curses.COLOR_MAGENTA,
    }

    def __init__(self, stdscr, use_color: bool = True):
        self.stdscr = stdscr
        self.use_color = use_color
        self.game: Optional[Game] = None
        self._pairs: Dict[Tuple[int, int], int] = {}

    def bind(self, game: Game):
        self.game = game

    def _pair(self, fg: int, bg: int) -> int:
        key = (fg, bg)
        if key not in self._pairs:
            pair_id = len(self._pairs) + 1
            curses.init_pair(pair_id, fg, bg)
            self._pairs[key] = pair_id
        return curses.color_pair(self._pairs[key])

    def cell_attr(self, cell: L.Cell) -> int:
        if not self.use_color:
            return curses.A_REVERSE if cell.highlight is not Highlight.NONE else 0
        fg, bg = self.KIND_COLORS[cell.kind]
        if cell.red:
            fg = curses.COLOR_RED
        bg = self.HIGHLIGHT_BG.get(cell.highlight, bg)
        return self._pair(fg, bg)

    def _paint(self, cells):
        for cell in cells:
            safe_addstr(self.stdscr, cell.row, cell.col, cell.text, self.cell_attr(cell))

    # ---------- RenderSink ----------
    def render_slot(self, position: Position, visibility: Visibility, highlight: Highlight) -> None:
        self._paint(L.slot_cells(self.game.board, position, visibility, highlight))

    def render_board(self) -> None:
        self.stdscr.erase()
        self._paint(L.board_cells(self.game.board))
        safe_addstr(self.stdscr, L.STATUS_ROW + 1, 0, HINTS)

    def render_message(self, text: str) -> None:
        safe_addstr(self.stdscr, L.STATUS_ROW, 0, L.status_text(text), curses.A_BOLD)


def _init_colors() -> bool:
    if not curses.has_colors():
        return False
    curses.start_color()
    try:
        curses.use_default_colors()
    except curses.error:
        pass
    return True


def run(stdscr, shuffle: Shuffle, recycle_limit=None, debug_invariants=False) -> Game:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    renderer = TerminalRenderer(stdscr, use_color=_init_colors())
    game = Game(renderer, shuffle, recycle_limit=recycle_limit, debug_invariants=debug_invariants)
    renderer.bind(game)
    game.redraw()
    stdscr.refresh()

    while game.running:
        key = stdscr.getch()
        if key == curses.KEY_RESIZE:
            game.handle_event(Event.FORCE_REDRAW)
        else:
            event = decode_key(key)
            if event is None:
                continue
            game.handle_event(event)
        stdscr.refresh()

    stdscr.move(L.STATUS_ROW + 1, 0)
    stdscr.refresh()
    logger.info("terminal session ended")
    return game


def main(shuffle: Shuffle, recycle_limit=None, debug_invariants=False) -> Game:
    return curses.wrapper(run, shuffle, recycle_limit, debug_invariants)
