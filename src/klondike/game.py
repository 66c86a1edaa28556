"""Cursor/selection state machine that turns logical input into moves.

Front ends decode raw keys into :class:`Event` values and feed them to
:meth:`Game.handle_event`; the game mutates its board through the engine and
asks the render sink to repaint exactly the slots that changed.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Protocol

from klondike.board import Board, Shuffle, make_shuffle
from klondike.engine import MoveOutcome, MoveResult, activate_stock, attempt_move
from klondike.positions import (
    STOCK,
    Position,
    Stock,
    Tableau,
    Waste,
    head,
    is_last,
    next_position,
    pile_size,
    placed_at,
    prev_position,
)

logger = logging.getLogger(__name__)

MSG_REJECTED = "Can't move there."
MSG_NO_CYCLES = "No more stock cycles!"
MSG_WON = "You won! Press N for a new game."


class Event(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    EXPAND_RUN = "expand_run"
    CONTRACT_RUN = "contract_run"
    ACTIVATE = "activate"
    FORCE_REDRAW = "force_redraw"
    NEW_GAME = "new_game"
    QUIT = "quit"


class Highlight(Enum):
    NONE = "none"
    CURSOR = "cursor"
    SELECTED = "selected"
    CURSOR_AND_SELECTED = "cursor_and_selected"


class Visibility(Enum):
    FACE_UP = "face_up"
    FACE_DOWN = "face_down"


class RenderSink(Protocol):
    def render_slot(self, position: Position, visibility: Visibility, highlight: Highlight) -> None:
        """Repaint one pile slot.

        Tableau positions repaint the whole column and apply ``highlight`` to
        the card at the given depth.
        """

    def render_board(self) -> None:
        """Repaint every slot without highlights."""

    def render_message(self, text: str) -> None:
        """Show ``text`` on the status line (empty string clears it)."""


def visibility_for(position: Position) -> Visibility:
    return Visibility.FACE_DOWN if isinstance(position, Stock) else Visibility.FACE_UP


class Game:
    def __init__(
        self,
        sink: RenderSink,
        shuffle: Optional[Shuffle] = None,
        *,
        recycle_limit: Optional[int] = None,
        debug_invariants: bool = False,
    ):
        self.sink = sink
        self.shuffle = shuffle or make_shuffle()
        self.recycle_limit = recycle_limit
        self.debug_invariants = debug_invariants
        self.running = True
        self.message = ""
        self.board = Board.deal(self.shuffle)
        self.cursor: Position = STOCK
        self.selection: Optional[Position] = None
        self.recycles_used = 0

    # ---------- Rendering ----------
    def redraw(self):
        self.sink.render_board()
        self._repaint(())
        self.sink.render_message(self.message)

    def _highlight_for(self, pile: Position) -> tuple:
        if head(self.cursor) == pile:
            style = Highlight.CURSOR_AND_SELECTED if self.selection is not None else Highlight.CURSOR
            return self.cursor, style
        if self.selection is not None and head(self.selection) == pile:
            return self.selection, Highlight.SELECTED
        return pile, Highlight.NONE

    def _repaint(self, piles: Iterable[Position]):
        wanted: List[Position] = []
        extra = [self.cursor] if self.selection is None else [self.selection, self.cursor]
        for p in list(piles) + extra:
            if head(p) not in wanted:
                wanted.append(head(p))
        # cursor last so its highlight ends up on top
        ordered = sorted(wanted, key=lambda p: head(self.cursor) == p)
        for pile in ordered:
            position, style = self._highlight_for(pile)
            self.sink.render_slot(position, visibility_for(position), style)

    def _set_message(self, text: str):
        if text != self.message:
            self.message = text
            self.sink.render_message(text)

    # ---------- Transitions ----------
    def new_game(self):
        self.board = Board.deal(self.shuffle)
        self.cursor = STOCK
        self.selection = None
        self.recycles_used = 0
        self.message = ""
        logger.info("dealt a new game")
        self.redraw()

    def handle_event(self, event: Event) -> None:
        if not self.running:
            return
        before = [self.cursor] + ([self.selection] if self.selection is not None else [])
        affected = ()

        if event is Event.QUIT:
            self.running = False
            self.sink.render_slot(head(self.cursor), visibility_for(self.cursor), Highlight.NONE)
            return
        if event is Event.FORCE_REDRAW:
            self.redraw()
            return
        if event is Event.NEW_GAME:
            self.new_game()
            return

        if event is Event.MOVE_LEFT:
            self._move_left()
        elif event is Event.MOVE_RIGHT:
            self._move_right()
        elif event is Event.EXPAND_RUN:
            self._expand_run()
        elif event is Event.CONTRACT_RUN:
            self._contract_run()
        elif event is Event.ACTIVATE:
            affected = self._activate().affected

        self._repaint(list(affected) + before)
        if self.debug_invariants:
            self.board.check_invariants()

    def _move_left(self):
        if isinstance(self.cursor, Stock):
            return
        if isinstance(self.cursor, Waste) and self.selection is not None:
            return
        self.cursor = prev_position(self.cursor)

    def _move_right(self):
        if is_last(self.cursor):
            return
        self.cursor = next_position(self.cursor)

    def _expand_run(self):
        if self.selection is not None or not isinstance(self.cursor, Tableau):
            return
        deeper = Tableau(self.cursor.pile, self.cursor.depth + 1)
        placed = placed_at(self.board, deeper)
        if placed is not None and placed.visible:
            self.cursor = deeper

    def _contract_run(self):
        if self.selection is not None or not isinstance(self.cursor, Tableau):
            return
        if self.cursor.depth > 0:
            self.cursor = Tableau(self.cursor.pile, self.cursor.depth - 1)

    def _activate(self) -> MoveResult:
        if self.selection is None:
            return self._activate_without_selection()

        result = attempt_move(self.board, self.selection, self.cursor)
        if result.outcome is MoveOutcome.EXECUTED:
            self.selection = None
            self._set_message(MSG_WON if self.board.is_won() else "")
        else:
            self._set_message(MSG_REJECTED)
        return result

    def _activate_without_selection(self) -> MoveResult:
        cursor = self.cursor
        if isinstance(cursor, Stock):
            return self._activate_stock()
        if pile_size(self.board, cursor) == 0:
            return MoveResult(MoveOutcome.EXECUTED)
        self.selection = cursor
        if isinstance(cursor, Tableau):
            self.cursor = head(cursor)
        self._set_message("")
        return MoveResult(MoveOutcome.EXECUTED)

    def _activate_stock(self) -> MoveResult:
        recycling = not self.board.stock and bool(self.board.waste)
        allowed = self.recycle_limit is None or self.recycles_used < self.recycle_limit
        result = activate_stock(self.board, allow_recycle=allowed)
        if result.outcome is MoveOutcome.REJECTED:
            self._set_message(MSG_NO_CYCLES)
        elif recycling:
            self.recycles_used += 1
            logger.info("recycled waste into stock (%d so far)", self.recycles_used)
            self._set_message("")
        return result
