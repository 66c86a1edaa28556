"""Move validation and execution.

``attempt_move`` is the only path that transfers cards between piles;
``activate_stock`` is the only path that touches the stock.  Both return a
:class:`MoveResult` naming the pile slots the renderer has to repaint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from klondike.board import Board
from klondike.cards import ACE, KING, Placement
from klondike.positions import (
    STOCK,
    WASTE,
    Foundation,
    Position,
    Stock,
    Tableau,
    Waste,
    head,
    placed_at,
    pop,
    push,
    top_card,
)

logger = logging.getLogger(__name__)


class MoveOutcome(Enum):
    EXECUTED = "executed"
    REJECTED = "rejected"
    INVALID = "invalid"


@dataclass(frozen=True)
class MoveResult:
    outcome: MoveOutcome
    affected: Tuple[Position, ...] = ()

    @property
    def executed(self) -> bool:
        return self.outcome is MoveOutcome.EXECUTED


NOOP = MoveResult(MoveOutcome.EXECUTED)
REJECTED = MoveResult(MoveOutcome.REJECTED)
INVALID = MoveResult(MoveOutcome.INVALID)


def _invalid(reason: str, src: Position, dst: Position) -> MoveResult:
    logger.error("invalid move %s -> %s: %s", src, dst, reason)
    return INVALID


def _rejected(reason: str, src: Position, dst: Position) -> MoveResult:
    logger.debug("rejected move %s -> %s: %s", src, dst, reason)
    return REJECTED


def will_move_multiple_cards(position: Position) -> bool:
    return isinstance(position, Tableau) and position.depth > 0


def attempt_move(board: Board, src: Position, dst: Position) -> MoveResult:
    """Move the card (or tableau run) rooted at ``src`` onto ``dst``.

    Rejected and invalid moves leave ``board`` untouched.  Re-targeting the
    pile a selection came from is a successful no-op.
    """

    if src == dst:
        return NOOP
    if isinstance(src, Tableau) and isinstance(dst, Tableau) and src.pile == dst.pile:
        return NOOP

    card = top_card(board, src)
    if card is None:
        return _invalid("source slot is empty", src, dst)
    if isinstance(src, Tableau) and not placed_at(board, src).visible:
        return _invalid("source card is face-down", src, dst)

    if isinstance(dst, Stock):
        return _invalid("the stock is never a destination", src, dst)

    if isinstance(dst, Waste):
        return _rejected("the waste only takes cards from the stock", src, dst)

    if isinstance(dst, Foundation) and not will_move_multiple_cards(src):
        target = top_card(board, dst)
        if target is None:
            if card.rank != ACE:
                return _rejected("empty foundation needs an Ace", src, dst)
        elif not card.placeable_on(target, Placement.FOUNDATION):
            return _rejected(f"{card} does not follow {target}", src, dst)

        push(board, dst, pop(board, src))
        if isinstance(src, Tableau):
            board.reveal_top(src.pile)
        return MoveResult(MoveOutcome.EXECUTED, (head(src), dst))

    if isinstance(dst, Tableau):
        if isinstance(src, Stock):
            return _invalid("the stock cannot feed a tableau directly", src, dst)
        target = top_card(board, Tableau(dst.pile, 0))
        if target is None:
            if card.rank != KING:
                return _rejected("empty tableau needs a King", src, dst)
        elif not card.placeable_on(target, Placement.TABLEAU):
            return _rejected(f"{card} does not fit on {target}", src, dst)

        dst_head = Tableau(dst.pile, 0)
        if isinstance(src, Tableau):
            _move_run(board, src, dst_head)
        else:
            push(board, dst_head, pop(board, src))
        return MoveResult(MoveOutcome.EXECUTED, (head(src), dst_head))

    return _rejected("a run cannot go onto a foundation", src, dst)


def _move_run(board: Board, src: Tableau, dst: Tableau) -> None:
    from_pile = board.tableaus[src.pile]
    cut = len(from_pile) - 1 - src.depth
    run = from_pile[cut:]
    del from_pile[cut:]
    for placed in run:
        push(board, dst, placed.card)
    board.reveal_top(src.pile)


def activate_stock(board: Board, allow_recycle: bool = True) -> MoveResult:
    """Draw one card onto the waste, or turn the waste back over when the stock is empty."""

    if board.stock:
        board.waste.append(board.stock.pop())
        return MoveResult(MoveOutcome.EXECUTED, (STOCK, WASTE))
    if not board.waste:
        return NOOP
    if not allow_recycle:
        logger.debug("stock recycle refused, limit reached")
        return REJECTED
    board.stock = list(reversed(board.waste))
    board.waste.clear()
    return MoveResult(MoveOutcome.EXECUTED, (STOCK, WASTE))
