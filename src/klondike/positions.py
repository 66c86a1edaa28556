"""Logical addresses for every pile slot on the board.

A position names a pile (and, for tableaus, how far below the top card the
slot sits).  Positions are immutable values: the cursor and the selection are
both plain positions, and stepping left/right produces new ones.

The left/right order is fixed::

    Stock < Waste < Foundation(0..3) < Tableau(0, 0) < ... < Tableau(6, 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from klondike.board import FOUNDATION_COUNT, TABLEAU_COUNT, Board
from klondike.cards import Card, PlacedCard
from klondike.errors import ContractViolation


@dataclass(frozen=True)
class Stock:
    def __str__(self):
        return "Stock"


@dataclass(frozen=True)
class Waste:
    def __str__(self):
        return "Waste"


@dataclass(frozen=True)
class Foundation:
    index: int

    def __post_init__(self):
        if not 0 <= self.index < FOUNDATION_COUNT:
            raise ContractViolation(f"foundation index out of range: {self.index}")

    def __str__(self):
        return f"Foundation({self.index})"


@dataclass(frozen=True)
class Tableau:
    pile: int
    depth: int = 0

    def __post_init__(self):
        if not 0 <= self.pile < TABLEAU_COUNT:
            raise ContractViolation(f"tableau index out of range: {self.pile}")
        if self.depth < 0:
            raise ContractViolation(f"negative tableau depth: {self.depth}")

    def __str__(self):
        return f"Tableau({self.pile}, {self.depth})"


Position = Union[Stock, Waste, Foundation, Tableau]

STOCK = Stock()
WASTE = Waste()

LINEAR_ORDER: Tuple[Position, ...] = (
    (STOCK, WASTE)
    + tuple(Foundation(n) for n in range(FOUNDATION_COUNT))
    + tuple(Tableau(n, 0) for n in range(TABLEAU_COUNT))
)


def head(position: Position) -> Position:
    """The same pile addressed at its top card."""
    if isinstance(position, Tableau):
        return Tableau(position.pile, 0)
    return position


def order_index(position: Position) -> int:
    return LINEAR_ORDER.index(head(position))


def next_position(position: Position) -> Position:
    idx = order_index(position)
    if idx + 1 >= len(LINEAR_ORDER):
        raise ContractViolation(f"no position after {position}")
    return LINEAR_ORDER[idx + 1]


def prev_position(position: Position) -> Position:
    idx = order_index(position)
    if idx == 0:
        raise ContractViolation(f"no position before {position}")
    return LINEAR_ORDER[idx - 1]


def is_last(position: Position) -> bool:
    return head(position) == LINEAR_ORDER[-1]


def placed_at(board: Board, position: Tableau) -> Optional[PlacedCard]:
    pile = board.tableaus[position.pile]
    if position.depth >= len(pile):
        return None
    return pile[len(pile) - 1 - position.depth]


def top_card(board: Board, position: Position) -> Optional[Card]:
    if isinstance(position, Stock):
        return board.stock[-1] if board.stock else None
    if isinstance(position, Waste):
        return board.waste[-1] if board.waste else None
    if isinstance(position, Foundation):
        f = board.foundations[position.index]
        return f[-1] if f else None
    if isinstance(position, Tableau):
        placed = placed_at(board, position)
        return placed.card if placed else None
    raise ContractViolation(f"not a position: {position!r}")


def pop(board: Board, position: Position) -> Optional[Card]:
    if isinstance(position, Stock):
        return board.stock.pop() if board.stock else None
    if isinstance(position, Waste):
        return board.waste.pop() if board.waste else None
    if isinstance(position, Foundation):
        f = board.foundations[position.index]
        return f.pop() if f else None
    if isinstance(position, Tableau):
        if position.depth != 0:
            raise ContractViolation(f"cannot pop below the top card: {position}")
        t = board.tableaus[position.pile]
        return t.pop().card if t else None
    raise ContractViolation(f"not a position: {position!r}")


def push(board: Board, position: Position, card: Card) -> None:
    if isinstance(position, (Stock, Waste)):
        raise ContractViolation(f"{position} is never a direct push target")
    if isinstance(position, Foundation):
        board.foundations[position.index].append(card)
        return
    if isinstance(position, Tableau):
        if position.depth != 0:
            raise ContractViolation(f"cannot push below the top card: {position}")
        board.tableaus[position.pile].append(PlacedCard(card, visible=True))
        return
    raise ContractViolation(f"not a position: {position!r}")


def pile_size(board: Board, position: Position) -> int:
    if isinstance(position, Stock):
        return len(board.stock)
    if isinstance(position, Waste):
        return len(board.waste)
    if isinstance(position, Foundation):
        return len(board.foundations[position.index])
    if isinstance(position, Tableau):
        return len(board.tableaus[position.pile])
    raise ContractViolation(f"not a position: {position!r}")
