"""Character-grid layout shared by the terminal and window front ends.

Every slot is a 5-character cell on a 6-column pitch.  The top row holds the
stock, the waste and the four foundations; tableaus fan downwards from row 2,
bottom card first, so a pile's top card sits at ``row 1 + len(pile)``.
Front ends turn the :class:`Cell` records produced here into curses
attributes or pygame colours; nothing in this module knows about either.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from klondike.board import FOUNDATION_COUNT, TABLEAU_COUNT, Board
from klondike.cards import KING, Card, Color, display_rank
from klondike.game import Highlight, Visibility, visibility_for
from klondike.positions import STOCK, WASTE, Foundation, Position, Stock, Tableau, Waste, top_card

CELL_W = 6
SLOT_W = 5
TOP_ROW = 0
TABLEAU_ROW = 2
# 6 face-down cards under a full King..Ace run
MAX_TABLEAU_LEN = TABLEAU_COUNT - 1 + KING + 1
GRID_ROWS = TABLEAU_ROW + MAX_TABLEAU_LEN + 2
GRID_COLS = TABLEAU_COUNT * CELL_W
STATUS_ROW = GRID_ROWS - 1

FACE_DOWN_TEXT = " XXX "
EMPTY_TEXT = " ( ) "
BLANK_TEXT = " " * SLOT_W

KIND_FACE = "face"
KIND_BACK = "back"
KIND_EMPTY = "empty"
KIND_BLANK = "blank"


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    text: str
    kind: str
    red: bool = False
    highlight: Highlight = Highlight.NONE


def card_text(card: Card) -> str:
    return f" {display_rank(card.rank):>2}{card.suit.glyph} "


def slot_origin(position: Position) -> Tuple[int, int]:
    """Grid cell of a top-row slot, or the column head of a tableau."""
    if isinstance(position, Stock):
        return TOP_ROW, 0
    if isinstance(position, Waste):
        return TOP_ROW, CELL_W
    if isinstance(position, Foundation):
        return TOP_ROW, (position.index + 3) * CELL_W
    return TABLEAU_ROW, position.pile * CELL_W


def _card_cell(row, col, card: Optional[Card], shown: bool, highlight: Highlight) -> Cell:
    if card is None:
        return Cell(row, col, EMPTY_TEXT, KIND_EMPTY, highlight=highlight)
    if not shown:
        return Cell(row, col, FACE_DOWN_TEXT, KIND_BACK, highlight=highlight)
    return Cell(row, col, card_text(card), KIND_FACE, red=card.color is Color.RED, highlight=highlight)


def slot_cells(
    board: Board,
    position: Position,
    visibility: Visibility,
    highlight: Highlight = Highlight.NONE,
) -> List[Cell]:
    """Cells that repaint ``position``.

    A tableau position yields its whole column (blanking the rows below the
    top card) with ``highlight`` applied only at the addressed depth.
    """

    shown = visibility is Visibility.FACE_UP
    row, col = slot_origin(position)
    if not isinstance(position, Tableau):
        return [_card_cell(row, col, top_card(board, position), shown, highlight)]

    pile = board.tableaus[position.pile]
    cells = []
    if not pile:
        cells.append(_card_cell(TABLEAU_ROW, col, None, shown, highlight))
        first_blank = TABLEAU_ROW + 1
    else:
        target = len(pile) - 1 - position.depth
        for i, placed in enumerate(pile):
            cells.append(
                _card_cell(
                    TABLEAU_ROW + i,
                    col,
                    placed.card,
                    shown and placed.visible,
                    highlight if i == target else Highlight.NONE,
                )
            )
        first_blank = TABLEAU_ROW + len(pile)
    for r in range(first_blank, STATUS_ROW):
        cells.append(Cell(r, col, BLANK_TEXT, KIND_BLANK))
    return cells


def board_cells(board: Board) -> List[Cell]:
    slots: List[Position] = [STOCK, WASTE]
    slots += [Foundation(n) for n in range(FOUNDATION_COUNT)]
    slots += [Tableau(n, 0) for n in range(TABLEAU_COUNT)]
    cells = []
    for position in slots:
        cells.extend(slot_cells(board, position, visibility_for(position)))
    return cells


def status_text(message: str) -> str:
    return message[:GRID_COLS].ljust(GRID_COLS)
