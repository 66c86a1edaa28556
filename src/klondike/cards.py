"""Card identity, suits and the placement rules used by every pile."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from klondike.errors import ContractViolation


class Color(Enum):
    RED = "red"
    BLACK = "black"


class Suit(Enum):
    DIAMONDS = 0
    HEARTS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def color(self) -> Color:
        return color(self)

    @property
    def glyph(self) -> str:
        return SUIT_GLYPHS[self]


SUIT_GLYPHS = {
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

ACE = 0
KING = 12
RANKS = range(ACE, KING + 1)

RANK_TO_TEXT = {0: "A", 10: "J", 11: "Q", 12: "K"}
for _r in range(1, 10):
    RANK_TO_TEXT[_r] = str(_r + 1)


def color(suit: Suit) -> Color:
    if suit in (Suit.DIAMONDS, Suit.HEARTS):
        return Color.RED
    return Color.BLACK


def display_rank(rank: int) -> str:
    """Return the face label for ``rank`` (0 = Ace .. 12 = King).

    Any other value can only come from a corrupted board, so it raises
    :class:`ContractViolation` instead of producing a placeholder.
    """

    try:
        return RANK_TO_TEXT[rank]
    except (KeyError, TypeError):
        raise ContractViolation(f"rank out of range: {rank!r}") from None


class Placement(Enum):
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


@dataclass(frozen=True)
class Card:
    rank: int
    suit: Suit

    def __post_init__(self):
        if self.rank not in RANKS:
            raise ContractViolation(f"rank out of range: {self.rank!r}")

    @property
    def color(self) -> Color:
        return color(self.suit)

    @property
    def label(self) -> str:
        return f"{display_rank(self.rank)}{self.suit.glyph}"

    def placeable_on(self, other: "Card", placement: Placement) -> bool:
        if placement is Placement.FOUNDATION:
            return self.suit == other.suit and self.rank == other.rank + 1
        if placement is Placement.TABLEAU:
            return self.color != other.color and self.rank == other.rank - 1
        raise ContractViolation(f"unknown placement: {placement!r}")

    def __str__(self):
        return self.label


@dataclass
class PlacedCard:
    """A tableau entry: the card plus whether it is face-up."""

    card: Card
    visible: bool = False


def make_deck() -> List[Card]:
    return [Card(rank, suit) for suit in Suit for rank in RANKS]
