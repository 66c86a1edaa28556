"""Pile collections for a single Klondike deal."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from klondike.cards import ACE, KING, Card, PlacedCard, Placement, make_deck
from klondike.errors import InvariantViolation

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7
DECK_SIZE = 52

Shuffle = Callable[[List[Card]], None]


def make_shuffle(seed: Optional[int] = None) -> Shuffle:
    """Return an in-place shuffle; a fixed ``seed`` gives a repeatable deal."""

    return random.Random(seed).shuffle


@dataclass
class Board:
    stock: List[Card] = field(default_factory=list)
    waste: List[Card] = field(default_factory=list)
    foundations: List[List[Card]] = field(
        default_factory=lambda: [[] for _ in range(FOUNDATION_COUNT)]
    )
    tableaus: List[List[PlacedCard]] = field(
        default_factory=lambda: [[] for _ in range(TABLEAU_COUNT)]
    )

    @classmethod
    def deal(cls, shuffle: Optional[Shuffle] = None) -> "Board":
        deck = make_deck()
        (shuffle or make_shuffle())(deck)

        board = cls()
        for col in range(TABLEAU_COUNT):
            for r in range(col + 1):
                board.tableaus[col].append(PlacedCard(deck.pop(), visible=(r == col)))
        # Remaining cards go to stock, face down
        board.stock = deck
        return board

    def all_cards(self) -> Iterator[Card]:
        yield from self.stock
        yield from self.waste
        for f in self.foundations:
            yield from f
        for t in self.tableaus:
            for placed in t:
                yield placed.card

    def card_count(self) -> int:
        return sum(1 for _ in self.all_cards())

    def reveal_top(self, pile: int) -> bool:
        """Turn the top card of tableau ``pile`` face-up. Returns True if it flipped."""
        t = self.tableaus[pile]
        if t and not t[-1].visible:
            t[-1].visible = True
            return True
        return False

    def is_won(self) -> bool:
        return all(len(f) == KING + 1 for f in self.foundations)

    def check_invariants(self) -> None:
        cards = list(self.all_cards())
        if len(cards) != DECK_SIZE:
            raise InvariantViolation(f"board holds {len(cards)} cards, expected {DECK_SIZE}")
        if len(set(cards)) != DECK_SIZE:
            raise InvariantViolation("board holds duplicate cards")

        for n, f in enumerate(self.foundations):
            for i, card in enumerate(f):
                if i == 0:
                    if card.rank != ACE:
                        raise InvariantViolation(f"foundation {n} does not start with an Ace")
                elif not card.placeable_on(f[i - 1], Placement.FOUNDATION):
                    raise InvariantViolation(f"foundation {n} is out of sequence at {card}")

        for n, t in enumerate(self.tableaus):
            seen_up = False
            for i, placed in enumerate(t):
                if placed.visible:
                    if seen_up and not placed.card.placeable_on(t[i - 1].card, Placement.TABLEAU):
                        raise InvariantViolation(f"tableau {n} run is broken at {placed.card}")
                    seen_up = True
                elif seen_up:
                    raise InvariantViolation(f"tableau {n} has a face-down card above its run")
            if t and not t[-1].visible:
                raise InvariantViolation(f"tableau {n} top card is face-down")
