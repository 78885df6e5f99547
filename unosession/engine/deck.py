"""Deck creation, shuffling and drawing."""

import random
from typing import List, MutableSequence, Optional

from unosession.engine.card import ACTION_RANKS, PLAYABLE_COLORS, WILD_RANKS, Card, Color, Rank
from unosession.engine.errors import DeckEmpty

DECK_SIZE = 72


def build_initial_deck() -> List[Card]:
    """Create the 72-card deck in its fixed base order.

    - 4 colors × (0-9): 40 cards
    - 4 colors × 2 × (Skip, Draw Two, Reverse): 24 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in PLAYABLE_COLORS:
        for n in range(10):
            cards.append(Card(color=color, rank=Rank.number(n)))
        for _ in range(2):
            for rank in ACTION_RANKS:
                cards.append(Card(color=color, rank=rank))

    for _ in range(4):
        for rank in WILD_RANKS:
            cards.append(Card(color=Color.WILD, rank=rank))

    return cards


def shuffle_deck(
    cards: List[Card],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> List[Card]:
    """Return a shuffled copy of ``cards``.

    A seed gives a reproducible order; with neither rng nor seed the
    operating system's randomness source is used.
    """
    if rng is None:
        rng = random.Random(seed) if seed is not None else random.SystemRandom()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def pop_draw(deck: MutableSequence[Card]) -> Card:
    """Remove and return the top (last) card of the deck."""
    if not deck:
        raise DeckEmpty("Deck is empty")
    return deck.pop()
