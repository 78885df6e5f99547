"""Session state for UNO."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from unosession.config import SessionConfig
from unosession.engine.card import Card, Color


class Phase(str, Enum):
    """Session phases."""

    WAITING_FOR_PLAYERS = "waiting_for_players"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass(frozen=True)
class Player:
    """A seated player. The hand is an unordered multiset of cards."""

    identity: str
    hand: tuple[Card, ...] = ()

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def without_card(self, card: Card) -> "Player":
        """Return this player with one copy of ``card`` removed from the hand."""
        hand = list(self.hand)
        hand.remove(card)
        return replace(self, hand=tuple(hand))

    def with_cards(self, *cards: Card) -> "Player":
        return replace(self, hand=self.hand + cards)


@dataclass(frozen=True)
class Session:
    """Immutable UNO session state.

    Operations never mutate a session; they return a new one.
    """

    deck: tuple[Card, ...]  # draw from the end
    discard_pile: tuple[Card, ...] = ()  # top is last
    players: tuple[Player, ...] = ()  # turn order
    current_turn: int = 0
    direction: int = 1  # 1 = clockwise, -1 = counter-clockwise
    phase: Phase = Phase.WAITING_FOR_PLAYERS
    winner: Optional[str] = None
    active_color: Optional[Color] = None  # None until the first play
    config: SessionConfig = field(default_factory=SessionConfig)
    history: tuple[str, ...] = ()  # Log of events

    def __post_init__(self) -> None:
        if self.direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {self.direction}")
        if self.winner is not None and self.phase is not Phase.FINISHED:
            raise ValueError("Only a finished session can have a winner")
        if self.active_color is Color.WILD:
            raise ValueError("Active color cannot be WILD")
        if self.players and not 0 <= self.current_turn < len(self.players):
            raise ValueError(f"current_turn {self.current_turn} out of range")

    def top_discard(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def identities(self) -> tuple[str, ...]:
        return tuple(p.identity for p in self.players)

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_turn]

    def find_player(self, identity: str) -> Optional[int]:
        """Return the seat index of ``identity``, or None."""
        for i, player in enumerate(self.players):
            if player.identity == identity:
                return i
        return None

    def card_count(self) -> int:
        """Cards across deck, discard pile and all hands."""
        return len(self.deck) + len(self.discard_pile) + sum(len(p.hand) for p in self.players)

    def log(self, event: str, **changes) -> "Session":
        """Return a copy with ``changes`` applied and ``event`` appended to history."""
        return replace(self, history=self.history + (event,), **changes)
