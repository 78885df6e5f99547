"""Read-only projections of a session."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from unosession.engine.card import Card, Color
from unosession.engine.errors import PlayerNotFound
from unosession.engine.session import Phase, Session


@dataclass(frozen=True)
class SessionSummary:
    """Public state of a session. Hand contents are never included."""

    players: tuple[str, ...]
    current_turn: int
    current_player: Optional[str]
    direction: int
    phase: Phase
    winner: Optional[str]
    active_color: Optional[Color]
    top_discard: Optional[Card]
    deck_size: int
    num_cards_per_player: Dict[str, int]
    history: tuple[str, ...]  # Last 10 events


def get_session_summary(session: Session) -> SessionSummary:
    current = session.current_player
    return SessionSummary(
        players=session.identities,
        current_turn=session.current_turn,
        current_player=current.identity if current else None,
        direction=session.direction,
        phase=session.phase,
        winner=session.winner,
        active_color=session.active_color,
        top_discard=session.top_discard(),
        deck_size=len(session.deck),
        num_cards_per_player={p.identity: len(p.hand) for p in session.players},
        history=session.history[-10:],
    )


def get_player_hand(session: Session, identity: str) -> tuple[Card, ...]:
    """Return the hand of ``identity``."""
    idx = session.find_player(identity)
    if idx is None:
        raise PlayerNotFound(f"{identity} is not in the game")
    return session.players[idx].hand


@dataclass
class PlayerView:
    """Filtered session state visible to a single player.

    Contains only that player's hand and public info.
    """

    my_hand: List[Card]
    top_discard: Optional[Card]
    active_color: Optional[Color]
    current_player: Optional[str]
    direction: int
    phase: Phase
    winner: Optional[str]
    player_order: tuple[str, ...]
    num_cards_per_player: Dict[str, int]
    deck_size: int
    history: List[str]  # Recent game events

    @classmethod
    def from_session(cls, session: Session, identity: str) -> "PlayerView":
        """Create a player view from the full session, hiding other players' hands."""
        summary = get_session_summary(session)
        return cls(
            my_hand=list(get_player_hand(session, identity)),
            top_discard=summary.top_discard,
            active_color=summary.active_color,
            current_player=summary.current_player,
            direction=summary.direction,
            phase=summary.phase,
            winner=summary.winner,
            player_order=summary.players,
            num_cards_per_player=summary.num_cards_per_player,
            deck_size=summary.deck_size,
            history=list(summary.history),
        )
