"""Turn engine: phase transitions and turn-pointer movement."""

import logging
from dataclasses import replace
from typing import Optional

from unosession.engine.deck import pop_draw
from unosession.engine.errors import DeckEmpty
from unosession.engine.session import Phase, Session

logger = logging.getLogger(__name__)


def start_game(session: Session) -> Session:
    """Move a waiting session to ACTIVE and deal the initial hands.

    Hands are dealt player by player. If the deck runs out mid-deal the
    remaining players keep short hands; the game still starts.
    """
    deck = list(session.deck)
    size = session.config.initial_hand_size
    players = []
    for player in session.players:
        dealt = []
        for _ in range(size):
            try:
                dealt.append(pop_draw(deck))
            except DeckEmpty:
                logger.warning("Deck exhausted while dealing to %s (%d/%d cards)",
                               player.identity, len(dealt), size)
                break
        players.append(player.with_cards(*dealt))

    logger.info("Game started with %d players", len(players))
    return session.log(
        f"game started with {', '.join(session.identities)}",
        deck=tuple(deck),
        players=tuple(players),
        phase=Phase.ACTIVE,
        current_turn=0,
    )


def next_index(session: Session, steps: int = 1) -> int:
    """Seat index ``steps`` turns ahead in the current direction."""
    return (session.current_turn + steps * session.direction) % len(session.players)


def advance(session: Session, steps: int = 1) -> Session:
    """Return the session with the turn pointer moved ``steps`` turns ahead."""
    return replace(session, current_turn=next_index(session, steps))


def finish(session: Session, winner: Optional[str] = None) -> Session:
    """Move the session to FINISHED. There is no way out of this phase."""
    if winner is None:
        logger.info("Game abandoned")
        event = "game abandoned"
    else:
        logger.info("Game won by %s", winner)
        event = f"{winner} WON!"
    return session.log(event, phase=Phase.FINISHED, winner=winner)


def reindex_after_leave(
    current_turn: int, removed_index: int, remaining: int, direction: int = 1
) -> int:
    """Turn pointer after the player at ``removed_index`` leaves.

    Seats below the pointer shift it down by one. Removing the current
    player hands the turn to the next player in ``direction``: the one who
    slides into the seat when clockwise, the seat before it otherwise.
    """
    if remaining == 0:
        return 0
    if removed_index < current_turn or (removed_index == current_turn and direction == -1):
        current_turn -= 1
    return current_turn % remaining
