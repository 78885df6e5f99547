"""Player registry: session creation, joining and leaving."""

import logging
import random
from typing import Optional

from unosession.config import SessionConfig
from unosession.engine.deck import build_initial_deck, pop_draw, shuffle_deck
from unosession.engine.errors import (
    AlreadyJoined,
    DeckEmpty,
    GameOver,
    PlayerNotFound,
    SessionFull,
)
from unosession.engine.session import Phase, Player, Session
from unosession.engine.turns import finish, reindex_after_leave, start_game

logger = logging.getLogger(__name__)


def create_session(
    founding_identity: str,
    config: Optional[SessionConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    shuffle: bool = True,
) -> Session:
    """Create a session with one seated player and a fresh deck.

    The deck is shuffled with ``rng`` (or a Random seeded with ``seed``,
    or the system randomness source). ``shuffle=False`` keeps the base
    construction order.
    """
    config = config or SessionConfig()
    deck = build_initial_deck()
    if shuffle:
        deck = shuffle_deck(deck, rng=rng, seed=seed)

    session = Session(
        deck=tuple(deck),
        players=(Player(identity=founding_identity),),
        config=config,
        history=(f"{founding_identity} created the game",),
    )
    logger.debug("Session created by %s", founding_identity)
    if len(session.players) >= config.min_players:
        session = start_game(session)
    return session


def _deal_late_joiner(session: Session, player: Player) -> tuple[Player, tuple]:
    deck = list(session.deck)
    dealt = []
    for _ in range(session.config.initial_hand_size):
        try:
            dealt.append(pop_draw(deck))
        except DeckEmpty:
            logger.warning("Deck exhausted while dealing to late joiner %s", player.identity)
            break
    return player.with_cards(*dealt), tuple(deck)


def join(session: Session, identity: str) -> Session:
    """Seat ``identity`` at the end of the turn order."""
    if session.phase is Phase.FINISHED:
        raise GameOver("Game is over")
    if len(session.players) >= session.config.max_players:
        raise SessionFull(f"Game already has {len(session.players)} players")
    if session.find_player(identity) is not None:
        raise AlreadyJoined(f"{identity} already joined")

    player = Player(identity=identity)
    deck = session.deck
    if session.phase is Phase.ACTIVE:
        player, deck = _deal_late_joiner(session, player)
    players = session.players + (player,)
    session = session.log(f"{identity} joined", players=players, deck=deck)
    logger.debug("%s joined (%d seated)", identity, len(players))

    if session.phase is Phase.WAITING_FOR_PLAYERS and len(players) >= session.config.min_players:
        session = start_game(session)
    return session


def leave(session: Session, identity: str) -> Session:
    """Remove ``identity`` from the session.

    The leaving player's hand goes with them: those cards are out of play
    for the rest of the session.
    """
    if session.phase is Phase.FINISHED:
        raise GameOver("Game is over")
    idx = session.find_player(identity)
    if idx is None:
        raise PlayerNotFound(f"{identity} is not in the game")

    players = session.players[:idx] + session.players[idx + 1:]
    session = session.log(
        f"{identity} left",
        players=players,
        current_turn=reindex_after_leave(
            session.current_turn, idx, len(players), session.direction
        ),
    )
    logger.debug("%s left (%d seated)", identity, len(players))

    if session.phase is Phase.ACTIVE and len(players) < session.config.min_players:
        return finish(session)
    if not players:
        return finish(session)
    return session
