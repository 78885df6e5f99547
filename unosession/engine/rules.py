"""UNO rules: play legality and state transitions."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from unosession.engine.card import PLAYABLE_COLORS, Card, Color, Rank
from unosession.engine.deck import pop_draw
from unosession.engine.errors import (
    CardNotInHand,
    DeckEmpty,
    GameOver,
    IllegalPlay,
    MissingColorDeclaration,
    NotStarted,
    NotYourTurn,
)
from unosession.engine.session import Phase, Player, Session
from unosession.engine.turns import advance, finish, next_index

logger = logging.getLogger(__name__)

FORCED_DRAWS = {Rank.DRAW_TWO: 2, Rank.WILD_DRAW_FOUR: 4}


@dataclass
class PlayCard:
    """Action: play a card. For wilds, chosen_color is required."""

    card: Card
    chosen_color: Optional[Color] = None


@dataclass
class DrawCard:
    """Action: draw one card. The turn is not passed."""

    pass


@dataclass
class PassTurn:
    """Action: end the turn without playing."""

    pass


Action = Union[PlayCard, DrawCard, PassTurn]


def _check_turn(session: Session, identity: str) -> int:
    """Phase and turn-ownership checks shared by every in-game action."""
    if session.phase is Phase.FINISHED:
        raise GameOver("Game is over")
    if session.phase is not Phase.ACTIVE:
        raise NotStarted("Game not started yet")
    if session.players[session.current_turn].identity != identity:
        raise NotYourTurn(f"Not {identity}'s turn")
    return session.current_turn


def is_legal_play(session: Session, card: Card) -> bool:
    """Check if a card can be played on the current discard pile."""
    top = session.top_discard()
    # First play of the game: anything goes
    if top is None:
        return True
    if card.is_wild:
        return True
    if card.color == (session.active_color or top.color):
        return True
    return card.rank == top.rank


def get_legal_plays(session: Session, identity: str) -> List[PlayCard]:
    """Return every card play ``identity`` could make right now."""
    if session.phase is not Phase.ACTIVE:
        return []
    if session.players[session.current_turn].identity != identity:
        return []

    plays: List[PlayCard] = []
    for card in dict.fromkeys(session.players[session.current_turn].hand):
        if not is_legal_play(session, card):
            continue
        if card.is_wild:
            for color in PLAYABLE_COLORS:
                plays.append(PlayCard(card=card, chosen_color=color))
        else:
            plays.append(PlayCard(card=card))
    return plays


def get_legal_actions(session: Session, identity: str, has_drawn: bool = False) -> List[Action]:
    """Return all legal actions for ``identity``.

    ``has_drawn`` drops the draw option once the player has drawn this
    turn; passing is always available on the player's own turn.
    """
    if session.phase is not Phase.ACTIVE:
        return []
    if session.players[session.current_turn].identity != identity:
        return []

    actions: List[Action] = list(get_legal_plays(session, identity))
    if session.deck and not has_drawn:
        actions.append(DrawCard())
    actions.append(PassTurn())
    return actions


def _forced_draw(deck: list, victim: Player, count: int) -> Player:
    drawn = []
    for _ in range(count):
        try:
            drawn.append(pop_draw(deck))
        except DeckEmpty:
            logger.warning("Deck exhausted: %s drew %d of %d penalty cards",
                           victim.identity, len(drawn), count)
            break
    return victim.with_cards(*drawn)


def play_card(
    session: Session,
    identity: str,
    card: Card,
    declared_color: Optional[Color] = None,
) -> Session:
    """Validate a play and return the session after it and its effects."""
    idx = _check_turn(session, identity)
    player = session.players[idx]
    if not player.has_card(card):
        raise CardNotInHand(f"Card {card} not in hand")
    if card.is_wild and (declared_color is None or declared_color is Color.WILD):
        raise MissingColorDeclaration(f"{card} requires a declared color")
    if not is_legal_play(session, card):
        raise IllegalPlay(f"{card} cannot be played on {session.top_discard()}")

    players = list(session.players)
    players[idx] = player.without_card(card)
    deck = list(session.deck)
    direction = session.direction
    active_color = declared_color if card.is_wild else card.color
    steps = 1

    desc = f"{identity} played {card}"
    if card.is_wild:
        desc += f" (chose {active_color.value})"

    if card.rank is Rank.SKIP:
        steps = 2
    elif card.rank is Rank.REVERSE:
        direction = -direction
        # Two players: reverse acts as a skip
        if len(players) == 2:
            steps = 2
    elif card.rank in FORCED_DRAWS:
        victim_idx = next_index(session)
        victim = players[victim_idx]
        players[victim_idx] = _forced_draw(deck, victim, FORCED_DRAWS[card.rank])
        drew = len(players[victim_idx].hand) - len(victim.hand)
        desc += f"; {victim.identity} drew {drew} cards (penalty)"
        steps = 2

    logger.debug(desc)
    session = session.log(
        desc,
        deck=tuple(deck),
        discard_pile=session.discard_pile + (card,),
        players=tuple(players),
        direction=direction,
        active_color=active_color,
    )

    if not players[idx].hand:
        return finish(session, winner=identity)
    return advance(session, steps)


validate_and_apply = play_card


def draw_card(session: Session, identity: str) -> Session:
    """Draw one card into the acting player's hand. The turn is not passed."""
    idx = _check_turn(session, identity)
    deck = list(session.deck)
    card = pop_draw(deck)
    players = list(session.players)
    players[idx] = players[idx].with_cards(card)
    logger.debug("%s drew a card (%d left in deck)", identity, len(deck))
    return session.log(f"{identity} drew a card", deck=tuple(deck), players=tuple(players))


def pass_turn(session: Session, identity: str) -> Session:
    """End the acting player's turn without playing."""
    _check_turn(session, identity)
    return advance(session.log(f"{identity} passed"))


def apply_action(session: Session, identity: str, action: Action) -> Session:
    """Apply an action and return the new session."""
    if isinstance(action, PlayCard):
        return play_card(session, identity, action.card, action.chosen_color)
    if isinstance(action, DrawCard):
        return draw_card(session, identity)
    if isinstance(action, PassTurn):
        return pass_turn(session, identity)
    raise ValueError(f"Unknown action: {action!r}")
