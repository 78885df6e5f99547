"""Game engine for UNO."""

from unosession.engine.card import Card, Color, Rank
from unosession.engine.deck import DECK_SIZE, build_initial_deck, pop_draw, shuffle_deck
from unosession.engine.errors import RuleError
from unosession.engine.registry import create_session, join, leave
from unosession.engine.rules import (
    Action,
    PlayCard,
    DrawCard,
    PassTurn,
    apply_action,
    draw_card,
    get_legal_actions,
    get_legal_plays,
    is_legal_play,
    pass_turn,
    play_card,
    validate_and_apply,
)
from unosession.engine.session import Phase, Player, Session
from unosession.engine.views import PlayerView, SessionSummary, get_player_hand, get_session_summary

__all__ = [
    "Card",
    "Color",
    "Rank",
    "DECK_SIZE",
    "build_initial_deck",
    "pop_draw",
    "shuffle_deck",
    "RuleError",
    "create_session",
    "join",
    "leave",
    "Action",
    "PlayCard",
    "DrawCard",
    "PassTurn",
    "apply_action",
    "draw_card",
    "get_legal_actions",
    "get_legal_plays",
    "is_legal_play",
    "pass_turn",
    "play_card",
    "validate_and_apply",
    "Phase",
    "Player",
    "Session",
    "PlayerView",
    "SessionSummary",
    "get_player_hand",
    "get_session_summary",
]
