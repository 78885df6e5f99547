"""Single game runner."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unosession.config import SessionConfig
from unosession.engine import PlayerView, get_legal_actions
from unosession.engine.rules import Action, DrawCard, PassTurn, PlayCard
from unosession.engine.session import Phase, Session
from unosession.orchestration.dispatcher import (
    CreateSession,
    Draw,
    Join,
    Pass,
    Play,
    Request,
    SessionDispatcher,
)
from unosession.storage import InMemorySessionStore

if TYPE_CHECKING:
    from unosession.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    identities: tuple[str, ...]
    session: Session


def _to_request(identity: str, action: Action) -> Request:
    if isinstance(action, PlayCard):
        return Play(identity, action.card, action.chosen_color)
    if isinstance(action, DrawCard):
        return Draw(identity)
    if isinstance(action, PassTurn):
        return Pass(identity)
    raise ValueError(f"Unknown action: {action!r}")


class GameRunner:
    """Runs a single UNO game to completion through a dispatcher.

    All agents are seated before the game starts; a draw does not end the
    turn, and each player may draw at most once per turn.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        max_turns: int = 1000,
        dispatcher: Optional[SessionDispatcher] = None,
        session_id: str = "game",
    ):
        if not agents:
            raise ValueError("At least one agent is required")
        self._agents = agents
        self._max_turns = max_turns
        self._session_id = session_id
        if dispatcher is None:
            n = len(agents)
            dispatcher = SessionDispatcher(
                InMemorySessionStore(),
                config=SessionConfig(min_players=n, max_players=n),
                rng=random.Random(seed) if seed is not None else None,
            )
        self._dispatcher = dispatcher

    def run(self) -> GameResult:
        """Run the game and return the result."""
        identities = list(self._agents.keys())
        sid = self._session_id
        session = self._dispatcher.execute(sid, CreateSession(identities[0]))
        for identity in identities[1:]:
            session = self._dispatcher.execute(sid, Join(identity))

        num_turns = 0
        has_drawn = False
        while session.phase is Phase.ACTIVE and num_turns < self._max_turns:
            pid = session.players[session.current_turn].identity
            legal = get_legal_actions(session, pid, has_drawn=has_drawn)
            view = PlayerView.from_session(session, pid)
            action = self._agents[pid].get_action(view, legal, pid)
            if action is None:
                action = next((a for a in legal if isinstance(a, DrawCard)), PassTurn())

            session = self._dispatcher.execute(sid, _to_request(pid, action))
            if isinstance(action, DrawCard):
                has_drawn = True
                continue
            has_drawn = False
            num_turns += 1

        if session.phase is Phase.ACTIVE:
            logger.info("Turn cap of %d reached without a winner", self._max_turns)

        return GameResult(
            winner=session.winner,
            num_turns=num_turns,
            identities=tuple(identities),
            session=session,
        )
