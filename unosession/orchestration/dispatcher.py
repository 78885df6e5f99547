"""Request dispatch: load a session, apply one request, commit on success."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Union

from unosession.config import SessionConfig
from unosession.engine import registry, rules
from unosession.engine.card import Card, Color
from unosession.engine.errors import RuleError, SessionExists, SessionNotFound
from unosession.engine.session import Session
from unosession.engine.views import SessionSummary, get_player_hand, get_session_summary
from unosession.storage import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class CreateSession:
    identity: str


@dataclass
class Join:
    identity: str


@dataclass
class Leave:
    identity: str


@dataclass
class Draw:
    identity: str


@dataclass
class Play:
    identity: str
    card: Card
    declared_color: Optional[Color] = None


@dataclass
class Pass:
    identity: str


@dataclass
class GetSessionSummary:
    pass


@dataclass
class GetPlayerHand:
    identity: str


Request = Union[CreateSession, Join, Leave, Draw, Play, Pass]
Query = Union[GetSessionSummary, GetPlayerHand]


class SessionDispatcher:
    """Routes requests to the engine and persists the results.

    A request that raises leaves the stored session untouched.
    """

    def __init__(
        self,
        store: SessionStore,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self._store = store
        self._config = config or SessionConfig()
        self._rng = rng

    def _load(self, session_id: str) -> Session:
        session = self._store.load(session_id)
        if session is None:
            raise SessionNotFound(f"No session {session_id!r}")
        return session

    def execute(self, session_id: str, request: Request) -> Session:
        """Apply a mutating request and return the committed session."""
        try:
            if isinstance(request, CreateSession):
                if self._store.load(session_id) is not None:
                    raise SessionExists(f"Session {session_id!r} already exists")
                session = registry.create_session(request.identity, config=self._config, rng=self._rng)
            else:
                session = self._apply(self._load(session_id), request)
        except RuleError as e:
            logger.debug("%s rejected in %s: %s", type(request).__name__, session_id, e.kind)
            raise
        self._store.save(session_id, session)
        return session

    def _apply(self, session: Session, request: Request) -> Session:
        if isinstance(request, Join):
            return registry.join(session, request.identity)
        if isinstance(request, Leave):
            return registry.leave(session, request.identity)
        if isinstance(request, Draw):
            return rules.draw_card(session, request.identity)
        if isinstance(request, Play):
            return rules.play_card(session, request.identity, request.card, request.declared_color)
        if isinstance(request, Pass):
            return rules.pass_turn(session, request.identity)
        raise ValueError(f"Unknown request: {request!r}")

    def query(
        self, session_id: str, request: Query
    ) -> Union[SessionSummary, tuple[Card, ...]]:
        """Answer a read-only request."""
        session = self._load(session_id)
        if isinstance(request, GetSessionSummary):
            return get_session_summary(session)
        if isinstance(request, GetPlayerHand):
            return get_player_hand(session, request.identity)
        raise ValueError(f"Unknown query: {request!r}")

    def load(self, session_id: str) -> Session:
        """Return the committed session, for callers that need the full state."""
        return self._load(session_id)
