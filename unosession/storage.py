"""Session storage adapters.

A store maps a session id to the last committed session. Callers load,
apply an engine operation and save only when it succeeded.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from unosession.config import SessionConfig
from unosession.engine.card import Card, Color
from unosession.engine.session import Phase, Player, Session


class SessionStore(Protocol):
    """Load-by-key / save-by-key persistence for sessions."""

    def load(self, session_id: str) -> Optional[Session]:
        ...

    def save(self, session_id: str, session: Session) -> None:
        ...


class InMemorySessionStore:
    """Dict-backed store. Sessions are immutable, so no copying is needed."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def load(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def save(self, session_id: str, session: Session) -> None:
        self._sessions[session_id] = session


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Convert a session to plain JSON-compatible data."""
    return {
        "deck": [str(c) for c in session.deck],
        "discard_pile": [str(c) for c in session.discard_pile],
        "players": [
            {"identity": p.identity, "hand": [str(c) for c in p.hand]}
            for p in session.players
        ],
        "current_turn": session.current_turn,
        "direction": session.direction,
        "phase": session.phase.value,
        "winner": session.winner,
        "active_color": session.active_color.value if session.active_color else None,
        "config": {
            "min_players": session.config.min_players,
            "max_players": session.config.max_players,
            "initial_hand_size": session.config.initial_hand_size,
        },
        "history": list(session.history),
    }


def session_from_dict(data: Dict[str, Any]) -> Session:
    """Inverse of :func:`session_to_dict`."""
    active_color = data.get("active_color")
    return Session(
        deck=tuple(Card.parse(c) for c in data["deck"]),
        discard_pile=tuple(Card.parse(c) for c in data["discard_pile"]),
        players=tuple(
            Player(identity=p["identity"], hand=tuple(Card.parse(c) for c in p["hand"]))
            for p in data["players"]
        ),
        current_turn=data["current_turn"],
        direction=data["direction"],
        phase=Phase(data["phase"]),
        winner=data.get("winner"),
        active_color=Color(active_color) if active_color else None,
        config=SessionConfig(**data["config"]),
        history=tuple(data.get("history", ())),
    )


class JsonFileSessionStore:
    """One JSON file per session under ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def _path(self, session_id: str) -> Path:
        if not session_id or "/" in session_id or "\\" in session_id or session_id.startswith("."):
            raise ValueError(f"Invalid session id: {session_id!r}")
        return self._dir / f"{session_id}.json"

    def load(self, session_id: str) -> Optional[Session]:
        path = self._path(session_id)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            return session_from_dict(json.load(f))

    def save(self, session_id: str, session: Session) -> None:
        path = self._path(session_id)
        self._dir.mkdir(parents=True, exist_ok=True)
        # Write then rename so a reader never sees a half-written file
        fd, tmp = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(session_to_dict(session), f, indent=2)
            os.replace(tmp, path)
        except BaseException:
            os.unlink(tmp)
            raise
