"""Shared fixtures."""

import pytest

from unosession.config import SessionConfig
from unosession.engine import Card, Phase, Player, Session


def cards(*names: str) -> tuple[Card, ...]:
    return tuple(Card.parse(n) for n in names)


@pytest.fixture
def make_session():
    """Build an ACTIVE session with explicit hands, discard top and deck."""

    def _make(
        hands: dict[str, list[str]],
        top: str | None = None,
        active_color=None,
        deck: list[str] | None = None,
        current_turn: int = 0,
        direction: int = 1,
        config: SessionConfig | None = None,
    ) -> Session:
        discard = cards(top) if top else ()
        if active_color is None and discard and not discard[-1].is_wild:
            active_color = discard[-1].color
        if deck is None:
            deck = ["red_0", "yellow_1", "blue_2", "green_3", "red_4", "yellow_5"]
        return Session(
            deck=cards(*deck),
            discard_pile=discard,
            players=tuple(Player(pid, cards(*hand)) for pid, hand in hands.items()),
            current_turn=current_turn,
            direction=direction,
            phase=Phase.ACTIVE,
            active_color=active_color,
            config=config or SessionConfig(),
        )

    return _make
