"""Random agent - plays a random legal card, otherwise draws or passes."""

import random
from typing import Optional

from unosession.engine import Action, PlayerView
from unosession.engine.rules import DrawCard, PassTurn, PlayCard


class RandomAgent:
    """Agent that picks uniformly among the legal card plays."""

    def __init__(self, name: str = "random", seed: Optional[int] = None):
        self._name = name
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        identity: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        # Prefer playing over drawing to make game progress
        plays = [a for a in legal_actions if isinstance(a, PlayCard)]
        if plays:
            return self._rng.choice(plays)
        for kind in (DrawCard, PassTurn):
            for a in legal_actions:
                if isinstance(a, kind):
                    return a
        return None
