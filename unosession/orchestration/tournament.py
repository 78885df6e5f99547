"""Repeated games between a fixed set of agents."""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Optional

from unosession.orchestration.game_runner import GameRunner

logger = logging.getLogger(__name__)


@dataclass
class TournamentResult:
    """Aggregate outcome of a tournament.

    ``unfinished`` counts games stopped by the turn cap; they have no winner.
    """

    num_games: int
    wins: Counter = field(default_factory=Counter)
    unfinished: int = 0
    total_turns: int = 0

    @property
    def mean_turns(self) -> float:
        return self.total_turns / self.num_games if self.num_games else 0.0

    def standings(self) -> list[tuple[str, int]]:
        """Identities with their win counts, most wins first."""
        return self.wins.most_common()


def seat_order(identities: list[str], game: int) -> list[str]:
    """Seating for game number ``game``: the roster rotated by one seat per game."""
    if not identities:
        return []
    shift = game % len(identities)
    return identities[shift:] + identities[:shift]


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: Optional[int] = None,
    max_turns: int = 1000,
) -> TournamentResult:
    """Play ``num_games`` games between the same agents.

    The first seat rotates through the roster, so over ``len(agents)`` games
    every agent moves first once. Each game gets its own deck seed drawn
    from ``seed``.
    """
    identities = list(agents)
    result = TournamentResult(num_games=num_games)
    rng = random.Random(seed)

    for g in range(num_games):
        order = seat_order(identities, g)
        runner = GameRunner(
            {pid: agents[pid] for pid in order},
            seed=rng.randint(0, 2**31 - 1),
            max_turns=max_turns,
            session_id=f"game-{g}",
        )
        game = runner.run()
        result.total_turns += game.num_turns
        if game.winner is None:
            result.unfinished += 1
        else:
            result.wins[game.winner] += 1
        logger.debug("Game %d (%s first): winner %s after %d turns",
                     g, order[0], game.winner, game.num_turns)

    logger.info("Tournament of %d games done, %d unfinished", num_games, result.unfinished)
    return result
