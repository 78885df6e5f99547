"""Simulate a game with random agents."""

import logging

from unosession.agents import RandomAgent
from unosession.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO)
    agents = {
        "p1": RandomAgent("Bot1", seed=1),
        "p2": RandomAgent("Bot2", seed=2),
        "p3": RandomAgent("Bot3", seed=3),
        "p4": RandomAgent("Bot4", seed=4),
    }

    runner = GameRunner(agents, seed=42)
    result = runner.run()

    for line in result.session.history:
        print(f"> {line}")
    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    print(f"Cards in play: {result.session.card_count()}")


if __name__ == "__main__":
    main()
