"""Built-in agents."""

from unosession.agents.random_agent import RandomAgent
from unosession.agents.human_agent import HumanAgent

__all__ = ["RandomAgent", "HumanAgent"]
