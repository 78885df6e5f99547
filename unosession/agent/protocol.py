"""Agent protocol - interface that automated and human players implement."""

from typing import Protocol

from unosession.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        identity: str,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            identity: This agent's player identity.

        Returns:
            One of the legal actions, or None to draw (or pass, once the
            deck is empty).
        """
        ...
