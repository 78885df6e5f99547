"""Terminal agent for a person sitting at one seat."""

from typing import Callable, Optional

from unosession.engine import Action, Card, Color, PlayerView
from unosession.engine.rules import DrawCard, PassTurn, PlayCard

RECENT_EVENTS = 3


def describe_action(action: Action) -> str:
    if isinstance(action, DrawCard):
        return "draw"
    if isinstance(action, PassTurn):
        return "pass"
    if action.chosen_color is not None:
        return f"{action.card} {action.chosen_color.value}"
    return str(action.card)


def parse_choice(raw: str, legal_actions: list[Action]) -> Optional[Action]:
    """Match typed input against the legal actions.

    Accepts a menu number, ``draw``, ``pass``, a card such as ``red_5``,
    or a wild followed by a color (``wild_draw_four green``). Returns None
    if nothing legal matches.
    """
    words = raw.strip().lower().split()
    if not words:
        return None
    if len(words) == 1 and words[0].isdigit():
        idx = int(words[0])
        return legal_actions[idx] if idx < len(legal_actions) else None
    if words == ["draw"]:
        return next((a for a in legal_actions if isinstance(a, DrawCard)), None)
    if words == ["pass"]:
        return next((a for a in legal_actions if isinstance(a, PassTurn)), None)

    try:
        card = Card.parse(words[0])
        color = Color(words[1]) if len(words) > 1 else None
    except ValueError:
        return None
    for action in legal_actions:
        if isinstance(action, PlayCard) and action.card == card:
            if not card.is_wild or action.chosen_color is color:
                return action
    return None


class HumanAgent:
    """Prompts for a move on stdin and shows the table on stdout."""

    def __init__(self, name: str = "human", read: Optional[Callable[[str], str]] = None):
        self._name = name
        self._read = read

    @property
    def name(self) -> str:
        return self._name

    def _show_table(self, view: PlayerView, identity: str) -> None:
        print(f"\n--- {identity}'s turn ---")
        for line in view.history[-RECENT_EVENTS:]:
            print(f"  > {line}")
        arrow = "clockwise" if view.direction == 1 else "counter-clockwise"
        print(f"Play goes {arrow}; {view.deck_size} cards left in the deck")
        others = [
            f"{pid} ({view.num_cards_per_player[pid]})"
            for pid in view.player_order
            if pid != identity
        ]
        if others:
            print("Opponents:", ", ".join(others))
        top = view.top_discard or "nothing yet"
        if view.active_color is not None:
            print(f"Top discard: {top}, color to match: {view.active_color.value}")
        else:
            print(f"Top discard: {top}")
        print("Your hand:", " ".join(str(c) for c in view.my_hand))

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        identity: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        self._show_table(player_view, identity)
        print("Moves:")
        for i, action in enumerate(legal_actions):
            print(f"  {i}: {describe_action(action)}")

        while True:
            try:
                raw = (self._read or input)("Number, card or draw/pass: ")
            except EOFError:
                return None
            action = parse_choice(raw, legal_actions)
            if action is not None:
                return action
            print(f"{raw.strip()!r} is not a legal move.")
