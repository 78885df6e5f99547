"""Card, Color and Rank types for UNO."""

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """Card colors. WILD is carried by wild cards until they are played."""

    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"
    WILD = "wild"


PLAYABLE_COLORS = (Color.RED, Color.YELLOW, Color.BLUE, Color.GREEN)


class Rank(str, Enum):
    """Card ranks: the ten numbers plus the five effect ranks."""

    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @classmethod
    def number(cls, n: int) -> "Rank":
        if not 0 <= n <= 9:
            raise ValueError(f"Number rank out of range: {n}")
        return cls(str(n))

    @property
    def is_number(self) -> bool:
        return self.value.isdigit()

    @property
    def is_wild(self) -> bool:
        return self in (Rank.WILD, Rank.WILD_DRAW_FOUR)


ACTION_RANKS = (Rank.SKIP, Rank.DRAW_TWO, Rank.REVERSE)
WILD_RANKS = (Rank.WILD, Rank.WILD_DRAW_FOUR)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Number and action cards carry one of the four playable colors.
    Wild cards carry Color.WILD; the color declared when playing one is
    tracked by the session, not the card.
    """

    color: Color
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid card rank: {self.rank!r}")
        if self.rank.is_wild and self.color is not Color.WILD:
            raise ValueError("Wild cards must have color=WILD")
        if not self.rank.is_wild and self.color is Color.WILD:
            raise ValueError("Non-wild cards must have a playable color")

    @property
    def is_wild(self) -> bool:
        return self.rank.is_wild

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse the ``str()`` form of a card, e.g. ``red_5`` or ``wild_draw_four``."""
        raw = text.strip().lower()
        if raw in (Rank.WILD.value, Rank.WILD_DRAW_FOUR.value):
            return cls(color=Color.WILD, rank=Rank(raw))
        color, sep, rank = raw.partition("_")
        if not sep:
            raise ValueError(f"Invalid card: {text!r}")
        try:
            return cls(color=Color(color), rank=Rank(rank))
        except ValueError as e:
            raise ValueError(f"Invalid card: {text!r}") from e

    def __str__(self) -> str:
        if self.is_wild:
            return self.rank.value
        return f"{self.color.value}_{self.rank.value}"
