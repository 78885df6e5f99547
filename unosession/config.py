"""Session configuration."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_MIN_PLAYERS = "UNOSESSION_MIN_PLAYERS"
ENV_MAX_PLAYERS = "UNOSESSION_MAX_PLAYERS"
ENV_HAND_SIZE = "UNOSESSION_HAND_SIZE"
ENV_STORE_DIR = "UNOSESSION_STORE_DIR"
ENV_LOG_LEVEL = "UNOSESSION_LOG_LEVEL"

DEFAULT_STORE_DIR = ".unosession"


@dataclass(frozen=True)
class SessionConfig:
    """Seat bounds and deal size for one session.

    The game starts when ``min_players`` are seated; joins beyond
    ``max_players`` are refused.
    """

    min_players: int = 2
    max_players: int = 4
    initial_hand_size: int = 7

    def __post_init__(self) -> None:
        if self.min_players < 1:
            raise ValueError("min_players must be at least 1")
        if self.max_players < self.min_players:
            raise ValueError("max_players must be >= min_players")
        if self.initial_hand_size < 0:
            raise ValueError("initial_hand_size must be >= 0")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionConfig":
        """Build a config from UNOSESSION_* environment variables.

        Raises ValueError naming the variable when a value is not an integer.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            min_players=_int_env(env, ENV_MIN_PLAYERS, defaults.min_players),
            max_players=_int_env(env, ENV_MAX_PLAYERS, defaults.max_players),
            initial_hand_size=_int_env(env, ENV_HAND_SIZE, defaults.initial_hand_size),
        )


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
