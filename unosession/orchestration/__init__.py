"""Game orchestration."""

from unosession.orchestration.dispatcher import SessionDispatcher
from unosession.orchestration.game_runner import GameResult, GameRunner
from unosession.orchestration.tournament import TournamentResult, run_tournament

__all__ = ["SessionDispatcher", "GameResult", "GameRunner", "TournamentResult", "run_tournament"]
