"""Game orchestration."""

from unoengine.orchestration.game_runner import GameResult, GameRunner
from unoengine.orchestration.tournament import TournamentResult, run_tournament

__all__ = ["GameResult", "GameRunner", "TournamentResult", "run_tournament"]
