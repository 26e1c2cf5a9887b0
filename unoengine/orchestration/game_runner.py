"""Single round runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from unoengine.agents.human_agent import TerminalHuman
from unoengine.engine import Game, GameEvent, GameStatus

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed round."""

    winner: Optional[str]
    score: int
    num_turns: int
    player_names: tuple[str, ...]


class GameRunner:
    """Runs one round of a Game to completion.

    Automated players move through their strategy; human-controlled players
    through the human driver.
    """

    def __init__(
        self,
        game: Game,
        human: Optional[TerminalHuman] = None,
        max_turns: int = 1000,
    ):
        self._game = game
        self._human = human
        self._max_turns = max_turns
        self._events_seen = 0

    def _count_event(self, event: GameEvent, payload: Dict[str, Any]) -> None:
        self._events_seen += 1

    def run(self) -> GameResult:
        """Play a round and return the result. A finished game is reset first."""
        game = self._game
        if game.status is not GameStatus.NOT_STARTED:
            game.reset()

        game.add_event_listener(self._count_event)
        try:
            game.start()
            num_turns = 0
            while game.status is not GameStatus.ENDED and num_turns < self._max_turns:
                self._take_turn()
                num_turns += 1
        finally:
            game.remove_event_listener(self._count_event)

        if game.status is not GameStatus.ENDED:
            logger.warning("Round stopped after %d turns without a winner", num_turns)

        winner = game.winner
        return GameResult(
            winner=winner.name if winner else None,
            score=game.score,
            num_turns=num_turns,
            player_names=tuple(p.name for p in game.players),
        )

    def _take_turn(self) -> None:
        game = self._game
        player = game.get_current_player()
        seen = self._events_seen

        if player.strategy is not None:
            player.strategy.make_move(game, player)
        elif self._human is not None:
            self._human.take_turn(game, player)
        else:
            raise ValueError(f"Player {player.name} has no strategy and no human driver is set")

        if self._events_seen != seen:
            return
        # Nothing happened: keep the round moving.
        logger.debug("%s made no move; forcing a draw", player.name)
        if game.status is GameStatus.AWAITING_COLOR_CHOICE and game.pending_wild is not None:
            game.complete_wild_card_play(game.pending_wild, player.choose_color())
        elif game.drew_this_turn:
            game.pass_turn()
        else:
            game.draw_card()
