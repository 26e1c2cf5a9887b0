"""Strategy protocol - interface that automated players implement."""

from typing import Protocol

from unoengine.engine import Color, GameControls, Player


class PlayerStrategy(Protocol):
    """Interface for automated UNO players.

    A player without a strategy is human-controlled.
    """

    @property
    def name(self) -> str:
        """Display name for the strategy."""
        ...

    def make_move(self, game: GameControls, player: Player) -> None:
        """Take one turn for player.

        Args:
            game: Engine capabilities; the move is made by calling
                game.play_card() and/or game.draw_card().
            player: The current player, whose hand may be inspected.
        """
        ...

    def choose_color(self, player: Player) -> Color:
        """Pick the color for a wild card player has just played."""
        ...
