"""Heuristic agent - plays the first legal card in hand."""

from unoengine.engine import Color, GameControls, Player


class HeuristicStrategy:
    """Plays the first playable card; otherwise draws and plays the draw if it fits.

    Wild colors go to the suit the player holds most of.
    """

    def __init__(self, name: str = "cpu"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def make_move(self, game: GameControls, player: Player) -> None:
        top = game.get_top_card()
        if top is None:
            game.draw_card()
            return

        card = player.find_playable_card(top)
        if card is not None:
            game.play_card(card)
            return

        drawn = game.draw_card()
        if drawn is not None and drawn.can_play_on(top):
            game.play_card(drawn)

    def choose_color(self, player: Player) -> Color:
        return player.choose_color()
