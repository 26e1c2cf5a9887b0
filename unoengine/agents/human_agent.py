"""Human agent - reads moves from the terminal."""

from typing import Callable, Optional

from unoengine.engine import Color, Game, GameStatus, Player
from unoengine.engine.card import SUITS


class TerminalHuman:
    """Drives human-controlled players by prompting on the terminal.

    Wild cards are played without a color, which pauses the engine; the
    color is then asked for and the play completed.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def take_turn(self, game: Game, player: Player) -> None:
        if game.status is GameStatus.AWAITING_COLOR_CHOICE:
            self._complete_wild(game)
            return

        top = game.get_top_card()
        self._output(f"\n--- {player.name}, your turn ---")
        self._output(f"Top card: {top}")
        self._output("Your hand:")
        for i, card in enumerate(player.hand):
            self._output(f"  {i}: {card}")
        prompt = "Card number, 'd' to draw"
        if game.drew_this_turn:
            prompt += ", 'p' to pass"

        while True:
            try:
                raw = self._input(f"{prompt}: ").strip().lower()
            except EOFError:
                raw = "d"
            if raw == "d":
                card = game.draw_card()
                self._output(f"You drew {card}" if card else "No cards left to draw.")
                return
            if raw == "p" and game.pass_turn():
                return
            if raw.isdigit():
                hand = player.hand
                idx = int(raw)
                if 0 <= idx < len(hand) and game.play_card(hand[idx]):
                    if game.status is GameStatus.AWAITING_COLOR_CHOICE:
                        self._complete_wild(game)
                    return
                self._output("You can't play that card.")
                continue
            self._output("Invalid. Try again.")

    def _ask_color(self) -> Color:
        names = ", ".join(c.value for c in SUITS)
        while True:
            try:
                raw = self._input(f"Choose a color ({names}): ").strip().lower()
            except EOFError:
                return Color.RED
            color = _match_color(raw)
            if color is not None:
                return color
            self._output("Invalid color. Try again.")

    def _complete_wild(self, game: Game) -> None:
        card = game.pending_wild
        if card is not None:
            game.complete_wild_card_play(card, self._ask_color())


def _match_color(text: str) -> Optional[Color]:
    for color in SUITS:
        if text in (color.value, color.value[0]):
            return color
    return None
