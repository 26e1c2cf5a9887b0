"""Card effects and the engine capabilities they act through."""

from typing import TYPE_CHECKING, Callable, Optional, Protocol

from unoengine.engine.card import Card, CardKind

if TYPE_CHECKING:
    from unoengine.engine.player import Player


class GameControls(Protocol):
    """The part of the engine that card effects and strategies may touch."""

    def skip_next_player(self, count: int = 1) -> None:
        ...

    def reverse_direction(self) -> None:
        ...

    def next_player_draws(self, count: int) -> None:
        ...

    def get_current_player(self) -> "Player":
        ...

    def get_top_card(self) -> Optional[Card]:
        ...

    def play_card(self, card: Card) -> bool:
        ...

    def draw_card(self) -> Optional[Card]:
        ...


Effect = Callable[[GameControls], None]


def _no_effect(game: GameControls) -> None:
    pass


def _skip(game: GameControls) -> None:
    game.skip_next_player(1)


def _skip_two(game: GameControls) -> None:
    game.skip_next_player(2)


def _reverse(game: GameControls) -> None:
    game.reverse_direction()


def _draw_two(game: GameControls) -> None:
    game.next_player_draws(2)
    game.skip_next_player(1)


def _wild_draw_four(game: GameControls) -> None:
    game.next_player_draws(4)
    game.skip_next_player(1)


EFFECTS: dict[CardKind, Effect] = {
    CardKind.NUMBER: _no_effect,
    CardKind.SKIP: _skip,
    CardKind.SKIP_TWO: _skip_two,
    CardKind.REVERSE: _reverse,
    CardKind.DRAW_TWO: _draw_two,
    CardKind.WILD: _no_effect,
    CardKind.WILD_DRAW_FOUR: _wild_draw_four,
}


def play_effect(card: Card, game: GameControls) -> None:
    """Apply a played card's effect. Wild cards need their color chosen first."""
    if card.is_wild and card.chosen_color is None:
        raise ValueError(f"Color must be chosen before {card} takes effect")
    EFFECTS[card.kind](game)
