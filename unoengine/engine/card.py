"""Card, Color and CardKind types for UNO."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors. WILD marks a wild card with no color chosen yet."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


# Suit order used for deck recipes and for breaking color-choice ties.
SUITS = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)


class CardKind(str, Enum):
    """Card kinds."""

    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    SKIP_TWO = "skip_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


WILD_KINDS = frozenset({CardKind.WILD, CardKind.WILD_DRAW_FOUR})
ACTION_KINDS = frozenset(
    {CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO, CardKind.SKIP_TWO}
)

ACTION_POINTS = 20
WILD_POINTS = 50


@dataclass(eq=False)
class Card:
    """A UNO card.

    For number cards: color is a suit, value is 0-9.
    For action cards: color is a suit, value is None.
    For wild cards: color is Color.WILD and chosen_color starts unset.

    Equality is identity; use same_face() to compare what is printed on cards.
    """

    kind: CardKind
    color: Color = Color.WILD
    value: Optional[int] = None
    chosen_color: Optional[Color] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.kind is CardKind.NUMBER:
            if self.value is None or not 0 <= self.value <= 9:
                raise ValueError(f"Invalid number card value: {self.value}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} cards have no face value")
        if self.kind in WILD_KINDS and self.color is not Color.WILD:
            raise ValueError("Wild cards must have color=Color.WILD")
        if self.kind not in WILD_KINDS and self.color is Color.WILD:
            raise ValueError("Non-wild cards must have a suit color")
        if self.chosen_color is not None:
            self.choose_color(self.chosen_color)

    @property
    def is_wild(self) -> bool:
        return self.kind in WILD_KINDS

    @property
    def effective_color(self) -> Color:
        """Color used for legality: the chosen color for a played wild."""
        if self.is_wild and self.chosen_color is not None:
            return self.chosen_color
        return self.color

    @property
    def points(self) -> int:
        if self.kind is CardKind.NUMBER:
            return self.value
        if self.is_wild:
            return WILD_POINTS
        return ACTION_POINTS

    def choose_color(self, color: Color) -> None:
        if not self.is_wild:
            raise ValueError(f"Cannot choose a color for {self}")
        if color is Color.WILD:
            raise ValueError("Chosen color must be a suit")
        self.chosen_color = color

    def reset_color(self) -> None:
        self.chosen_color = None

    def same_face(self, other: "Card") -> bool:
        """True if both cards show the same kind, color and value."""
        return (
            self.kind is other.kind
            and self.color is other.color
            and self.value == other.value
        )

    def can_play_on(self, top: "Card") -> bool:
        """Check whether this card may be placed on top."""
        return _LEGALITY[self.kind](self, top)

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse card notation such as "red_5", "blue_skip" or "wild_draw_four(red)"."""
        text = text.strip().lower()
        chosen = None
        if text.endswith(")") and "(" in text:
            text, _, rest = text.partition("(")
            chosen = Color(rest[:-1])
        if text in (CardKind.WILD.value, CardKind.WILD_DRAW_FOUR.value):
            return cls(kind=CardKind(text), chosen_color=chosen)
        color_name, sep, face = text.partition("_")
        if not sep:
            raise ValueError(f"Invalid card: {text}")
        color = Color(color_name)
        if face.isdigit():
            return cls(kind=CardKind.NUMBER, color=color, value=int(face))
        return cls(kind=CardKind(face), color=color)

    def __str__(self) -> str:
        if self.is_wild:
            if self.chosen_color is not None:
                return f"{self.kind.value}({self.chosen_color.value})"
            return self.kind.value
        face = str(self.value) if self.kind is CardKind.NUMBER else self.kind.value
        return f"{self.color.value}_{face}"


def _number_legal(card: Card, top: Card) -> bool:
    return (
        card.color is top.effective_color
        or (top.kind is CardKind.NUMBER and card.value == top.value)
        or top.effective_color is Color.WILD
    )


def _action_legal(card: Card, top: Card) -> bool:
    return (
        card.color is top.effective_color
        or top.kind is card.kind
        or top.effective_color is Color.WILD
    )


def _always_legal(card: Card, top: Card) -> bool:
    return True


_LEGALITY = {
    CardKind.NUMBER: _number_legal,
    CardKind.SKIP: _action_legal,
    CardKind.REVERSE: _action_legal,
    CardKind.DRAW_TWO: _action_legal,
    CardKind.SKIP_TWO: _action_legal,
    CardKind.WILD: _always_legal,
    CardKind.WILD_DRAW_FOUR: _always_legal,
}
