"""Player: hand, forfeited turns and an optional move strategy."""

from collections import Counter
from typing import TYPE_CHECKING, Iterable, List, Optional

from unoengine.engine.card import Card, Color, SUITS

if TYPE_CHECKING:
    from unoengine.agent.protocol import PlayerStrategy


class Player:
    """A seat at the table.

    Players with a strategy are automated; players without one are driven
    from outside (terminal, UI) and pause the engine when a wild color is
    needed.
    """

    def __init__(self, name: str, strategy: Optional["PlayerStrategy"] = None):
        self._name = name
        self._hand: List[Card] = []
        self._skipped_turns = 0
        self.strategy = strategy

    @property
    def name(self) -> str:
        return self._name

    @property
    def hand(self) -> List[Card]:
        """A copy of the hand, in the order cards were received."""
        return list(self._hand)

    @property
    def card_count(self) -> int:
        return len(self._hand)

    @property
    def is_automated(self) -> bool:
        return self.strategy is not None

    @property
    def skipped_turns(self) -> int:
        return self._skipped_turns

    def add_card(self, card: Card) -> None:
        self._hand.append(card)

    def add_cards(self, cards: Iterable[Card]) -> None:
        self._hand.extend(cards)

    def clear_hand(self) -> None:
        self._hand = []

    def find_playable_card(self, top: Card) -> Optional[Card]:
        for card in self._hand:
            if card.can_play_on(top):
                return card
        return None

    def has_playable_card(self, top: Card) -> bool:
        return self.find_playable_card(top) is not None

    def has_card(self, card: Card) -> bool:
        return any(c.same_face(card) for c in self._hand)

    def play_card(self, card: Card) -> Optional[Card]:
        """Remove and return the held card with the same face, or None if not held."""
        for i, held in enumerate(self._hand):
            if held is card:
                return self._hand.pop(i)
        for i, held in enumerate(self._hand):
            if held.same_face(card):
                return self._hand.pop(i)
        return None

    def choose_color(self) -> Color:
        """Pick the most common suit in hand; ties go to the earlier suit, RED if none."""
        counts = Counter(card.color for card in self._hand if not card.is_wild)
        best = Color.RED
        best_count = 0
        for color in SUITS:
            if counts[color] > best_count:
                best, best_count = color, counts[color]
        return best

    def has_uno(self) -> bool:
        return len(self._hand) == 1

    def has_won(self) -> bool:
        return len(self._hand) == 0

    def hand_score(self) -> int:
        """Points this hand is worth to the round's winner."""
        return sum(card.points for card in self._hand)

    def add_skipped_turns(self, count: int) -> None:
        self._skipped_turns += count

    def consume_skipped_turn(self) -> bool:
        if self._skipped_turns <= 0:
            return False
        self._skipped_turns -= 1
        return True

    def clear_skipped_turns(self) -> int:
        """Drop all pending forfeits, returning how many there were."""
        count, self._skipped_turns = self._skipped_turns, 0
        return count

    def __repr__(self) -> str:
        return f"Player({self._name!r}, cards={len(self._hand)})"
