"""Deck, discard pile and deck factories."""

import random
from typing import List, Optional, Protocol

from unoengine.engine.card import Card, CardKind, Color, SUITS


class Deck:
    """Draw pile, discard pile and the exposed top card.

    The draw pile is drawn from its end. The top card is never part of
    either pile, so recycling the discard pile can never redeal it.
    """

    def __init__(self, cards: Optional[List[Card]] = None, rng: Optional[random.Random] = None):
        self._cards: List[Card] = list(cards or [])
        self._discard_pile: List[Card] = []
        self._top_card: Optional[Card] = None
        self._rng = rng or random.Random()

    @property
    def top_card(self) -> Optional[Card]:
        return self._top_card

    @property
    def draw_pile_size(self) -> int:
        return len(self._cards)

    @property
    def discard_pile_size(self) -> int:
        return len(self._discard_pile)

    @property
    def total_cards(self) -> int:
        """Cards held by the deck: draw pile, discard pile and top card."""
        return len(self._cards) + len(self._discard_pile) + (1 if self._top_card else 0)

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self) -> Optional[Card]:
        """Draw one card, recycling the discard pile if needed. None when exhausted."""
        if not self._cards:
            self._recycle_discard_pile()
            if not self._cards:
                return None
        return self._cards.pop()

    def draw_multiple(self, count: int) -> List[Card]:
        drawn: List[Card] = []
        for _ in range(count):
            card = self.draw()
            if card is None:
                break
            drawn.append(card)
        return drawn

    def discard(self, card: Card) -> None:
        """Make card the new top, burying the old top in the discard pile."""
        if self._top_card is not None:
            self._top_card.reset_color()
            self._discard_pile.append(self._top_card)
        self._top_card = card

    def _recycle_discard_pile(self) -> None:
        if not self._discard_pile:
            return
        self._cards = self._discard_pile
        self._discard_pile = []
        self.shuffle()


class DeckFactory(Protocol):
    """Builds a fresh, shuffled deck for each round."""

    def create_deck(self) -> Deck:
        ...


class _ShuffledDeckFactory:
    """Base for factories: subclasses supply the card recipe."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def cards(self) -> List[Card]:
        raise NotImplementedError

    def create_deck(self) -> Deck:
        deck = Deck(self.cards(), rng=self._rng)
        deck.shuffle()
        return deck


class StandardDeckFactory(_ShuffledDeckFactory):
    """Standard 108-card UNO deck.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    With skip_two=True, two Skip Two cards per color are added (116 total).
    """

    def __init__(self, seed: Optional[int] = None, skip_two: bool = False):
        super().__init__(seed)
        self._skip_two = skip_two

    def cards(self) -> List[Card]:
        cards: List[Card] = []
        action_kinds = [CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO]
        if self._skip_two:
            action_kinds.append(CardKind.SKIP_TWO)

        for color in SUITS:
            cards.append(Card(kind=CardKind.NUMBER, color=color, value=0))
            for value in range(1, 10):
                cards.append(Card(kind=CardKind.NUMBER, color=color, value=value))
                cards.append(Card(kind=CardKind.NUMBER, color=color, value=value))
            for _ in range(2):
                for kind in action_kinds:
                    cards.append(Card(kind=kind, color=color))

        for _ in range(4):
            cards.append(Card(kind=CardKind.WILD))
            cards.append(Card(kind=CardKind.WILD_DRAW_FOUR))
        return cards


class QuickDeckFactory(_ShuffledDeckFactory):
    """Reduced 40-card deck: 0-5 and one of each action per color, 2+2 wilds."""

    def cards(self) -> List[Card]:
        cards: List[Card] = []
        for color in SUITS:
            for value in range(6):
                cards.append(Card(kind=CardKind.NUMBER, color=color, value=value))
            for kind in (CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO):
                cards.append(Card(kind=kind, color=color))
        for _ in range(2):
            cards.append(Card(kind=CardKind.WILD))
            cards.append(Card(kind=CardKind.WILD_DRAW_FOUR))
        return cards


class WildHeavyDeckFactory(_ShuffledDeckFactory):
    """Novelty 56-card deck: 20 Wild, 20 Wild Draw Four, two 0s and 1s per color."""

    def cards(self) -> List[Card]:
        cards: List[Card] = []
        for _ in range(20):
            cards.append(Card(kind=CardKind.WILD))
            cards.append(Card(kind=CardKind.WILD_DRAW_FOUR))
        for color in SUITS:
            for _ in range(2):
                cards.append(Card(kind=CardKind.NUMBER, color=color, value=0))
                cards.append(Card(kind=CardKind.NUMBER, color=color, value=1))
        return cards


DECK_FACTORIES = {
    "standard": StandardDeckFactory,
    "quick": QuickDeckFactory,
    "wild": WildHeavyDeckFactory,
}


def create_deck_factory(name: str, seed: Optional[int] = None, skip_two: bool = False) -> DeckFactory:
    """Look up a deck factory by name."""
    try:
        factory_cls = DECK_FACTORIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown deck: {name}. Choose from {', '.join(DECK_FACTORIES)}"
        ) from None
    if factory_cls is StandardDeckFactory:
        return StandardDeckFactory(seed=seed, skip_two=skip_two)
    return factory_cls(seed=seed)
