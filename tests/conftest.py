"""Shared fixtures: decks in a known order and an event recorder."""

from typing import Any, Dict, List, Tuple

import pytest

from unoengine.engine import Card, Deck, Game, GameEvent, Player


class StackedDeckFactory:
    """Deck factory that deals cards in the given order, unshuffled.

    Each deck gets fresh copies, so rounds never share card objects.
    """

    def __init__(self, draw_order: List[Card]):
        self._draw_order = list(draw_order)

    def create_deck(self) -> Deck:
        cards = [Card(kind=c.kind, color=c.color, value=c.value) for c in self._draw_order]
        return Deck(list(reversed(cards)))


class EventRecorder:
    def __init__(self) -> None:
        self.events: List[Tuple[GameEvent, Dict[str, Any]]] = []

    def __call__(self, event: GameEvent, payload: Dict[str, Any]) -> None:
        self.events.append((event, payload))

    def kinds(self) -> List[GameEvent]:
        return [event for event, _ in self.events]

    def of(self, kind: GameEvent) -> List[Dict[str, Any]]:
        return [payload for event, payload in self.events if event is kind]

    def clear(self) -> None:
        self.events = []


def cards(*texts: str) -> List[Card]:
    return [Card.parse(t) for t in texts]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def make_game(recorder):
    """Build a started game whose deal comes from draw_order.

    Hands are dealt hand_size cards per seat in seating order, then the next
    card becomes the top card; the rest stay in the draw pile.
    """

    def _make(draw_order, names=("alice", "bob"), hand_size=1, start=True, strategies=None):
        strategies = strategies or {}
        players = [Player(name, strategies.get(name)) for name in names]
        game = Game(
            players,
            deck_factory=StackedDeckFactory(cards(*draw_order)),
            initial_hand_size=hand_size,
            seed=0,
        )
        game.add_event_listener(recorder)
        if start:
            game.start()
        return game

    return _make
