"""Game engine for UNO."""

from unoengine.engine.card import Card, CardKind, Color
from unoengine.engine.deck import (
    DECK_FACTORIES,
    Deck,
    DeckFactory,
    QuickDeckFactory,
    StandardDeckFactory,
    WildHeavyDeckFactory,
    create_deck_factory,
)
from unoengine.engine.effects import GameControls, play_effect
from unoengine.engine.errors import InvalidStateError, UnoError
from unoengine.engine.events import GameEvent, GameEventListener
from unoengine.engine.game import Game
from unoengine.engine.game_state import Direction, GameSnapshot, GameStatus
from unoengine.engine.history import EventHistory, LoggingListener, describe_event
from unoengine.engine.player import Player

__all__ = [
    "Card",
    "CardKind",
    "Color",
    "DECK_FACTORIES",
    "Deck",
    "DeckFactory",
    "QuickDeckFactory",
    "StandardDeckFactory",
    "WildHeavyDeckFactory",
    "create_deck_factory",
    "GameControls",
    "play_effect",
    "InvalidStateError",
    "UnoError",
    "GameEvent",
    "GameEventListener",
    "Game",
    "Direction",
    "GameSnapshot",
    "GameStatus",
    "EventHistory",
    "LoggingListener",
    "describe_event",
    "Player",
]
