"""Game events and the listener fan-out."""

from enum import Enum
from typing import Any, Callable, Dict, List


class GameEvent(str, Enum):
    """State transitions announced by the engine."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    CARD_PLAYED = "card_played"
    CARD_DRAWN = "card_drawn"
    UNO_CALLED = "uno_called"
    DIRECTION_CHANGE = "direction_change"
    PLAYER_SKIPPED = "player_skipped"
    GAME_END = "game_end"


GameEventListener = Callable[[GameEvent, Dict[str, Any]], None]


class EventEmitter:
    """Calls every registered listener with (event, payload), in registration order."""

    def __init__(self) -> None:
        self._listeners: List[GameEventListener] = []

    def add_listener(self, listener: GameEventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: GameEventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: GameEvent, **payload: Any) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(event, payload)
