"""Event subscribers: a readable game history and a logging sink."""

import logging
from typing import Any, Dict, List, Optional

from unoengine.engine.events import GameEvent

logger = logging.getLogger(__name__)


def describe_event(event: GameEvent, payload: Dict[str, Any]) -> str:
    """Render an engine event as one line of text."""
    player = payload.get("player")
    name = player.name if player is not None else "?"

    if event is GameEvent.GAME_START:
        names = ", ".join(p.name for p in payload["players"])
        return f"Game started with {names}; top card {payload['top_card']}"
    if event is GameEvent.TURN_START:
        return f"{name}'s turn (top card {payload['top_card']})"
    if event is GameEvent.CARD_PLAYED:
        return f"{name} played {payload['card']}"
    if event is GameEvent.CARD_DRAWN:
        if "cards" in payload:
            return f"{name} drew {payload['count']} cards (penalty)"
        return f"{name} drew a card"
    if event is GameEvent.UNO_CALLED:
        return f"{name} has UNO!"
    if event is GameEvent.DIRECTION_CHANGE:
        return f"Direction is now {payload['direction'].name.lower().replace('_', '-')}"
    if event is GameEvent.PLAYER_SKIPPED:
        return f"{name} was skipped"
    if event is GameEvent.GAME_END:
        return f"{payload['winner'].name} WON with {payload['score']} points!"
    return event.value


class EventHistory:
    """Keeps the text of game events, most recent last.

    TURN_START is left out unless include_turns is set, since it repeats on
    every move.
    """

    def __init__(self, max_events: Optional[int] = None, include_turns: bool = False):
        self._lines: List[str] = []
        self._max_events = max_events
        self._include_turns = include_turns

    def __call__(self, event: GameEvent, payload: Dict[str, Any]) -> None:
        if event is GameEvent.TURN_START and not self._include_turns:
            return
        self._lines.append(describe_event(event, payload))
        if self._max_events is not None and len(self._lines) > self._max_events:
            del self._lines[: len(self._lines) - self._max_events]

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def recent(self, count: int = 10) -> List[str]:
        return self._lines[-count:]

    def clear(self) -> None:
        self._lines = []


class LoggingListener:
    """Forwards game events to a logger."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._log = log or logger
        self._level = level

    def __call__(self, event: GameEvent, payload: Dict[str, Any]) -> None:
        level = logging.DEBUG if event is GameEvent.TURN_START else self._level
        self._log.log(level, "%s", describe_event(event, payload))
