"""Game status, direction and read-only snapshots."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional

from unoengine.engine.card import Card


class Direction(IntEnum):
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1


class GameStatus(str, Enum):
    """Engine lifecycle.

    AWAITING_COLOR_CHOICE is entered when a human-controlled player plays a
    wild card without a color; the turn resumes on complete_wild_card_play().
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    ENDED = "ended"


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of the public game state."""

    players: tuple[str, ...]
    hand_sizes: Dict[str, int]  # player name -> number of cards
    current_player_index: int
    direction: Direction
    top_card: Optional[Card]
    winner: Optional[str]
    game_over: bool
    status: GameStatus

    @property
    def current_player(self) -> Optional[str]:
        if not self.players:
            return None
        return self.players[self.current_player_index]
