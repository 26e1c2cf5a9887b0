"""Tournament - run many rounds and aggregate results."""

import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from unoengine.agents.human_agent import TerminalHuman
from unoengine.engine import Game, Player, create_deck_factory
from unoengine.engine.game import INITIAL_HAND_SIZE
from unoengine.orchestration.game_runner import GameRunner


@dataclass
class TournamentResult:
    """Wins and points per player name."""

    games: int
    wins: Dict[str, int] = field(default_factory=dict)
    scores: Dict[str, int] = field(default_factory=dict)
    unfinished: int = 0


def run_tournament(
    players: List[Player],
    num_games: int = 100,
    deck: str = "standard",
    seed: Optional[int] = None,
    skip_two: bool = False,
    initial_hand_size: int = INITIAL_HAND_SIZE,
    human: Optional[TerminalHuman] = None,
) -> TournamentResult:
    """Play num_games rounds with the same players.

    Seating alternates between the given order and its reverse, so nobody
    always moves first. Each table is reused and reset between rounds.
    """
    rng = random.Random(seed)
    seatings = (list(players), list(reversed(players)))
    runners = []
    for seating in seatings:
        game = Game(
            seating,
            deck_factory=create_deck_factory(deck, seed=rng.randint(0, 2**31 - 1), skip_two=skip_two),
            initial_hand_size=initial_hand_size,
            seed=rng.randint(0, 2**31 - 1),
        )
        runners.append(GameRunner(game, human=human))

    wins: Dict[str, int] = defaultdict(int)
    scores: Dict[str, int] = defaultdict(int)
    unfinished = 0
    for g in range(num_games):
        result = runners[g % 2].run()
        if result.winner is None:
            unfinished += 1
            continue
        wins[result.winner] += 1
        scores[result.winner] += result.score

    return TournamentResult(
        games=num_games,
        wins=dict(wins),
        scores=dict(scores),
        unfinished=unfinished,
    )
