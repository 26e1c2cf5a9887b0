"""Simulate a round between four CPU players and print what happened."""

from unoengine.agents import HeuristicStrategy
from unoengine.engine import EventHistory, Game, Player
from unoengine.orchestration.game_runner import GameRunner


def main():
    players = [Player(f"Bot{i}", HeuristicStrategy()) for i in range(1, 5)]
    history = EventHistory()

    game = Game(players, seed=42)
    game.add_event_listener(history)
    result = GameRunner(game).run()

    for line in history.lines:
        print(f"> {line}")
    print(f"Game finished! Winner: {result.winner} ({result.score} points)")
    print(f"Turns: {result.num_turns}")


if __name__ == "__main__":
    main()
