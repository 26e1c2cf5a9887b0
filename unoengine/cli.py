"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import typer
from dotenv import load_dotenv

from unoengine.engine import (
    EventHistory,
    Game,
    GameEvent,
    LoggingListener,
    Player,
    create_deck_factory,
    describe_event,
)

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO rules engine with CPU, LLM and human players")


def _parse_players(
    player_specs: str,
    llm_provider: str,
    llm_model: str,
    history: Optional[EventHistory] = None,
) -> List[Player]:
    from unoengine.agents.heuristic_agent import HeuristicStrategy
    from unoengine.agents.llm_agent import LLMStrategy

    parts = [s.strip().lower() for s in player_specs.split(",") if s.strip()]
    players: List[Player] = []
    for i, part in enumerate(parts):
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "cpu":
            players.append(Player(f"CPU_{i}", HeuristicStrategy()))
        elif kind == "llm":
            players.append(
                Player(f"LLM_{i}", LLMStrategy(provider=llm_provider, model=model, history=history))
            )
        elif kind == "human":
            players.append(Player(f"Human_{i}"))
        else:
            raise typer.BadParameter(f"Unknown player type: {kind}. Use 'cpu', 'llm' or 'human'.")
    return players


def _configure_logging(log_level: str, verbose: bool) -> None:
    level = logging.INFO if verbose else getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


def _echo_event(event: GameEvent, payload: Dict[str, Any]) -> None:
    if event is not GameEvent.TURN_START:
        typer.echo(describe_event(event, payload))


@app.command()
def play(
    players: str = typer.Option(
        "human,cpu,cpu,cpu",
        "--players",
        "-p",
        envvar="UNO_PLAYERS",
        help="Comma-separated: cpu, human, llm or llm:model_name (e.g. human,cpu,llm:gpt-4o)",
    ),
    deck: str = typer.Option("standard", "--deck", "-d", envvar="UNO_DECK", help="standard, quick or wild"),
    skip_two: bool = typer.Option(False, "--skip-two", help="Add Skip Two cards to the standard deck"),
    hand_size: int = typer.Option(7, "--hand-size", envvar="UNO_HAND_SIZE", help="Cards dealt to each player"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        envvar="UNO_LLM_PROVIDER",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        envvar="UNO_LLM_MODEL",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    max_turns: int = typer.Option(1000, "--max-turns", help="Stop after this many turns"),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="UNO_LOG_LEVEL", help="Logging level"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every game event"),
) -> None:
    """Play a single round."""
    from unoengine.agents.human_agent import TerminalHuman
    from unoengine.orchestration.game_runner import GameRunner

    _configure_logging(log_level, verbose)
    history = EventHistory(max_events=50)
    try:
        deck_factory = create_deck_factory(deck, seed=seed, skip_two=skip_two)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    table = _parse_players(players, llm_provider, llm_model, history=history)

    game = Game(table, deck_factory=deck_factory, initial_hand_size=hand_size, seed=seed)
    game.add_event_listener(history)
    game.add_event_listener(_echo_event)
    if verbose:
        game.add_event_listener(LoggingListener())

    runner = GameRunner(game, human=TerminalHuman(), max_turns=max_turns)
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None (unfinished)'}")
    typer.echo(f"Score: {result.score}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    players: str = typer.Option(
        "cpu,cpu",
        "--players",
        "-p",
        envvar="UNO_PLAYERS",
        help="Comma-separated player types or llm:model_name (e.g. cpu,llm:gpt-4o)",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of rounds"),
    deck: str = typer.Option("standard", "--deck", "-d", envvar="UNO_DECK", help="standard, quick or wild"),
    skip_two: bool = typer.Option(False, "--skip-two", help="Add Skip Two cards to the standard deck"),
    hand_size: int = typer.Option(7, "--hand-size", envvar="UNO_HAND_SIZE", help="Cards dealt to each player"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        envvar="UNO_LLM_PROVIDER",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        envvar="UNO_LLM_MODEL",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="UNO_LOG_LEVEL", help="Logging level"),
) -> None:
    """Run a tournament."""
    from unoengine.agents.human_agent import TerminalHuman
    from unoengine.orchestration.tournament import run_tournament

    _configure_logging(log_level, verbose=False)
    table = _parse_players(players, llm_provider, llm_model)
    try:
        result = run_tournament(
            table,
            num_games=games,
            deck=deck,
            seed=seed,
            skip_two=skip_two,
            initial_hand_size=hand_size,
            human=TerminalHuman(),
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo(f"Tournament results ({result.games} rounds):")
    for player in sorted(table, key=lambda p: -result.wins.get(p.name, 0)):
        wins = result.wins.get(player.name, 0)
        points = result.scores.get(player.name, 0)
        typer.echo(f"  {player.name}: {wins} wins, {points} points")
    if result.unfinished:
        typer.echo(f"  unfinished rounds: {result.unfinished}")


if __name__ == "__main__":
    app()
