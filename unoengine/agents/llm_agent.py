"""LLM strategy using the OpenAI library with OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import List, Optional, Tuple

from openai import OpenAI, OpenAIError

from unoengine.agents.heuristic_agent import HeuristicStrategy
from unoengine.engine import Card, Color, EventHistory, GameControls, Player
from unoengine.engine.card import SUITS

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"

MAX_ATTEMPTS = 3

# A legal option: a card (with the color to pick, for wilds), or None to draw.
Option = Optional[Tuple[Card, Optional[Color]]]


def legal_options(hand: List[Card], top: Optional[Card]) -> List[Option]:
    """Every card that may be played on top, wilds once per color, then DRAW."""
    options: List[Option] = []
    for card in hand:
        if top is not None and not card.can_play_on(top):
            continue
        if card.is_wild:
            options.extend((card, color) for color in SUITS)
        else:
            options.append((card, None))
    options.append(None)
    return options


def _format_options(options: List[Option]) -> str:
    lines = []
    for i, option in enumerate(options):
        if option is None:
            lines.append(f"{i}: DRAW")
        else:
            card, color = option
            extra = f" color={color.value}" if color else ""
            lines.append(f"{i}: PLAY {card}{extra}")
    return "\n".join(lines)


def _format_table(player: Player, top: Optional[Card], history: List[str]) -> str:
    color_to_match = top.effective_color.value.upper() if top else "any"
    lines = [
        "=== Your hand ===",
        " ".join(str(c) for c in player.hand),
        "",
        "=== Top card on discard ===",
        str(top) if top else "None",
        "",
        "=== Current color to match ===",
        color_to_match,
        "",
        "=== Game history (most recent last) ===",
    ]
    if history:
        lines.extend(f"- {line}" for line in history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _index_in_range(idx: int, count: int) -> Optional[int]:
    if 0 <= idx < count:
        return idx
    logger.debug("Index %d out of range (0-%d)", idx, count - 1)
    return None


def parse_option_index(response: str, count: int) -> Optional[int]:
    """Pull the chosen option index out of a model response.

    Tries a JSON object first (also with single quotes), then an
    "action_index: N" fragment, then the word DRAW (the last option), then
    any standalone number.
    """
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        for candidate in (json_match.group(1), json_match.group(1).replace("'", '"')):
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                return _index_in_range(data["action_index"], count)

    match = re.search(r"[\"']?action_index[\"']?\s*:\s*(\d+)", response, re.IGNORECASE)
    if match:
        return _index_in_range(int(match.group(1)), count)

    if "DRAW" in response.upper():
        return count - 1

    cleaned = re.sub(r"[{}\[\]\"'.,:]", " ", response)
    for word in cleaned.split():
        if word.isdigit() and 0 <= int(word) < count:
            return int(word)
    return None


def _resolve_provider(provider: str, api_key: Optional[str]) -> Tuple[str, Optional[str]]:
    if provider == "openrouter":
        return OPENROUTER_BASE, api_key or os.environ.get("OPENROUTER_API_KEY")
    if provider == "groq":
        return GROQ_BASE, api_key or os.environ.get("GROQ_API_KEY")
    if provider == "ollama":
        return os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE), "ollama"
    if provider == "huggingface":
        return HUGGINGFACE_BASE, api_key or os.environ.get("HUGGINGFACE_API_KEY")
    raise ValueError(f"Unknown provider: {provider}")


class LLMStrategy:
    """Strategy that asks an LLM which legal option to take.

    Falls back to the heuristic strategy when the model cannot be reached or
    its answer cannot be parsed.
    """

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        history: Optional[EventHistory] = None,
        client: Optional[OpenAI] = None,
    ):
        if client is None:
            base_url, key = _resolve_provider(provider, api_key)
            if not key:
                raise ValueError(
                    f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key."
                )
            client = OpenAI(api_key=key, base_url=base_url)
            logger.info("%s using provider=%s base_url=%s", model, provider, base_url)

        self._client = client
        self._model = model
        self._provider = provider
        self._timeout = timeout
        self._rate_limit = rate_limit  # requests per minute
        self._request_history: List[float] = []
        self._history = history
        self._fallback = HeuristicStrategy()

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        if not self._rate_limit:
            return
        now = time.monotonic()
        self._request_history = [t for t in self._request_history if now - t < 60.0]
        if len(self._request_history) >= self._rate_limit:
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info("%s rate limit reached, waiting %.2fs", self.name, wait_time)
                time.sleep(wait_time)
        self._request_history.append(time.monotonic())

    def _build_prompt(self, player: Player, top: Optional[Card], options: List[Option]) -> str:
        history = self._history.recent(10) if self._history else []
        return f"""You are playing UNO.
Objective: Win by playing all your cards. Match the top discard card by color (Red, Blue, Green, Yellow) or value (0-9, Skip, Reverse, Draw Two). Wild cards can be played on anything.

{_format_table(player, top, history)}

=== Legal actions ===
{_format_options(options)}

INSTRUCTIONS:
Select the best action to win the game.
Respond with a JSON object containing the index of your chosen action.
Example: {{"action_index": 2}}
"""

    def _ask(self, prompt: str, count: int) -> Optional[int]:
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                self._wait_for_rate_limit()
                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                if "gpt-4" in self._model or "gpt-3.5" in self._model or self._provider == "groq":
                    kwargs["response_format"] = {"type": "json_object"}
                resp = self._client.chat.completions.create(**kwargs)
            except OpenAIError as e:
                logger.warning("%s attempt %d failed: %s: %s", self.name, attempt, type(e).__name__, e)
                continue

            content = resp.choices[0].message.content or ""
            index = parse_option_index(content, count)
            if index is not None:
                return index
            logger.warning("%s attempt %d: could not parse %r", self.name, attempt, content)
        return None

    def make_move(self, game: GameControls, player: Player) -> None:
        top = game.get_top_card()
        options = legal_options(player.hand, top)
        index = self._ask(self._build_prompt(player, top, options), len(options))
        if index is None:
            logger.warning("%s: all attempts failed, using heuristic move", self.name)
            self._fallback.make_move(game, player)
            return

        option = options[index]
        if option is not None:
            card, color = option
            if color is not None:
                card.choose_color(color)
            game.play_card(card)
            return

        drawn = game.draw_card()
        if drawn is not None and top is not None and drawn.can_play_on(top):
            game.play_card(drawn)

    def choose_color(self, player: Player) -> Color:
        return player.choose_color()
