"""Built-in agents."""

from unoengine.agents.heuristic_agent import HeuristicStrategy
from unoengine.agents.human_agent import TerminalHuman
from unoengine.agents.llm_agent import LLMStrategy

__all__ = ["HeuristicStrategy", "LLMStrategy", "TerminalHuman"]
