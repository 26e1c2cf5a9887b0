"""Strategy interface for automated players."""

from unoengine.agent.protocol import PlayerStrategy

__all__ = ["PlayerStrategy"]
