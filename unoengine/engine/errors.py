"""Exceptions raised by the engine."""


class UnoError(Exception):
    """Base class for engine errors."""


class InvalidStateError(UnoError):
    """An operation was called in a game state that does not allow it.

    Raised for integration mistakes such as starting with fewer than two
    players. Illegal moves during play are reported by return values instead.
    """
