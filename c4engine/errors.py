"""
errors.py - Exceptions raised by the Connect Four engine

A full column is not an error; the engine reports it as an invalid
move result instead.
"""


class Connect4Error(Exception):
    """Base class for engine errors."""


class ConfigurationError(Connect4Error, ValueError):
    """Raised when a game is created with an unusable board or player pair."""


class OutOfRangeError(Connect4Error, IndexError):
    """Raised when a column index falls outside the board."""


class GameOverError(Connect4Error, RuntimeError):
    """Raised when a move is attempted after the game has ended."""


__all__ = [
    "Connect4Error",
    "ConfigurationError",
    "GameOverError",
    "OutOfRangeError",
]
