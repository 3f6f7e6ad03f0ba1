"""
Custom exceptions raised by the domain, service and boundary layers.

All of them derive from GameError, so callers higher up can catch one type.
None of them are fatal: the layer raising them leaves the game state untouched.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while playing a game."""


# --- DOMAIN ---
class IllegalMoveError(GameError):
    """The move cannot be applied to the current game state."""


class NotYourTurnError(IllegalMoveError):
    """A player submitted a move while the opponent is to move."""


class CellOccupiedError(IllegalMoveError):
    """The targeted cell already holds a piece."""


class GameOverError(IllegalMoveError):
    """The game reached a terminal status. Only a reset starts a new one."""


class IndexOutOfRangeError(GameError):
    """A board location outside [0, rows * cols)."""


class GameStateError(GameError):
    """Stored or transported game data cannot be turned into a valid game."""


# --- CLIENT ---
class StagingError(GameError):
    """A player view refused to stage a move or end the turn."""


# --- SERVICE / BOUNDARY ---
class RepositoryError(GameError):
    """Record could not be found (or stored) in the repository."""


class InvalidRequestError(GameError):
    """Request data failed validation."""
