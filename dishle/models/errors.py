"""
Game Errors

Exception types raised by the puzzle engine and its collaborators.
"""


class GameError(Exception):
    """Base class for all game errors."""


class InvalidIngredient(GameError):
    """Ingredient failed normalization (wrong length or characters)."""


class SessionTerminal(GameError):
    """Guess submitted after the session was already won or lost."""


class PuzzleNotAvailable(GameError):
    """No puzzle exists for the requested date."""


class CatalogLoadFailure(GameError):
    """Puzzle catalog could not be read."""


class PersistenceFailure(GameError):
    """Storage backend read or write failed."""


class MalformedDate(GameError):
    """Date string is not a valid YYYY-MM-DD calendar date."""
