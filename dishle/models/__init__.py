"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .errors import (
    GameError, InvalidIngredient, SessionTerminal, PuzzleNotAvailable,
    CatalogLoadFailure, PersistenceFailure, MalformedDate
)
from .game import GameSession, GameStatus, GuessRecord, LetterOutcome, LetterStatus, MatchResult
from .letter_pool import LetterPool
from .puzzle import Direction, PuzzleRecord

__all__ = [
    'GameError', 'InvalidIngredient', 'SessionTerminal', 'PuzzleNotAvailable',
    'CatalogLoadFailure', 'PersistenceFailure', 'MalformedDate',
    'GameSession', 'GameStatus', 'GuessRecord', 'LetterOutcome', 'LetterStatus', 'MatchResult',
    'LetterPool', 'Direction', 'PuzzleRecord'
]
