"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from ..config.game_settings import STARTING_QUALITY


class LetterStatus(Enum):
    """Outcome of a single ingredient letter."""
    MATCHED = "MATCHED"  # consumed from the noun
    NEUTRAL = "NEUTRAL"  # consumed from the adjective
    MISS = "MISS"        # in neither, costs one quality point


class GameStatus(Enum):
    """Lifecycle status of a session. WON and LOST are terminal."""
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"


@dataclass(frozen=True)
class LetterOutcome:
    letter: str
    status: LetterStatus

    def to_dict(self) -> Dict[str, str]:
        return {"letter": self.letter, "status": self.status.value}


@dataclass(frozen=True)
class GuessRecord:
    """One accepted ingredient and the per-letter outcomes, in letter order."""
    ingredient: str
    outcomes: Tuple[LetterOutcome, ...]

    @property
    def miss_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == LetterStatus.MISS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ingredient": self.ingredient,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes]
        }


@dataclass(frozen=True)
class MatchResult:
    """Result of resolving one ingredient against the remaining phrase."""
    outcomes: Tuple[LetterOutcome, ...]
    remaining_adjective: str
    remaining_noun: str
    miss_count: int


@dataclass
class GameSession:
    """Mutable play state for one puzzle date."""
    puzzle_date: str
    adjective: str
    noun: str
    remaining_adjective: str
    remaining_noun: str
    quality: int = STARTING_QUALITY
    injuries: int = 0
    moves: int = 0
    history: List[GuessRecord] = field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def dish_name(self) -> str:
        return f"{self.adjective} {self.noun}"

    def to_dict(self) -> Dict[str, Any]:
        """Full snapshot with enums flattened to strings for JSON serialization."""
        return {
            "puzzle_date": self.puzzle_date,
            "adjective": self.adjective,
            "noun": self.noun,
            "remaining_adjective": self.remaining_adjective,
            "remaining_noun": self.remaining_noun,
            "quality": self.quality,
            "injuries": self.injuries,
            "moves": self.moves,
            "history": [record.to_dict() for record in self.history],
            "status": self.status.value
        }
