"""
Puzzle Data Models

Contains catalog-related data structures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Direction(Enum):
    """Calendar direction for puzzle navigation."""
    PREVIOUS = "previous"
    NEXT = "next"


@dataclass(frozen=True)
class PuzzleRecord:
    """A single daily dish name."""
    date: str
    adjective: str
    noun: str

    def to_dict(self) -> Dict[str, str]:
        return {"date": self.date, "adjective": self.adjective, "noun": self.noun}
