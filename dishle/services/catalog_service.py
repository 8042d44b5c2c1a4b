"""
Catalog Service

Loads the daily puzzle catalog and answers date-keyed lookups.
"""

import json
import re
from typing import Dict, Iterable, Iterator, List, Optional

from ..models.errors import CatalogLoadFailure
from ..models.puzzle import Direction, PuzzleRecord
from ..utils.game_logger import game_logger
from .date_service import decrement_date, increment_date, is_valid_date

# Words are A-Z runs separated by single spaces; anything else cannot be guessed
WORD_PATTERN = re.compile(r"[A-Z]+(?: [A-Z]+)*")


def _parse_record(raw) -> PuzzleRecord:
    """
    Builds a PuzzleRecord from one catalog entry.

    Accepts either an ``adjective`` string or the generator's
    ``adjectives`` list, which is joined with spaces.

    Raises:
        ValueError: If the entry is malformed
    """
    if not isinstance(raw, dict):
        raise ValueError("Puzzle entry must be an object")

    puzzle_date = raw.get('date')
    if not is_valid_date(puzzle_date):
        raise ValueError(f"Invalid puzzle date: {puzzle_date!r}")

    adjective = raw.get('adjective')
    if adjective is None and isinstance(raw.get('adjectives'), list):
        adjective = ' '.join(str(part).strip() for part in raw['adjectives'] if str(part).strip())
    noun = raw.get('noun')

    if not isinstance(adjective, str) or not isinstance(noun, str):
        raise ValueError(f"Puzzle {puzzle_date} must have an adjective and a noun")

    adjective = adjective.strip().upper()
    noun = noun.strip().upper()
    for part in (adjective, noun):
        if not WORD_PATTERN.fullmatch(part):
            raise ValueError(f"Puzzle {puzzle_date} contains an invalid word: {part!r}")

    return PuzzleRecord(date=puzzle_date, adjective=adjective, noun=noun)


class PuzzleCatalog:
    """
    Ordered collection of puzzle records, at most one per date.
    """

    def __init__(self, records: Iterable[PuzzleRecord] = ()):
        self._by_date: Dict[str, PuzzleRecord] = {}
        for record in records:
            if record.date in self._by_date:
                game_logger.logger.warning(f"Duplicate puzzle date {record.date} ignored")
                continue
            self._by_date[record.date] = record

    @classmethod
    def from_entries(cls, entries: List) -> "PuzzleCatalog":
        """Builds a catalog from decoded JSON entries, skipping malformed ones."""
        records = []
        for index, entry in enumerate(entries):
            try:
                records.append(_parse_record(entry))
            except ValueError as e:
                game_logger.logger.warning(f"Skipping puzzle at index {index}: {e}")
        return cls(records)

    def __len__(self) -> int:
        return len(self._by_date)

    def __iter__(self) -> Iterator[PuzzleRecord]:
        return iter(self._by_date.values())

    def dates(self) -> List[str]:
        return list(self._by_date)

    def find_by_date(self, puzzle_date: str) -> Optional[PuzzleRecord]:
        return self._by_date.get(puzzle_date)

    def find_adjacent(self, puzzle_date: str, direction: Direction) -> Optional[PuzzleRecord]:
        """
        Returns the record on the immediately adjacent calendar day, if one exists.

        Adjacency is by calendar, not by catalog order: a gap in the catalog
        means there is no adjacent puzzle.
        """
        if direction == Direction.NEXT:
            adjacent = increment_date(puzzle_date)
        else:
            adjacent = decrement_date(puzzle_date)

        if adjacent == puzzle_date:
            return None
        return self.find_by_date(adjacent)


def read_catalog_file(path: str) -> List:
    """
    Reads the raw catalog JSON array.

    Raises:
        CatalogLoadFailure: If the file is missing, unreadable or not a JSON array
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            entries = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadFailure(f"Puzzle file not found: {path}") from e
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CatalogLoadFailure(f"Could not read puzzle file {path}: {e}") from e

    if not isinstance(entries, list):
        raise CatalogLoadFailure("Puzzle file must contain an array of puzzles")
    return entries


def load_catalog(path: str) -> PuzzleCatalog:
    """
    Loads the catalog once at startup. Any failure degrades to an empty catalog.
    """
    try:
        entries = read_catalog_file(path)
    except CatalogLoadFailure as e:
        game_logger.logger.error(f"Error loading puzzles: {e}")
        return PuzzleCatalog()

    catalog = PuzzleCatalog.from_entries(entries)
    game_logger.logger.info(f"Loaded {len(catalog)} puzzles from {path}")
    return catalog
