"""
Session Store

Persists game sessions and preview-date overrides in a durable string
key-value backend. Reads and writes never fail gameplay: problems are
logged and reported as None / False.
"""

import json
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import (
    PREVIEW_KEY_PREFIX, SESSION_KEY_PREFIX, SNAPSHOT_VERSION, STARTING_QUALITY, SHARE_GLYPHS
)
from ..models.errors import PersistenceFailure
from ..models.game import GameSession, GameStatus, GuessRecord, LetterOutcome, LetterStatus
from ..models.puzzle import PuzzleRecord
from ..utils.game_logger import game_logger
from .date_service import DATE_PATTERN


class MemoryKeyValueStore:
    """In-process backend. Used for development and tests."""

    def __init__(self):
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class MongoKeyValueStore:
    """
    MongoDB backend. Each key is one document: ``{_id: key, value: str}``.
    """

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def connect(cls, mongo_uri: str, db_name: str = 'dishle', collection_name: str = 'player_state'):
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        try:
            client.admin.command('ping')
        except PyMongoError as e:
            raise PersistenceFailure(f"MongoDB connection error: {e}") from e
        return cls(client[db_name][collection_name])

    def get(self, key: str) -> Optional[str]:
        try:
            document = self.collection.find_one({"_id": key})
        except PyMongoError as e:
            raise PersistenceFailure(str(e)) from e
        if not document:
            return None
        return document.get("value")

    def set(self, key: str, value: str) -> None:
        try:
            self.collection.update_one({"_id": key}, {"$set": {"value": value}}, upsert=True)
        except PyMongoError as e:
            raise PersistenceFailure(str(e)) from e

    def delete(self, key: str) -> None:
        try:
            self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            raise PersistenceFailure(str(e)) from e


def session_key(player_id: str, puzzle_date: str) -> str:
    return f"{SESSION_KEY_PREFIX}:{player_id}:{puzzle_date}"


def preview_key(player_id: str) -> str:
    return f"{PREVIEW_KEY_PREFIX}:{player_id}"


# Legacy snapshots (no "version") used camelCase names and a "health" counter
_LEGACY_FIELDS = {
    'remainingAdjective': 'remaining_adjective',
    'remainingNoun': 'remaining_noun',
    'puzzleDate': 'puzzle_date',
    'health': 'quality',
}
_GLYPH_STATUS = {glyph: LetterStatus(name) for name, glyph in SHARE_GLYPHS.items()}


def _migrate_history_entry(entry: Any) -> Any:
    """Legacy history stored ``{verb, result}`` with result as a glyph string."""
    if not isinstance(entry, dict) or 'ingredient' in entry or 'verb' not in entry:
        return entry

    verb = entry.get('verb')
    result = entry.get('result')
    if not isinstance(verb, str) or not isinstance(result, str):
        raise ValueError("Malformed legacy history entry")

    glyphs = list(result)
    if len(glyphs) != len(verb):
        raise ValueError("Legacy history result does not match its ingredient")
    if any(glyph not in _GLYPH_STATUS for glyph in glyphs):
        raise ValueError("Unknown glyph in legacy history result")

    return {
        'ingredient': verb,
        'outcomes': [
            {'letter': letter, 'status': _GLYPH_STATUS[glyph].value}
            for letter, glyph in zip(verb, glyphs)
        ]
    }


def migrate_snapshot(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Upgrades an older snapshot to the current shape.

    Unversioned snapshots get renamed fields, a status derived from the
    isWon/isLost flags, and their history entries converted.
    """
    if raw.get('version', 1) >= SNAPSHOT_VERSION:
        return raw

    migrated: Dict[str, Any] = {}
    for name, value in raw.items():
        target = _LEGACY_FIELDS.get(name, name)
        # Prefer the current name when both are present
        if target in migrated and name != target:
            continue
        migrated[target] = value

    if 'status' not in migrated:
        if migrated.pop('isWon', False):
            migrated['status'] = GameStatus.WON.value
        elif migrated.pop('isLost', False):
            migrated['status'] = GameStatus.LOST.value
    migrated.pop('isWon', None)
    migrated.pop('isLost', None)

    if isinstance(migrated.get('history'), list):
        migrated['history'] = [_migrate_history_entry(entry) for entry in migrated['history']]

    migrated['version'] = SNAPSHOT_VERSION
    return migrated


def _expect(value: Any, kind, name: str):
    # bool is an int subclass; never accept it for counters
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"Field '{name}' has the wrong type")
    return value


def _parse_history(entries: Any):
    history = []
    for entry in _expect(entries, list, 'history'):
        entry = _expect(entry, dict, 'history entry')
        outcomes = []
        for outcome in _expect(entry.get('outcomes'), list, 'outcomes'):
            outcome = _expect(outcome, dict, 'outcome')
            outcomes.append(LetterOutcome(
                letter=_expect(outcome.get('letter'), str, 'letter'),
                status=LetterStatus(outcome.get('status'))
            ))
        history.append(GuessRecord(
            ingredient=_expect(entry.get('ingredient'), str, 'ingredient'),
            outcomes=tuple(outcomes)
        ))
    return history


def session_from_snapshot(raw: Dict[str, Any], puzzle_date: str,
                          puzzle: Optional[PuzzleRecord] = None) -> GameSession:
    """
    Rebuilds a GameSession from a decoded snapshot.

    Missing phrase fields are filled from the puzzle record; missing counters
    take their fresh-session defaults.

    Raises:
        ValueError: If a field is present with the wrong type or value
    """
    snapshot = migrate_snapshot(raw)

    adjective = snapshot.get('adjective') or (puzzle.adjective if puzzle else None)
    noun = snapshot.get('noun') or (puzzle.noun if puzzle else None)
    if not adjective or not noun:
        raise ValueError("Snapshot has no dish name and no puzzle to fall back on")

    remaining_adjective = snapshot.get('remaining_adjective')
    if remaining_adjective is None:
        remaining_adjective = adjective
    remaining_noun = snapshot.get('remaining_noun')
    if remaining_noun is None:
        remaining_noun = noun

    history = _parse_history(snapshot.get('history', []))
    quality = snapshot.get('quality', STARTING_QUALITY)
    injuries = snapshot.get('injuries', sum(record.miss_count for record in history))

    return GameSession(
        puzzle_date=puzzle_date,
        adjective=_expect(adjective, str, 'adjective'),
        noun=_expect(noun, str, 'noun'),
        remaining_adjective=_expect(remaining_adjective, str, 'remaining_adjective'),
        remaining_noun=_expect(remaining_noun, str, 'remaining_noun'),
        quality=_expect(quality, int, 'quality'),
        injuries=_expect(injuries, int, 'injuries'),
        moves=_expect(snapshot.get('moves', len(history)), int, 'moves'),
        history=history,
        status=GameStatus(snapshot.get('status', GameStatus.IN_PROGRESS.value))
    )


class SessionStore:
    """
    Game sessions keyed by player and puzzle date.
    """

    def __init__(self, backend):
        self.backend = backend

    def load(self, player_id: str, puzzle_date: str,
             puzzle: Optional[PuzzleRecord] = None) -> Optional[GameSession]:
        """
        Restores a persisted session.

        Returns:
            GameSession, or None when nothing usable is stored
        """
        key = session_key(player_id, puzzle_date)
        try:
            value = self.backend.get(key)
        except PersistenceFailure as e:
            game_logger.log_storage_error('load', key, e)
            return None

        if value is None:
            return None

        try:
            raw = json.loads(value)
            if not isinstance(raw, dict):
                raise ValueError("Snapshot is not an object")
            return session_from_snapshot(raw, puzzle_date, puzzle)
        except (ValueError, TypeError, AttributeError) as e:
            game_logger.log_storage_error('load', key, e)
            return None

    def save(self, session: GameSession, player_id: str) -> bool:
        """
        Writes the full session snapshot.

        Returns:
            bool: False if the write failed (gameplay continues unpersisted)
        """
        key = session_key(player_id, session.puzzle_date)
        snapshot = {'version': SNAPSHOT_VERSION, **session.to_dict()}
        try:
            self.backend.set(key, json.dumps(snapshot, ensure_ascii=False))
        except PersistenceFailure as e:
            game_logger.log_storage_error('save', key, e)
            return False
        return True

    def clear(self, player_id: str, puzzle_date: str) -> bool:
        key = session_key(player_id, puzzle_date)
        try:
            self.backend.delete(key)
        except PersistenceFailure as e:
            game_logger.log_storage_error('clear', key, e)
            return False
        return True


class PreviewDateStore:
    """
    Per-player preview-date override, kept apart from puzzle progress.
    """

    def __init__(self, backend):
        self.backend = backend

    def load(self, player_id: str) -> Optional[str]:
        """Returns the stored override; a badly formatted one is cleared."""
        key = preview_key(player_id)
        try:
            value = self.backend.get(key)
        except PersistenceFailure as e:
            game_logger.log_storage_error('load', key, e)
            return None

        if value is None:
            return None
        if not DATE_PATTERN.match(value):
            game_logger.logger.warning(f"Clearing malformed preview date {value!r}")
            self.clear(player_id)
            return None
        return value

    def save(self, player_id: str, preview_date: str) -> bool:
        key = preview_key(player_id)
        try:
            self.backend.set(key, preview_date)
        except PersistenceFailure as e:
            game_logger.log_storage_error('save', key, e)
            return False
        return True

    def clear(self, player_id: str) -> bool:
        key = preview_key(player_id)
        try:
            self.backend.delete(key)
        except PersistenceFailure as e:
            game_logger.log_storage_error('clear', key, e)
            return False
        return True


def create_backend(storage_backend: str, mongo_uri: Optional[str] = None, mongo_db: str = 'dishle'):
    """Builds the configured key-value backend."""
    if storage_backend == 'mongo':
        if not mongo_uri:
            raise PersistenceFailure("MONGO_URI is required for the mongo storage backend")
        return MongoKeyValueStore.connect(mongo_uri, mongo_db)
    return MemoryKeyValueStore()
