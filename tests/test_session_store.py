import json
from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError

from dishle.models.errors import PersistenceFailure
from dishle.models.game import GameStatus, LetterStatus
from dishle.services.game_service import apply_guess, new_session
from dishle.services.session_store import (
    MemoryKeyValueStore, MongoKeyValueStore, PreviewDateStore, SessionStore,
    preview_key, session_key
)

RED = "\U0001F7E5"
GREEN = "\U0001F7E9"


class FailingBackend:
    """Backend whose every operation fails."""

    def get(self, key):
        raise PersistenceFailure("read failed")

    def set(self, key, value):
        raise PersistenceFailure("quota exceeded")

    def delete(self, key):
        raise PersistenceFailure("delete failed")


@pytest.fixture
def store(backend):
    return SessionStore(backend)


def test_keys_are_namespaced():
    assert session_key("p1", "2026-10-18") == "dishle:session:p1:2026-10-18"
    assert preview_key("p1") == "dishle:preview:p1"


def test_round_trip(store, soup_puzzle):
    session = new_session(soup_puzzle)
    apply_guess(session, "SOUP")
    apply_guess(session, "ZEBRA")

    assert store.save(session, "p1")
    restored = store.load("p1", soup_puzzle.date, soup_puzzle)

    assert restored == session
    assert restored is not session


def test_round_trip_of_finished_session(store, soup_puzzle):
    session = new_session(soup_puzzle)
    apply_guess(session, "ZZZZZZZZZZ")

    store.save(session, "p1")

    assert store.load("p1", soup_puzzle.date).status == GameStatus.LOST


def test_sessions_are_scoped_by_player_and_date(store, soup_puzzle):
    session = new_session(soup_puzzle)
    store.save(session, "p1")

    assert store.load("p2", soup_puzzle.date, soup_puzzle) is None
    assert store.load("p1", "2026-10-19", soup_puzzle) is None


def test_missing_record_is_none(store, soup_puzzle):
    assert store.load("p1", soup_puzzle.date, soup_puzzle) is None


@pytest.mark.parametrize("value", [
    "{not json",
    "[]",
    "null",
    json.dumps({"version": 2, "quality": "ten"}),
    json.dumps({"version": 2, "quality": True}),
    json.dumps({"version": 2, "status": "PAUSED"}),
    json.dumps({"version": 2, "history": "SOUP"}),
    json.dumps({"version": 2, "history": [{"ingredient": "SOUP", "outcomes": [{"letter": "S", "status": "MAYBE"}]}]}),
])
def test_malformed_record_is_none(store, backend, soup_puzzle, value):
    backend.set(session_key("p1", soup_puzzle.date), value)

    assert store.load("p1", soup_puzzle.date, soup_puzzle) is None


def test_missing_fields_are_filled_from_puzzle(store, backend, soup_puzzle):
    backend.set(session_key("p1", soup_puzzle.date), json.dumps({"version": 2, "moves": 0}))

    assert store.load("p1", soup_puzzle.date, soup_puzzle) == new_session(soup_puzzle)


def test_record_without_phrase_or_puzzle_is_none(store, backend):
    backend.set(session_key("p1", "2026-10-18"), json.dumps({"version": 2, "moves": 0}))

    assert store.load("p1", "2026-10-18") is None


def test_legacy_record_is_migrated(store, backend, soup_puzzle):
    legacy = {
        "adjective": "SPICY",
        "noun": "SOUP",
        "remainingAdjective": "PICY",
        "remainingNoun": "SUP",
        "health": 7,
        "injuries": 3,
        "moves": 2,
        "history": [
            {"verb": "SO", "result": GREEN * 2},
            {"verb": "ZZZ", "result": RED * 3},
        ],
        "isWon": False,
        "isLost": False,
        "puzzleDate": "2026-10-18",
    }
    backend.set(session_key("p1", soup_puzzle.date), json.dumps(legacy))

    session = store.load("p1", soup_puzzle.date, soup_puzzle)

    assert session.quality == 7
    assert session.injuries == 3
    assert session.remaining_adjective == "PICY"
    assert session.remaining_noun == "SUP"
    assert session.status == GameStatus.IN_PROGRESS
    assert [record.ingredient for record in session.history] == ["SO", "ZZZ"]
    assert all(outcome.status == LetterStatus.MISS for outcome in session.history[1].outcomes)


def test_legacy_lost_flag_becomes_status(store, backend, soup_puzzle):
    legacy = {"adjective": "SPICY", "noun": "SOUP", "health": 0, "isLost": True, "history": []}
    backend.set(session_key("p1", soup_puzzle.date), json.dumps(legacy))

    session = store.load("p1", soup_puzzle.date, soup_puzzle)

    assert session.status == GameStatus.LOST
    assert session.quality == 0


def test_current_quality_wins_over_legacy_health(store, backend, soup_puzzle):
    legacy = {"adjective": "SPICY", "noun": "SOUP", "quality": 4, "health": 9}
    backend.set(session_key("p1", soup_puzzle.date), json.dumps(legacy))

    assert store.load("p1", soup_puzzle.date, soup_puzzle).quality == 4


def test_empty_remaining_strings_are_not_refilled(store, soup_puzzle):
    session = new_session(soup_puzzle)
    session.remaining_adjective = ""
    store.save(session, "p1")

    assert store.load("p1", soup_puzzle.date, soup_puzzle).remaining_adjective == ""


def test_clear_removes_record(store, soup_puzzle):
    store.save(new_session(soup_puzzle), "p1")

    assert store.clear("p1", soup_puzzle.date)
    assert store.load("p1", soup_puzzle.date, soup_puzzle) is None


def test_backend_failures_are_not_fatal(soup_puzzle):
    store = SessionStore(FailingBackend())

    assert store.save(new_session(soup_puzzle), "p1") is False
    assert store.load("p1", soup_puzzle.date, soup_puzzle) is None
    assert store.clear("p1", soup_puzzle.date) is False


def test_preview_store(backend):
    previews = PreviewDateStore(backend)

    assert previews.load("p1") is None
    assert previews.save("p1", "2026-10-19")
    assert previews.load("p1") == "2026-10-19"
    assert previews.clear("p1")
    assert previews.load("p1") is None


def test_preview_store_clears_malformed_value(backend):
    backend.set(preview_key("p1"), "next tuesday")

    assert PreviewDateStore(backend).load("p1") is None
    assert backend.get(preview_key("p1")) is None


def test_preview_and_sessions_do_not_collide(backend, soup_puzzle):
    PreviewDateStore(backend).save("p1", "2026-10-18")
    SessionStore(backend).save(new_session(soup_puzzle), "p1")

    assert PreviewDateStore(backend).load("p1") == "2026-10-18"
    assert len(backend.data) == 2


def test_preview_store_failures_are_not_fatal():
    previews = PreviewDateStore(FailingBackend())

    assert previews.load("p1") is None
    assert previews.save("p1", "2026-10-19") is False


class TestMongoKeyValueStore:
    def test_get_returns_stored_value(self):
        collection = MagicMock()
        collection.find_one.return_value = {"_id": "k", "value": "v"}

        assert MongoKeyValueStore(collection).get("k") == "v"
        collection.find_one.assert_called_once_with({"_id": "k"})

    def test_get_missing_returns_none(self):
        collection = MagicMock()
        collection.find_one.return_value = None

        assert MongoKeyValueStore(collection).get("k") is None

    def test_set_upserts(self):
        collection = MagicMock()

        MongoKeyValueStore(collection).set("k", "v")

        collection.update_one.assert_called_once_with({"_id": "k"}, {"$set": {"value": "v"}}, upsert=True)

    def test_delete(self):
        collection = MagicMock()

        MongoKeyValueStore(collection).delete("k")

        collection.delete_one.assert_called_once_with({"_id": "k"})

    def test_driver_errors_become_persistence_failures(self):
        collection = MagicMock()
        collection.find_one.side_effect = PyMongoError("connection refused")
        collection.update_one.side_effect = PyMongoError("connection refused")

        backend = MongoKeyValueStore(collection)
        with pytest.raises(PersistenceFailure):
            backend.get("k")
        with pytest.raises(PersistenceFailure):
            backend.set("k", "v")

    def test_session_store_over_mongo(self, soup_puzzle):
        documents = {}
        collection = MagicMock()
        collection.find_one.side_effect = lambda query: documents.get(query["_id"])
        collection.update_one.side_effect = (
            lambda query, update, upsert: documents.__setitem__(
                query["_id"], {"_id": query["_id"], **update["$set"]}
            )
        )
        store = SessionStore(MongoKeyValueStore(collection))
        session = new_session(soup_puzzle)
        apply_guess(session, "SOUP")

        assert store.save(session, "p1")
        assert store.load("p1", soup_puzzle.date, soup_puzzle) == session
