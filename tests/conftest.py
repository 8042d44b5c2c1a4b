import json
import os
import tempfile
from datetime import datetime, timezone

import pytest

# Keep test logs out of the working tree; must happen before dishle is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='dishle-logs-'))

from dishle import create_app, initialize_services  # noqa: E402
from dishle.config import TestingConfig  # noqa: E402
from dishle.models.puzzle import PuzzleRecord  # noqa: E402
from dishle.services.catalog_service import PuzzleCatalog  # noqa: E402
from dishle.services.date_service import DateResolver  # noqa: E402
from dishle.services.game_service import GameService  # noqa: E402
from dishle.services.session_store import (  # noqa: E402
    MemoryKeyValueStore, PreviewDateStore, SessionStore
)

TODAY = "2026-10-18"

PUZZLES = [
    {"date": "2026-10-16", "adjective": "GOLDEN", "noun": "CROISSANT"},
    {"date": "2026-10-17", "adjective": "SMOKY", "noun": "BRISKET"},
    {"date": "2026-10-18", "adjective": "SPICY", "noun": "SOUP"},
    {"date": "2026-10-19", "adjective": "HEARTY", "noun": "GOULASH"},
    # 2026-10-20 intentionally missing
    {"date": "2026-10-21", "adjective": "TANGY", "noun": "CEVICHE"},
    {"date": "2026-10-22", "adjective": "HOT", "noun": "ICE CREAM"},
]


class FixedClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    # 10:00 UTC is 13:00 in Helsinki, same calendar day
    return FixedClock(datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog():
    return PuzzleCatalog.from_entries(PUZZLES)


@pytest.fixture
def backend():
    return MemoryKeyValueStore()


@pytest.fixture
def game_service(catalog, backend, clock):
    return GameService(
        catalog,
        SessionStore(backend),
        PreviewDateStore(backend),
        DateResolver('Europe/Helsinki', clock)
    )


@pytest.fixture
def soup_puzzle():
    return PuzzleRecord(date=TODAY, adjective="SPICY", noun="SOUP")


@pytest.fixture
def app_and_socketio(tmp_path, clock):
    puzzle_file = tmp_path / 'puzzles.json'
    puzzle_file.write_text(json.dumps(PUZZLES), encoding='utf-8')

    class Config(TestingConfig):
        PUZZLE_FILE = str(puzzle_file)

    initialize_services(Config, clock)
    return create_app(Config)


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token(client):
    response = client.post('/api/player')
    return response.get_json()['token']


@pytest.fixture
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}
