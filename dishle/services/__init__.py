"""
Services Package

Contains all business logic and service classes.
"""

from .catalog_service import PuzzleCatalog, load_catalog
from .date_service import DateResolver
from .game_service import GameService, get_game_service, initialize_game_service
from .player_service import PlayerService, get_player_service, initialize_player_service
from .session_store import SessionStore, PreviewDateStore, create_backend

__all__ = [
    'PuzzleCatalog', 'load_catalog',
    'DateResolver',
    'GameService', 'get_game_service', 'initialize_game_service',
    'PlayerService', 'get_player_service', 'initialize_player_service',
    'SessionStore', 'PreviewDateStore', 'create_backend'
]
