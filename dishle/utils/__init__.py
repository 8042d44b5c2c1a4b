"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_player, websocket_player_required
from .helpers import error_status, game_error_response
from .game_logger import game_logger

__all__ = ['require_player', 'websocket_player_required', 'error_status', 'game_error_response', 'game_logger']
