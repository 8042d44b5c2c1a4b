"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Any, Dict, Tuple

from flask import jsonify

from ..models.errors import (
    GameError, InvalidIngredient, MalformedDate, PuzzleNotAvailable, SessionTerminal
)

# HTTP status for each recoverable game error
ERROR_STATUS = {
    InvalidIngredient: 400,
    MalformedDate: 400,
    PuzzleNotAvailable: 404,
    SessionTerminal: 409,
}


def error_status(error: GameError) -> int:
    """HTTP status code for a game error."""
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


def game_error_response(error: GameError) -> Tuple[Dict[str, Any], int]:
    """Error envelope and status code for a game error."""
    return {
        'success': False,
        'error': str(error),
        'error_type': type(error).__name__
    }, error_status(error)


def service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500
