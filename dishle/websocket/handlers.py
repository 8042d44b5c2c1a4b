"""
WebSocket Event Handlers

Real-time counterpart of the puzzle HTTP endpoints. Every handler answers
with a 'session_state' event carrying the display state, or an 'error' event.
"""

from flask_socketio import emit
from ..models.errors import GameError
from ..models.puzzle import Direction
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_player_required
from ..utils.game_logger import game_logger


def _emit_state(action: str, player_id: str, operation):
    game_service = get_game_service()
    if not game_service:
        emit('error', {'error': 'Game service unavailable'})
        return

    try:
        state = operation(game_service)
    except GameError as e:
        emit('error', {'error': str(e), 'error_type': type(e).__name__})
        return

    game_logger.log_game_event(state.get('date'), f'ws_{action}', player_id)
    emit('session_state', {'success': True, 'state': state})


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('get_state')
    @websocket_player_required
    def handle_get_state(data, player=None):
        """Send the current puzzle state."""
        _emit_state('get_state', player['id'], lambda service: service.get_state(player['id']))

    @socketio.on('submit_ingredient')
    @websocket_player_required
    def handle_submit_ingredient(data, player=None):
        """Apply an ingredient and send the new state."""
        ingredient = data.get('ingredient')
        if not ingredient:
            emit('error', {'error': 'Ingredient is required'})
            return

        _emit_state(
            'submit_ingredient', player['id'],
            lambda service: service.submit_ingredient(player['id'], ingredient)
        )

    @socketio.on('retry')
    @websocket_player_required
    def handle_retry(data, player=None):
        """Restart the current puzzle."""
        _emit_state('retry', player['id'], lambda service: service.retry(player['id']))

    @socketio.on('navigate')
    @websocket_player_required
    def handle_navigate(data, player=None):
        """Move one day back or forward, or return to today."""
        target = data.get('direction')

        if target == 'today':
            _emit_state('navigate', player['id'], lambda service: service.reset_to_today(player['id']))
            return

        try:
            direction = Direction(target)
        except ValueError:
            emit('error', {'error': "Direction must be 'previous', 'next' or 'today'"})
            return

        _emit_state('navigate', player['id'], lambda service: service.navigate(player['id'], direction))
