"""
Player Controller

Handles player token endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.player_service import get_player_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger

player_bp = Blueprint('player', __name__)


@player_bp.route('', methods=['POST'])
def create_player():
    """Issue a token for a new anonymous player."""
    try:
        player_service = get_player_service()
        if not player_service:
            return jsonify({
                'success': False,
                'error': 'Player service unavailable'
            }), 500

        game_logger.log_user_action(request, 'create_player')

        result = player_service.issue_token()

        game_logger.log_server_response(request, 'create_player', True, result)
        return jsonify(result), 201

    except Exception as e:
        game_logger.log_error(request, e, 'create_player')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'create_player', False, error_response)
        return jsonify(error_response), 500


@player_bp.route('/me', methods=['GET'])
@require_player
def current_player():
    """Return the player identified by the token."""
    response_data = {
        'success': True,
        'player': request.player
    }
    game_logger.log_server_response(request, 'current_player', True, response_data)
    return jsonify(response_data)
