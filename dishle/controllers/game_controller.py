"""
Game Controller

Handles all puzzle-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..models.errors import GameError
from ..models.puzzle import Direction
from ..services.game_service import get_game_service
from ..services.matching_engine import is_valid_ingredient
from ..services.player_service import get_player_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger
from ..utils.helpers import game_error_response, service_unavailable

game_bp = Blueprint('game', __name__)


def _state_response(action: str, operation, **log_details):
    """
    Runs a game service operation and wraps the resulting state.

    Game errors become their mapped 4xx responses; anything else is a 500.
    """
    try:
        state = operation()
        response_data = {
            'success': True,
            'state': state
        }
        game_logger.log_server_response(
            request, action, True, response_data, state.get('date'), **log_details
        )
        return jsonify(response_data)

    except GameError as e:
        error_response, status = game_error_response(e)
        game_logger.log_server_response(request, action, False, error_response, **log_details)
        return jsonify(error_response), status

    except Exception as e:
        game_logger.log_error(request, e, action)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/puzzle/state', methods=['GET'])
@require_player
def get_state():
    """Get the current puzzle state."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    player_id = request.player['id']
    game_logger.log_user_action(request, 'get_state')
    return _state_response('get_state', lambda: game_service.get_state(player_id))


@game_bp.route('/puzzle/guess', methods=['POST'])
@require_player
def submit_ingredient():
    """Submit an ingredient for evaluation."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    data = request.get_json(silent=True)
    if not data or 'ingredient' not in data:
        error_response = {
            'success': False,
            'error': 'Ingredient is required'
        }
        game_logger.log_server_response(request, 'submit_ingredient', False, error_response)
        return jsonify(error_response), 400

    ingredient = data['ingredient']
    player_id = request.player['id']

    game_logger.log_user_action(
        request, 'submit_ingredient',
        ingredient=ingredient, ingredient_length=len(ingredient) if isinstance(ingredient, str) else None
    )

    # Validate ingredient first
    is_valid, error = is_valid_ingredient(ingredient)
    if not is_valid:
        error_response = {
            'success': False,
            'error': error,
            'error_type': 'InvalidIngredient'
        }
        game_logger.log_server_response(
            request, 'submit_ingredient', False, error_response,
            validation_error=error, attempted_ingredient=ingredient
        )
        return jsonify(error_response), 400

    return _state_response(
        'submit_ingredient',
        lambda: game_service.submit_ingredient(player_id, ingredient),
        ingredient=ingredient
    )


@game_bp.route('/puzzle/retry', methods=['POST'])
@require_player
def retry():
    """Clear progress on the current puzzle and start over."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    player_id = request.player['id']
    game_logger.log_user_action(request, 'retry')
    return _state_response('retry', lambda: game_service.retry(player_id))


@game_bp.route('/puzzle/previous', methods=['POST'])
@require_player
def previous_puzzle():
    """Move the preview date back one day."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    player_id = request.player['id']
    game_logger.log_user_action(request, 'navigate', direction=Direction.PREVIOUS.value)
    return _state_response('navigate', lambda: game_service.navigate(player_id, Direction.PREVIOUS))


@game_bp.route('/puzzle/next', methods=['POST'])
@require_player
def next_puzzle():
    """Move the preview date forward one day."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    player_id = request.player['id']
    game_logger.log_user_action(request, 'navigate', direction=Direction.NEXT.value)
    return _state_response('navigate', lambda: game_service.navigate(player_id, Direction.NEXT))


@game_bp.route('/puzzle/today', methods=['POST'])
@require_player
def reset_to_today():
    """Drop the preview date and return to today's puzzle."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    player_id = request.player['id']
    game_logger.log_user_action(request, 'reset_to_today')
    return _state_response('reset_to_today', lambda: game_service.reset_to_today(player_id))


@game_bp.route('/puzzle/preview', methods=['PUT'])
@require_player
def set_preview_date():
    """Jump to a specific puzzle date."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    data = request.get_json(silent=True) or {}
    preview_date = data.get('date')
    player_id = request.player['id']

    game_logger.log_user_action(request, 'set_preview_date', preview_date=preview_date)
    return _state_response(
        'set_preview_date', lambda: game_service.set_preview_date(player_id, preview_date)
    )


@game_bp.route('/puzzle/share', methods=['GET'])
@require_player
def share():
    """Get the share text for the current puzzle."""
    game_service = get_game_service()
    if not game_service:
        return service_unavailable()

    player_id = request.player['id']
    game_logger.log_user_action(request, 'share')

    try:
        response_data = {
            'success': True,
            'share_text': game_service.share_text(player_id)
        }
        game_logger.log_server_response(request, 'share', True, response_data)
        return jsonify(response_data)

    except GameError as e:
        error_response, status = game_error_response(e)
        game_logger.log_server_response(request, 'share', False, error_response)
        return jsonify(error_response), status


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        player_service = get_player_service()

        game_logger.log_user_action(request, 'health_check')

        log_stats = game_logger.get_log_stats()

        response_data = {
            'status': 'healthy',
            'puzzles_loaded': len(game_service.catalog) if game_service else 0,
            'active_players': len(game_service.contexts) if game_service else 0,
            'real_today': game_service.date_resolver.current_real_date() if game_service else None,
            'player_tokens_available': player_service is not None,
            'log_stats': log_stats
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
