"""
Player Token Decorators

Contains decorators for HTTP and WebSocket player identification.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit


def require_player(f):
    """
    Decorator to require a player token for puzzle endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.player_service import get_player_service

        player_service = get_player_service()
        if not player_service:
            return jsonify({
                'success': False,
                'error': 'Player service unavailable'
            }), 500

        # Get token from Authorization header
        auth_header = request.headers.get('Authorization')
        if not auth_header or not auth_header.startswith('Bearer '):
            return jsonify({
                'success': False,
                'error': 'Player token required'
            }), 401

        token = auth_header.split(' ', 1)[1]

        result = player_service.verify_token(token)
        if not result['success']:
            return jsonify({
                'success': False,
                'error': result['error']
            }), 401

        # Add player data to request context
        request.player = result['player']
        return f(*args, **kwargs)

    return decorated_function


def websocket_player_required(f):
    """Decorator for WebSocket player identification."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.player_service import get_player_service

        player_service = get_player_service()
        if not player_service or not args or not isinstance(args[0], dict) or 'token' not in args[0]:
            emit('error', {'error': 'Player token required'})
            return

        result = player_service.verify_token(args[0]['token'])
        if not result['success']:
            emit('error', {'error': result['error']})
            return

        kwargs['player'] = result['player']
        return f(*args, **kwargs)

    return decorated_function
