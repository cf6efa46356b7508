"""
Session Decorators

Contains decorators that resolve a game session for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import jsonify
from flask_socketio import emit


def require_session(f):
    """
    Decorator for HTTP endpoints that take a ``session_id`` URL parameter.

    Answers 500 when the game service is down and 404 for unknown sessions.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        session_id = kwargs.get('session_id')
        if not game_service.has_session(session_id):
            return jsonify({
                'success': False,
                'error': 'Session not found'
            }), 404

        return f(*args, **kwargs)

    return decorated_function


def websocket_session_required(f):
    """Decorator for WebSocket events whose payload names a session."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        data = args[0] if args and isinstance(args[0], dict) else {}
        session_id = data.get('session_id')
        if not session_id or not game_service.has_session(session_id):
            emit('error', {'error': 'Session not found'})
            return

        kwargs['session_id'] = session_id
        return f(*args, **kwargs)

    return decorated_function
