"""
WebSocket Event Handlers

Handles WebSocket events so a client can play a session in real time and
receive rounds that were resolved by the round timeout.
"""

from flask_socketio import emit, join_room, leave_room
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_session_required
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_round_id


def session_room(session_id: str) -> str:
    return f"session_{session_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast_timeout_result(session_id, result):
        """Push a timer-resolved round to everyone watching the session."""
        game_service = get_game_service()
        socketio.emit('round_result', {
            'session_id': session_id,
            'result': result.to_dict(),
            'state': game_service.get_session_state(session_id) if game_service else None
        }, room=session_room(session_id))

    game_service = get_game_service()
    if game_service:
        game_service.on_timeout = broadcast_timeout_result

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('join_session')
    @websocket_session_required
    def handle_join_session(data, session_id=None):
        """Join a session room for real-time updates."""
        game_service = get_game_service()

        join_room(session_room(session_id))
        game_logger.logger.info(f"WebSocket: client joined session {session_id}")

        emit('session_state', {
            'success': True,
            'state': game_service.get_session_state(session_id)
        })

    @socketio.on('leave_session')
    @websocket_session_required
    def handle_leave_session(data, session_id=None):
        """Leave a session room."""
        leave_room(session_room(session_id))
        game_logger.logger.info(f"WebSocket: client left session {session_id}")

    @socketio.on('submit_move')
    @websocket_session_required
    def handle_submit_move(data, session_id=None):
        """Play a move and broadcast the round result to the session room."""
        try:
            game_service = get_game_service()
            move = data.get('move')

            is_valid, error = game_service.is_valid_move(session_id, move)
            if not is_valid:
                emit('error', {'error': error})
                return

            result = game_service.submit_player_move(session_id, move, parse_round_id(data.get('round_id')))
            if result is None:
                emit('error', {
                    'error': 'Round already resolved',
                    'state': game_service.get_session_state(session_id)
                })
                return

            emit('round_result', {
                'session_id': session_id,
                'result': result.to_dict(),
                'state': game_service.get_session_state(session_id)
            }, room=session_room(session_id))

        except Exception as e:
            game_logger.logger.error(f"WebSocket submit_move failed for session {session_id}: {e}")
            emit('error', {'error': str(e)})
