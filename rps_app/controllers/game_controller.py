"""
Game Controller

Handles all session and round related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..config.game_settings import HISTORY_LIMIT
from ..services.game_service import get_game_service
from ..utils.decorators import require_session
from ..utils.game_logger import game_logger
from ..utils.helpers import json_object, parse_limit, parse_round_id

game_bp = Blueprint('game', __name__)


@game_bp.route('/session', methods=['POST'])
def new_session():
    """Configure a match and open a session for it."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = json_object(request.get_json(silent=True))

        # Log user action
        game_logger.log_user_action(
            request, 'new_session',
            player_name=data.get('player_name'), rounds=data.get('rounds'),
            difficulty=data.get('difficulty')
        )

        session_id = game_service.configure_match(
            player_name=data.get('player_name'),
            rounds_target=data.get('rounds'),
            difficulty=data.get('difficulty')
        )
        state = game_service.get_session_state(session_id)

        response_data = {
            'success': True,
            'session_id': session_id,
            'state': state
        }

        game_logger.log_server_response(
            request, 'new_session', True, response_data, session_id,
            rounds_target=state['config']['rounds_target'],
            difficulty=state['config']['difficulty']
        )

        return jsonify(response_data), 201

    except Exception as e:
        game_logger.log_error(request, e, 'new_session')

        error_response = {
            'success': False,
            'error': str(e)
        }

        game_logger.log_server_response(request, 'new_session', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/session/<session_id>/state', methods=['GET'])
@require_session
def get_state(session_id):
    """Get current match state."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'get_state', session_id)

        response_data = {
            'success': True,
            'state': game_service.get_session_state(session_id)
        }

        game_logger.log_server_response(request, 'get_state', True, response_data, session_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/session/<session_id>/move', methods=['POST'])
@require_session
def submit_move(session_id):
    """Submit the player's move for the current round."""
    try:
        game_service = get_game_service()

        data = json_object(request.get_json(silent=True))
        if 'move' not in data:
            error_response = {
                'success': False,
                'error': 'Move is required'
            }
            game_logger.log_server_response(request, 'submit_move', False, error_response, session_id)
            return jsonify(error_response), 400

        move = data['move']
        round_id = parse_round_id(data.get('round_id'))

        game_logger.log_user_action(request, 'submit_move', session_id, move=move, round_id=round_id)

        # Validate move first
        is_valid, error = game_service.is_valid_move(session_id, move)
        if not is_valid:
            error_response = {
                'success': False,
                'error': error
            }
            game_logger.log_server_response(
                request, 'submit_move', False, error_response, session_id,
                validation_error=error, attempted_move=move
            )
            return jsonify(error_response), 400

        result = game_service.submit_player_move(session_id, move, round_id)
        if result is None:
            # The round was already resolved, most likely by its timeout
            error_response = {
                'success': False,
                'error': 'Round already resolved',
                'state': game_service.get_session_state(session_id)
            }
            game_logger.log_server_response(request, 'submit_move', False, error_response, session_id)
            return jsonify(error_response), 409

        response_data = {
            'success': True,
            'result': result.to_dict(),
            'state': game_service.get_session_state(session_id)
        }

        game_logger.log_server_response(
            request, 'submit_move', True, response_data, session_id,
            outcome=result.outcome.value, match_over=result.match_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_move', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_move', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/session/<session_id>/timeout', methods=['POST'])
@require_session
def submit_timeout(session_id):
    """Resolve the current round as unanswered."""
    try:
        game_service = get_game_service()

        data = json_object(request.get_json(silent=True))
        round_id = parse_round_id(data.get('round_id'))

        game_logger.log_user_action(request, 'submit_timeout', session_id, round_id=round_id)

        result = game_service.submit_timeout(session_id, round_id)
        if result is None:
            error_response = {
                'success': False,
                'error': 'Round already resolved',
                'state': game_service.get_session_state(session_id)
            }
            game_logger.log_server_response(request, 'submit_timeout', False, error_response, session_id)
            return jsonify(error_response), 409

        response_data = {
            'success': True,
            'result': result.to_dict(),
            'state': game_service.get_session_state(session_id)
        }

        game_logger.log_server_response(
            request, 'submit_timeout', True, response_data, session_id,
            outcome=result.outcome.value, match_over=result.match_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_timeout', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_timeout', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/session/<session_id>/history', methods=['GET'])
@require_session
def get_history(session_id):
    """Most recent rounds of the current match, oldest first."""
    try:
        game_service = get_game_service()
        limit = parse_limit(request.args.get('limit'), HISTORY_LIMIT, HISTORY_LIMIT)

        game_logger.log_user_action(request, 'get_history', session_id, limit=limit)

        history = game_service.get_recent_history(session_id, limit)
        response_data = {
            'success': True,
            'history': [record.to_dict() for record in history]
        }

        game_logger.log_server_response(request, 'get_history', True, response_data, session_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_history', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_history', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/session/<session_id>', methods=['DELETE'])
def delete_session(session_id):
    """End a session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_session', session_id)

        success = game_service.end_session(session_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_session', success, response_data, session_id)

        if success:
            game_logger.log_game_event(session_id, 'session_ended', request.remote_addr)

        return jsonify(response_data), (200 if success else 404)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_session', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_session', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_sessions': len(game_service.sessions) if game_service else 0,
            'leaderboard_entries': len(game_service.leaderboard) if game_service else 0,
            'log_stats': game_logger.get_log_stats()
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
