"""
Leaderboard Controller

Handles the leaderboard HTTP endpoint.
"""

from flask import Blueprint, request, jsonify
from ..config.game_settings import LEADERBOARD_DISPLAY_SIZE
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_limit

leaderboard_bp = Blueprint('leaderboard', __name__)


@leaderboard_bp.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    """Top players, most wins first."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        limit = parse_limit(request.args.get('limit'), LEADERBOARD_DISPLAY_SIZE)

        game_logger.log_user_action(request, 'get_leaderboard', limit=limit)

        entries = game_service.get_top_players(limit)
        response_data = {
            'success': True,
            'leaderboard': [
                {'rank': rank, **entry.to_dict()}
                for rank, entry in enumerate(entries, start=1)
            ]
        }

        game_logger.log_server_response(request, 'get_leaderboard', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_leaderboard')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_leaderboard', False, error_response)
        return jsonify(error_response), 500
