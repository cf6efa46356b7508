"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_session, websocket_session_required
from .helpers import json_object, parse_limit, parse_round_id
from .game_logger import game_logger

__all__ = ['require_session', 'websocket_session_required', 'json_object', 'parse_limit', 'parse_round_id', 'game_logger']
