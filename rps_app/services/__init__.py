"""
Services Package

Contains all business logic and service classes.
"""

from .strategy import choose_computer_move
from .leaderboard_store import (
    LeaderboardStore, LeaderboardStorage, FileLeaderboardStorage, create_file_leaderboard_store
)
from .match_controller import MatchController
from .game_service import GameService, get_game_service, initialize_game_service

__all__ = [
    'choose_computer_move',
    'LeaderboardStore', 'LeaderboardStorage', 'FileLeaderboardStorage', 'create_file_leaderboard_store',
    'MatchController',
    'GameService', 'get_game_service', 'initialize_game_service'
]
