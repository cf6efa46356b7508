"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ROUND_OPTIONS, DEFAULT_ROUNDS, DEFAULT_PLAYER_NAME, LEADERBOARD_CAPACITY,
    LEADERBOARD_DISPLAY_SIZE, HISTORY_LIMIT, FIELD_DELIMITER,
    normalize_player_name, normalize_rounds, majority_threshold, parse_decimal
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ROUND_OPTIONS', 'DEFAULT_ROUNDS', 'DEFAULT_PLAYER_NAME', 'LEADERBOARD_CAPACITY',
    'LEADERBOARD_DISPLAY_SIZE', 'HISTORY_LIMIT', 'FIELD_DELIMITER',
    'normalize_player_name', 'normalize_rounds', 'majority_threshold', 'parse_decimal'
]
