"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    Move, RoundOutcome, Difficulty, MatchResult, MatchPhase, RoundRecord,
    MatchConfig, MatchState, LifetimeStats, RoundResult, resolve_round, current_millis
)
from .leaderboard import PlayerLeaderboardEntry

__all__ = [
    'Move', 'RoundOutcome', 'Difficulty', 'MatchResult', 'MatchPhase', 'RoundRecord',
    'MatchConfig', 'MatchState', 'LifetimeStats', 'RoundResult', 'resolve_round',
    'current_millis', 'PlayerLeaderboardEntry'
]
