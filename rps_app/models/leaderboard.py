"""
Leaderboard Data Models

Contains the per-player statistics row kept on the leaderboard.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .game import current_millis


@dataclass
class PlayerLeaderboardEntry:
    """Lifetime statistics for one named player."""
    name: str
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    last_updated: int = field(default_factory=current_millis)

    @property
    def win_rate(self) -> float:
        """Percentage of games won, 0 when no games have been played."""
        if self.total_games == 0:
            return 0.0
        return self.wins / self.total_games * 100

    def ranking_key(self) -> Tuple[int, float]:
        """Sort key: most wins first, then highest win rate."""
        return (-self.wins, -self.win_rate)

    def stats_tuple(self) -> Tuple[str, int, int, int, int]:
        return (self.name, self.total_games, self.wins, self.losses, self.draws)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'total_games': self.total_games,
            'wins': self.wins,
            'losses': self.losses,
            'draws': self.draws,
            'win_rate': round(self.win_rate, 2),
            'last_updated': self.last_updated
        }
