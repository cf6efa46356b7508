"""
Game Data Models

Contains all match-related data structures and enums, and the rule that
decides a single round.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..config.game_settings import normalize_player_name, normalize_rounds


def current_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class Move(Enum):
    """A player or computer move. Declaration order is the tie-break order."""
    ROCK = "ROCK"
    PAPER = "PAPER"
    SCISSORS = "SCISSORS"

    @classmethod
    def parse(cls, value) -> "Move":
        """
        Converts user input to a Move.

        Raises:
            ValueError: If the value does not name one of the three moves
        """
        if isinstance(value, Move):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid move: {value!r}")
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid move: {value!r}. Valid moves: {[m.value for m in cls]}")

    def beats(self, other: "Move") -> bool:
        return _BEATS[self] is other

    def counter(self) -> "Move":
        """The move that beats this one."""
        return _COUNTERS[self]


_BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.PAPER: Move.ROCK,
    Move.SCISSORS: Move.PAPER,
}

_COUNTERS = {loser: winner for winner, loser in _BEATS.items()}


class RoundOutcome(Enum):
    """Round outcome from the player's perspective."""
    WIN = "WIN"
    LOSE = "LOSE"
    DRAW = "DRAW"


class Difficulty(Enum):
    """Computer strategy tier."""
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @classmethod
    def parse(cls, value) -> "Difficulty":
        """Unrecognized values degrade to EASY rather than erroring."""
        if isinstance(value, Difficulty):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper(), cls.EASY)
        return cls.EASY


class MatchResult(Enum):
    """Final classification of a completed match."""
    PLAYER_WON = "PLAYER_WON"
    COMPUTER_WON = "COMPUTER_WON"
    DRAWN = "DRAWN"


class MatchPhase(Enum):
    """Match controller state machine."""
    AWAITING_MOVE = "AWAITING_MOVE"
    ROUND_RESOLVED = "ROUND_RESOLVED"
    MATCH_OVER = "MATCH_OVER"


def resolve_round(player_move: Move, computer_move: Move) -> RoundOutcome:
    """
    Decide a single round.

    Returns:
        WIN if the player's move beats the computer's,
        LOSE if it is beaten,
        DRAW if both moves are the same.
    """
    if player_move is computer_move:
        return RoundOutcome.DRAW
    if player_move.beats(computer_move):
        return RoundOutcome.WIN
    return RoundOutcome.LOSE


@dataclass(frozen=True)
class RoundRecord:
    """One resolved round of the current match."""
    player_move: Move
    computer_move: Move
    outcome: RoundOutcome
    timestamp: int = field(default_factory=current_millis)
    timed_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_move': self.player_move.value,
            'computer_move': self.computer_move.value,
            'outcome': self.outcome.value,
            'timestamp': self.timestamp,
            'timed_out': self.timed_out
        }

    def __str__(self) -> str:
        when = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(self.timestamp / 1000))
        suffix = " (Timeout)" if self.timed_out else ""
        return (f"[{when}] You: {self.player_move.value}{suffix}, "
                f"Computer: {self.computer_move.value}, Result: {self.outcome.value}")


@dataclass(frozen=True)
class MatchConfig:
    """Settings chosen at match start; kept for every match of a session."""
    rounds_target: int
    difficulty: Difficulty
    player_name: str
    count_timeout_moves: bool = False

    @classmethod
    def create(cls,
               player_name: Optional[str] = None,
               rounds_target=None,
               difficulty=None,
               count_timeout_moves: bool = False) -> "MatchConfig":
        """Validates and defaults raw input from a presentation layer."""
        return cls(
            rounds_target=normalize_rounds(rounds_target),
            difficulty=Difficulty.parse(difficulty),
            player_name=normalize_player_name(player_name),
            count_timeout_moves=bool(count_timeout_moves)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_name': self.player_name,
            'rounds_target': self.rounds_target,
            'difficulty': self.difficulty.value,
            'count_timeout_moves': self.count_timeout_moves
        }


def _empty_frequency() -> Dict[Move, int]:
    return {move: 0 for move in Move}


@dataclass
class MatchState:
    """Per-match counters, mutated once per round."""
    player_score: int = 0
    computer_score: int = 0
    rounds_played: int = 0
    previous_computer_move: Optional[Move] = None
    move_frequency: Dict[Move, int] = field(default_factory=_empty_frequency)

    def reset(self) -> None:
        self.player_score = 0
        self.computer_score = 0
        self.rounds_played = 0
        self.previous_computer_move = None
        self.move_frequency = _empty_frequency()


@dataclass
class LifetimeStats:
    """Session-wide match tallies. Never decremented."""
    total_games: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_draws: int = 0

    def record(self, result: MatchResult) -> None:
        self.total_games += 1
        if result is MatchResult.PLAYER_WON:
            self.total_wins += 1
        elif result is MatchResult.COMPUTER_WON:
            self.total_losses += 1
        else:
            self.total_draws += 1


@dataclass(frozen=True)
class RoundResult:
    """Payload handed back to the presentation layer after every round."""
    round_number: int
    player_move: Move
    computer_move: Move
    outcome: RoundOutcome
    player_score_after: int
    computer_score_after: int
    match_over: bool
    match_result: Optional[MatchResult] = None
    timed_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'round_number': self.round_number,
            'player_move': self.player_move.value,
            'computer_move': self.computer_move.value,
            'outcome': self.outcome.value,
            'player_score_after': self.player_score_after,
            'computer_score_after': self.computer_score_after,
            'match_over': self.match_over,
            'match_result': self.match_result.value if self.match_result else None,
            'timed_out': self.timed_out
        }
