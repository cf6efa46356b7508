"""
Match Controller

Runs the rounds of a best-of-N match against the computer, keeps the
match and session tallies, and reports finished matches to the leaderboard.
"""

import random
from typing import Any, Callable, Dict, List, Optional

from ..config.game_settings import HISTORY_LIMIT, majority_threshold
from ..models.game import (
    Difficulty, LifetimeStats, MatchConfig, MatchPhase, MatchResult, MatchState,
    Move, RoundOutcome, RoundRecord, RoundResult, current_millis, resolve_round
)
from ..utils.game_logger import game_logger
from .leaderboard_store import LeaderboardStore
from .strategy import choose_computer_move

Strategy = Callable[[Difficulty, MatchState, random.Random], Move]

_MATCH_EVENTS = {
    MatchResult.PLAYER_WON: 'match_won',
    MatchResult.COMPUTER_WON: 'match_lost',
    MatchResult.DRAWN: 'match_drawn',
}


class MatchController:
    """
    State machine for one player's session.

    AWAITING_MOVE -> ROUND_RESOLVED -> AWAITING_MOVE, or MATCH_OVER when the
    round decided the match, after which a fresh match with the same
    configuration starts in AWAITING_MOVE.

    Every awaited round has a ``round_id``. Callers that may race with a
    round timeout pass the id they were answering; a move for a round that
    has already been resolved is ignored.
    """

    def __init__(self,
                 config: MatchConfig,
                 leaderboard: Optional[LeaderboardStore] = None,
                 strategy: Strategy = choose_computer_move,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], int]] = None,
                 session_id: Optional[str] = None):
        self.config = config
        self.session_id = session_id
        self.leaderboard = leaderboard
        self.strategy = strategy
        self.rng = rng or random.Random()
        self.clock = clock or current_millis

        self.state = MatchState()
        self.lifetime = LifetimeStats()
        self.history: List[RoundRecord] = []
        self.phase = MatchPhase.AWAITING_MOVE
        self.round_id = 1
        self.last_result: Optional[RoundResult] = None

    def play_round(self, player_move, round_id: Optional[int] = None) -> Optional[RoundResult]:
        """
        Resolves a round with the player's move.

        Args:
            player_move: Move or move name
            round_id: Round the move answers; None accepts the current round

        Returns:
            RoundResult, or None if the move is invalid or the round is no
            longer awaiting a move. Nothing is mutated in that case.
        """
        try:
            move = Move.parse(player_move)
        except ValueError:
            return None

        if not self._accepts(round_id):
            return None

        return self._resolve(move, count_move=True, timed_out=False)

    def timeout_round(self, round_id: Optional[int] = None) -> Optional[RoundResult]:
        """
        Resolves an unanswered round with a random player move.

        Whether that move feeds the frequency table used by HARD is decided
        by ``config.count_timeout_moves``.
        """
        if not self._accepts(round_id):
            return None

        move = self.rng.choice(tuple(Move))
        return self._resolve(move, count_move=self.config.count_timeout_moves, timed_out=True)

    def recent_history(self, k: int = HISTORY_LIMIT) -> List[RoundRecord]:
        """Chronological slice of the last min(k, HISTORY_LIMIT) rounds."""
        k = min(k, HISTORY_LIMIT)
        if k <= 0:
            return []
        return list(self.history[-k:])

    def is_awaiting_move(self) -> bool:
        return self.phase is MatchPhase.AWAITING_MOVE

    def snapshot(self) -> Dict[str, Any]:
        return {
            'config': self.config.to_dict(),
            'phase': self.phase.value,
            'round_id': self.round_id,
            'player_score': self.state.player_score,
            'computer_score': self.state.computer_score,
            'rounds_played': self.state.rounds_played,
            'lifetime': {
                'total_games': self.lifetime.total_games,
                'total_wins': self.lifetime.total_wins,
                'total_losses': self.lifetime.total_losses,
                'total_draws': self.lifetime.total_draws
            },
            'last_result': self.last_result.to_dict() if self.last_result else None
        }

    def _accepts(self, round_id: Optional[int]) -> bool:
        if self.phase is not MatchPhase.AWAITING_MOVE:
            return False
        return round_id is None or round_id == self.round_id

    def _resolve(self, player_move: Move, count_move: bool, timed_out: bool) -> RoundResult:
        state = self.state
        if count_move:
            state.move_frequency[player_move] += 1

        computer_move = self.strategy(self.config.difficulty, state, self.rng)
        outcome = resolve_round(player_move, computer_move)

        if outcome is RoundOutcome.WIN:
            state.player_score += 1
        elif outcome is RoundOutcome.LOSE:
            state.computer_score += 1

        self.history.append(RoundRecord(
            player_move=player_move,
            computer_move=computer_move,
            outcome=outcome,
            timestamp=self.clock(),
            timed_out=timed_out
        ))
        state.rounds_played += 1
        self.phase = MatchPhase.ROUND_RESOLVED

        round_number = state.rounds_played
        player_score = state.player_score
        computer_score = state.computer_score

        match_result = None
        if self._is_match_over():
            match_result = self._finish_match()

        result = RoundResult(
            round_number=round_number,
            player_move=player_move,
            computer_move=computer_move,
            outcome=outcome,
            player_score_after=player_score,
            computer_score_after=computer_score,
            match_over=match_result is not None,
            match_result=match_result,
            timed_out=timed_out
        )
        self.last_result = result
        self.round_id += 1
        self.phase = MatchPhase.AWAITING_MOVE
        return result

    def _is_match_over(self) -> bool:
        threshold = majority_threshold(self.config.rounds_target)
        state = self.state
        return (state.player_score > threshold
                or state.computer_score > threshold
                or state.rounds_played >= self.config.rounds_target)

    def _finish_match(self) -> MatchResult:
        self.phase = MatchPhase.MATCH_OVER
        state = self.state

        if state.player_score > state.computer_score:
            result = MatchResult.PLAYER_WON
        elif state.computer_score > state.player_score:
            result = MatchResult.COMPUTER_WON
        else:
            result = MatchResult.DRAWN

        self.lifetime.record(result)
        if self.leaderboard is not None:
            self.leaderboard.update(
                self.config.player_name,
                self.lifetime.total_games,
                self.lifetime.total_wins,
                self.lifetime.total_losses,
                self.lifetime.total_draws
            )

        game_logger.log_game_event(
            self.session_id, _MATCH_EVENTS[result], 'local',
            player=self.config.player_name,
            difficulty=self.config.difficulty.value,
            rounds_target=self.config.rounds_target,
            rounds_played=state.rounds_played,
            player_score=state.player_score,
            computer_score=state.computer_score
        )

        state.reset()
        self.history.clear()
        return result
