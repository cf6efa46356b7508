"""
Game Service

Manages player sessions against the computer. Each session owns a match
controller; the service serializes access to it, runs the round timeout
timers, and shares one leaderboard store between all sessions.
"""

import random
import threading
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from ..config.app_config import Config
from ..config.game_settings import HISTORY_LIMIT
from ..models.game import MatchConfig, Move, RoundRecord, RoundResult
from ..models.leaderboard import PlayerLeaderboardEntry
from ..utils.game_logger import game_logger
from .leaderboard_store import LeaderboardStore, create_file_leaderboard_store
from .match_controller import MatchController

TimeoutListener = Callable[[str, RoundResult], None]


class GameSession:
    """A match controller plus the lock and timer guarding it."""

    def __init__(self, session_id: str, controller: MatchController):
        self.session_id = session_id
        self.controller = controller
        self.lock = threading.RLock()
        self.timer: Optional[threading.Timer] = None

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


class GameService:
    """
    Core game service managing multiple player sessions.

    This class handles:
    - Session creation with validated, defaulted match configuration
    - Move validation before anything is mutated
    - Round timeouts: after each answered round a timer is armed; if it
      fires before the next move, the round is resolved with a random move
      and any late move for that round is ignored
    - Leaderboard queries
    """

    def __init__(self,
                 leaderboard: LeaderboardStore,
                 round_timeout_seconds: float = 0,
                 count_timeout_moves: bool = False,
                 rng: Optional[random.Random] = None,
                 on_timeout: Optional[TimeoutListener] = None):
        self.leaderboard = leaderboard
        self.round_timeout_seconds = round_timeout_seconds
        self.count_timeout_moves = count_timeout_moves
        self.rng = rng or random.Random()
        self.on_timeout = on_timeout
        self.sessions: Dict[str, GameSession] = {}
        self._sessions_lock = threading.Lock()

    def configure_match(self,
                        player_name: Optional[str] = None,
                        rounds_target=None,
                        difficulty=None,
                        count_timeout_moves: Optional[bool] = None,
                        strategy=None) -> str:
        """
        Creates a new session with its own match controller.

        Args:
            player_name: Leaderboard name; blank defaults to "Player"
            rounds_target: 3, 5 or 10; anything else defaults to 3
            difficulty: Easy, Medium or Hard; anything else plays as Easy
            count_timeout_moves: Override of the service-wide setting
            strategy: Optional replacement for the computer strategy

        Returns:
            str: Unique session ID
        """
        if count_timeout_moves is None:
            count_timeout_moves = self.count_timeout_moves

        config = MatchConfig.create(player_name, rounds_target, difficulty, count_timeout_moves)
        session_id = str(uuid.uuid4())

        controller_kwargs = {
            'leaderboard': self.leaderboard,
            'rng': random.Random(self.rng.random()),
            'session_id': session_id
        }
        if strategy is not None:
            controller_kwargs['strategy'] = strategy

        controller = MatchController(config, **controller_kwargs)

        with self._sessions_lock:
            self.sessions[session_id] = GameSession(session_id, controller)
        return session_id

    def has_session(self, session_id: Optional[str]) -> bool:
        return session_id is not None and session_id in self.sessions

    def is_valid_move(self, session_id: str, move) -> Tuple[bool, str]:
        """
        Validates a move for a specific session.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not self.has_session(session_id):
            return False, "Session not found"

        try:
            Move.parse(move)
        except ValueError:
            return False, "Move must be one of ROCK, PAPER or SCISSORS"

        return True, ""

    def submit_player_move(self, session_id: str, move, round_id: Optional[int] = None) -> Optional[RoundResult]:
        """
        Plays the player's move in the session's current round.

        Returns:
            RoundResult, or None for unknown sessions, invalid moves and
            moves that answer a round already resolved
        """
        session = self.sessions.get(session_id)
        if session is None:
            return None

        with session.lock:
            result = session.controller.play_round(move, round_id)
            if result is None:
                return None
            session.cancel_timer()
            self._arm_timer(session)
            return result

    def submit_timeout(self, session_id: str, round_id: Optional[int] = None) -> Optional[RoundResult]:
        """Resolves the session's current round as unanswered."""
        session = self.sessions.get(session_id)
        if session is None:
            return None

        with session.lock:
            result = session.controller.timeout_round(round_id)
            if result is None:
                return None
            session.cancel_timer()

        game_logger.log_game_event(
            session_id, 'round_timeout', 'system',
            player=session.controller.config.player_name,
            round_number=result.round_number,
            player_move=result.player_move.value,
            computer_move=result.computer_move.value,
            outcome=result.outcome.value
        )
        return result

    def get_session_state(self, session_id: str) -> Optional[Dict]:
        session = self.sessions.get(session_id)
        if session is None:
            return None

        with session.lock:
            state = session.controller.snapshot()
        state['session_id'] = session_id
        return state

    def get_recent_history(self, session_id: str, k: int = HISTORY_LIMIT) -> List[RoundRecord]:
        session = self.sessions.get(session_id)
        if session is None:
            return []

        with session.lock:
            return session.controller.recent_history(k)

    def get_top_players(self, n: int) -> List[PlayerLeaderboardEntry]:
        return self.leaderboard.top(n)

    def end_session(self, session_id: str) -> bool:
        """
        Removes a session and stops its timer.

        Returns:
            bool: True if the session existed
        """
        with self._sessions_lock:
            session = self.sessions.pop(session_id, None)
        if session is None:
            return False

        with session.lock:
            session.cancel_timer()
        return True

    def shutdown(self) -> None:
        """Stops every pending round timer."""
        with self._sessions_lock:
            sessions = list(self.sessions.values())
        for session in sessions:
            with session.lock:
                session.cancel_timer()

    def _arm_timer(self, session: GameSession) -> None:
        if self.round_timeout_seconds <= 0:
            return

        round_id = session.controller.round_id
        timer = threading.Timer(
            self.round_timeout_seconds,
            self._handle_timer,
            args=(session.session_id, round_id)
        )
        timer.daemon = True
        session.timer = timer
        timer.start()

    def _handle_timer(self, session_id: str, round_id: int) -> None:
        try:
            result = self.submit_timeout(session_id, round_id)
            if result is not None and self.on_timeout is not None:
                self.on_timeout(session_id, result)
        except Exception as e:
            game_logger.logger.error(f"Round timeout failed for session {session_id}: {e}")


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(config_class=Config, leaderboard: Optional[LeaderboardStore] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    if _game_service is not None:
        _game_service.shutdown()

    if leaderboard is None:
        leaderboard = create_file_leaderboard_store(config_class.LEADERBOARD_FILE)

    _game_service = GameService(
        leaderboard,
        round_timeout_seconds=config_class.ROUND_TIMEOUT_SECONDS,
        count_timeout_moves=config_class.COUNT_TIMEOUT_MOVES
    )
    return _game_service
