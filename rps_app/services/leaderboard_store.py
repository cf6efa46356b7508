"""
Leaderboard Store

Keeps the ranked list of player statistics and persists it to a flat,
human-readable file. The store is the only component that touches durable
storage; the storage backend itself is a small read/write interface so the
flat file can be replaced without touching the match engine.
"""

import os
import tempfile
import threading
from typing import Callable, Iterable, List, Optional

from ..config.game_settings import FIELD_DELIMITER, LEADERBOARD_CAPACITY, parse_decimal
from ..models.game import current_millis
from ..models.leaderboard import PlayerLeaderboardEntry
from ..utils.game_logger import game_logger

FIELD_COUNT = 6


def format_entry(entry: PlayerLeaderboardEntry) -> str:
    """Serializes an entry as name|totalGames|wins|losses|draws|timestampMillis."""
    return FIELD_DELIMITER.join([
        entry.name,
        str(entry.total_games),
        str(entry.wins),
        str(entry.losses),
        str(entry.draws),
        str(entry.last_updated)
    ])


def parse_entry(line: str) -> Optional[PlayerLeaderboardEntry]:
    """
    Parses one persisted line.

    Returns:
        The entry, or None when the line has too few fields, a non-integer
        or negative counter, or an empty name
    """
    parts = line.rstrip('\r\n').split(FIELD_DELIMITER)
    if len(parts) < FIELD_COUNT:
        return None

    name = parts[0]
    if not name.strip():
        return None

    try:
        total_games, wins, losses, draws, timestamp = (parse_decimal(p) for p in parts[1:FIELD_COUNT])
    except ValueError:
        return None

    if min(total_games, wins, losses, draws) < 0:
        return None

    return PlayerLeaderboardEntry(
        name=name,
        total_games=total_games,
        wins=wins,
        losses=losses,
        draws=draws,
        last_updated=timestamp
    )


def rank_entries(entries: Iterable[PlayerLeaderboardEntry]) -> List[PlayerLeaderboardEntry]:
    """Most wins first, then highest win rate. Equal keys keep their order."""
    return sorted(entries, key=lambda e: e.ranking_key())


class LeaderboardStorage:
    """Backend interface: read every persisted entry, or replace them all."""

    def read(self) -> List[PlayerLeaderboardEntry]:
        raise NotImplementedError

    def write(self, entries: List[PlayerLeaderboardEntry]) -> None:
        raise NotImplementedError


class FileLeaderboardStorage(LeaderboardStorage):
    """
    Plain text storage, one entry per line.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers never see a partially written leaderboard.
    """

    def __init__(self, path: str):
        self.path = path

    def read(self) -> List[PlayerLeaderboardEntry]:
        entries = []
        try:
            with open(self.path, 'rb') as f:
                for line_number, raw in enumerate(f, start=1):
                    if not raw.strip():
                        continue
                    try:
                        entry = parse_entry(raw.decode('utf-8'))
                    except UnicodeDecodeError:
                        entry = None
                    if entry is None:
                        game_logger.logger.warning(
                            f"Skipping malformed leaderboard line {line_number} in {self.path}"
                        )
                        continue
                    entries.append(entry)
        except FileNotFoundError:
            return []
        except OSError as e:
            game_logger.logger.warning(f"Could not read leaderboard {self.path}: {e}")
            return []
        return entries

    def write(self, entries: List[PlayerLeaderboardEntry]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix='.leaderboard-', suffix='.tmp', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                for entry in entries:
                    f.write(format_entry(entry) + '\n')
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class LeaderboardStore:
    """
    Ranked, capacity-bounded leaderboard.

    This class handles:
    - Loading persisted entries, skipping lines that do not parse
    - Find-or-add updates with re-ranking and truncation in a single pass
    - Full rewrites of the persisted file after every change
    """

    def __init__(self,
                 storage: LeaderboardStorage,
                 capacity: int = LEADERBOARD_CAPACITY,
                 clock: Optional[Callable[[], int]] = None):
        self.storage = storage
        self.capacity = capacity
        self.clock = clock or current_millis
        self._entries: List[PlayerLeaderboardEntry] = []
        self._lock = threading.RLock()

    def load(self) -> List[PlayerLeaderboardEntry]:
        """Replaces the in-memory board with the persisted one."""
        with self._lock:
            try:
                loaded = self.storage.read()
            except Exception as e:
                game_logger.logger.warning(f"Leaderboard load failed, starting empty: {e}")
                loaded = []
            self._entries = rank_entries(loaded)
            return list(self._entries)

    def save(self) -> bool:
        """
        Persists the current board.

        Returns:
            bool: True if written; failures are logged and the in-memory
            board stays authoritative
        """
        with self._lock:
            try:
                self.storage.write(list(self._entries))
                return True
            except Exception as e:
                game_logger.logger.error(f"Error saving leaderboard: {e}")
                return False

    def add(self, entry: PlayerLeaderboardEntry) -> None:
        """Appends a new entry, re-ranks, truncates and persists."""
        with self._lock:
            self._entries.append(entry)
            self._rank_and_truncate()
            self.save()

    def update(self, name: str, total_games: int, wins: int, losses: int, draws: int) -> PlayerLeaderboardEntry:
        """
        Overwrites the counters of an existing player or adds a new one.

        Find, mutate-or-append, rank, truncate and persist happen as one
        sequence under the store lock.

        Returns:
            The updated or newly created entry (it may since have been
            truncated off the board)
        """
        with self._lock:
            entry = self.find(name)
            if entry is not None:
                entry.total_games = total_games
                entry.wins = wins
                entry.losses = losses
                entry.draws = draws
                entry.last_updated = self.clock()
            else:
                entry = PlayerLeaderboardEntry(
                    name=name,
                    total_games=total_games,
                    wins=wins,
                    losses=losses,
                    draws=draws,
                    last_updated=self.clock()
                )
                self._entries.append(entry)

            self._rank_and_truncate()
            self.save()
            return entry

    def find(self, name: str) -> Optional[PlayerLeaderboardEntry]:
        """First entry whose name matches exactly."""
        with self._lock:
            for entry in self._entries:
                if entry.name == name:
                    return entry
            return None

    def top(self, n: int) -> List[PlayerLeaderboardEntry]:
        """First min(n, size) entries of the current ranking."""
        with self._lock:
            if n <= 0:
                return []
            return list(self._entries[:n])

    def entries(self) -> List[PlayerLeaderboardEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _rank_and_truncate(self) -> None:
        self._entries = rank_entries(self._entries)[:self.capacity]


def create_file_leaderboard_store(path: str, capacity: int = LEADERBOARD_CAPACITY) -> LeaderboardStore:
    """Builds a store over a flat file and loads it."""
    store = LeaderboardStore(FileLeaderboardStorage(path), capacity=capacity)
    store.load()
    return store
