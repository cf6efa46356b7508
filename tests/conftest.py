"""Shared fixtures for the game server tests."""
import os
import random
import tempfile

# Keep test logs out of the working tree; must happen before rps_app is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='rps-test-logs-'))

import pytest

from rps_app import create_app
from rps_app.config import TestingConfig
from rps_app.models import MatchConfig, Move
from rps_app.services.game_service import initialize_game_service
from rps_app.services.leaderboard_store import FileLeaderboardStorage, LeaderboardStore


def scripted_strategy(moves):
    """Computer strategy that plays the given moves in order."""
    remaining = iter([Move.parse(m) for m in moves])

    def strategy(difficulty, state, rng):
        return next(remaining)

    return strategy


class Clock:
    """Deterministic millisecond clock."""

    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def leaderboard_path(tmp_path):
    return str(tmp_path / 'leaderboard.txt')


@pytest.fixture
def store(leaderboard_path, clock):
    store = LeaderboardStore(FileLeaderboardStorage(leaderboard_path), clock=clock)
    store.load()
    return store


@pytest.fixture
def make_config():
    def factory(rounds=3, difficulty='easy', name='Alice', count_timeout_moves=False):
        return MatchConfig.create(name, rounds, difficulty, count_timeout_moves)
    return factory


@pytest.fixture
def game_service(store):
    service = initialize_game_service(TestingConfig, leaderboard=store)
    yield service
    service.shutdown()


@pytest.fixture
def app(game_service):
    app, socketio = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
