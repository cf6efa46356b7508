"""Tests for input normalisation and configuration classes."""
import pytest

from rps_app.config import (
    DEFAULT_PLAYER_NAME, DEFAULT_ROUNDS, TestingConfig, config, majority_threshold,
    normalize_player_name, normalize_rounds
)
from rps_app.models import Difficulty, MatchConfig


@pytest.mark.parametrize('raw, expected', [
    (3, 3), (5, 5), (10, 10), ('5', 5), (' 10 ', 10),
    (5.0, 5), (10.0, 10), (5.5, DEFAULT_ROUNDS), ('1_0', DEFAULT_ROUNDS), ('+5', 5),
    (4, DEFAULT_ROUNDS), (0, DEFAULT_ROUNDS), ('ten', DEFAULT_ROUNDS), (None, DEFAULT_ROUNDS), (True, DEFAULT_ROUNDS),
])
def test_normalize_rounds(raw, expected):
    assert normalize_rounds(raw) == expected


@pytest.mark.parametrize('raw, expected', [
    ('Alice', 'Alice'),
    ('  Bob  ', 'Bob'),
    ('', DEFAULT_PLAYER_NAME),
    ('   ', DEFAULT_PLAYER_NAME),
    (None, DEFAULT_PLAYER_NAME),
    ('|||', DEFAULT_PLAYER_NAME),
    ('Ca|rol', 'Carol'),
])
def test_normalize_player_name(raw, expected):
    assert normalize_player_name(raw) == expected


def test_majority_threshold():
    assert [majority_threshold(n) for n in (3, 5, 10)] == [1, 2, 5]


def test_match_config_create():
    match_config = MatchConfig.create(None, None, None)
    assert match_config.player_name == 'Player'
    assert match_config.rounds_target == 3
    assert match_config.difficulty == Difficulty.EASY
    assert match_config.count_timeout_moves is False


def test_testing_config_disables_round_timeout():
    assert TestingConfig.TESTING is True
    assert TestingConfig.ROUND_TIMEOUT_SECONDS == 0
    assert config['testing'] is TestingConfig
