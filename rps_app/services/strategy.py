"""
Computer Strategy

Picks the computer's move for each difficulty tier. Each tier is a plain
function of the match state and a random source so it can be driven with
a seeded ``random.Random`` in tests.
"""

import random
from typing import Callable, Dict, Optional

from ..models.game import Difficulty, MatchState, Move

MOVES = tuple(Move)

_default_rng = random.Random()

StrategyFn = Callable[[MatchState, random.Random], Move]


def easy_move(state: MatchState, rng: random.Random) -> Move:
    """Uniformly random, no memory."""
    return rng.choice(MOVES)


def medium_move(state: MatchState, rng: random.Random) -> Move:
    """Uniformly random, but never the move played on the previous round."""
    choice = rng.choice(MOVES)
    while state.previous_computer_move is not None and choice is state.previous_computer_move:
        choice = rng.choice(MOVES)

    state.previous_computer_move = choice
    return choice


def predict_player_move(state: MatchState) -> Move:
    """
    Most frequently chosen player move so far.

    Only a strictly higher count replaces the current pick, so ties go to
    the earliest of Rock, Paper, Scissors.
    """
    predicted = MOVES[0]
    best = 0
    for move in MOVES:
        count = state.move_frequency.get(move, 0)
        if count > best:
            best = count
            predicted = move
    return predicted


def hard_move(state: MatchState, rng: random.Random) -> Move:
    """Counter the player's most frequent move."""
    choice = predict_player_move(state).counter()
    state.previous_computer_move = choice
    return choice


STRATEGIES: Dict[Difficulty, StrategyFn] = {
    Difficulty.EASY: easy_move,
    Difficulty.MEDIUM: medium_move,
    Difficulty.HARD: hard_move,
}


def choose_computer_move(difficulty, state: MatchState, rng: Optional[random.Random] = None) -> Move:
    """
    Returns the computer's move for the given difficulty tier.

    Args:
        difficulty: Difficulty value (or its name); unknown tiers play as EASY
        state: Current match state; MEDIUM and HARD record their choice in it
        rng: Random source, defaults to the module-level generator

    Returns:
        Move chosen by the computer
    """
    if rng is None:
        rng = _default_rng
    if not isinstance(difficulty, Difficulty):
        difficulty = Difficulty.parse(difficulty)
    return STRATEGIES.get(difficulty, easy_move)(state, rng)
