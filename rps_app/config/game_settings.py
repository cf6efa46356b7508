"""
Game Configuration Constants Module

This module defines the rules of a Rock-Paper-Scissors match and the legal
values a player may choose when configuring one. All game parameters are
centralized here so the engine, the HTTP layer and the terminal client
accept and default input identically.
"""

from typing import Final, Optional, Tuple

# Legal match lengths offered to the player
ROUND_OPTIONS: Final[Tuple[int, ...]] = (3, 5, 10)
"""
Number of rounds a match may be configured for.
A match ends early once one side holds a strict majority of this target.
"""

DEFAULT_ROUNDS: Final[int] = 3

DEFAULT_PLAYER_NAME: Final[str] = "Player"

# Leaderboard rules
LEADERBOARD_CAPACITY: Final[int] = 10
LEADERBOARD_DISPLAY_SIZE: Final[int] = 5
FIELD_DELIMITER: Final[str] = "|"

# Only the most recent rounds of a match are shown to the player
HISTORY_LIMIT: Final[int] = 10

# Seconds a player has to answer before the round is auto-resolved
DEFAULT_ROUND_TIMEOUT_SECONDS: Final[float] = 5.0


def normalize_player_name(name: Optional[str]) -> str:
    """
    Cleans a player name for use as a leaderboard key.

    The field delimiter and line breaks are removed because the leaderboard
    file performs no escaping. A blank result falls back to the default name.
    """
    if not name or not isinstance(name, str):
        return DEFAULT_PLAYER_NAME

    cleaned = name.replace(FIELD_DELIMITER, "").replace("\r", " ").replace("\n", " ").strip()
    return cleaned or DEFAULT_PLAYER_NAME


def parse_decimal(text: str) -> int:
    """
    Parses a plain base-10 integer with an optional sign.

    Stricter than ``int()``: underscores, non-ASCII digits and embedded
    whitespace are rejected with ValueError.
    """
    text = text.strip()
    digits = text[1:] if text[:1] in ('+', '-') else text
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"not a decimal integer: {text!r}")
    return int(text)


def normalize_rounds(rounds) -> int:
    """
    Coerces a requested round count to one of ROUND_OPTIONS.

    Integral floats such as 5.0 are accepted. Anything that is not a legal
    option (including non-numeric input) falls back to DEFAULT_ROUNDS.
    """
    if isinstance(rounds, bool):
        return DEFAULT_ROUNDS

    if isinstance(rounds, int):
        value = rounds
    elif isinstance(rounds, float):
        if not rounds.is_integer():
            return DEFAULT_ROUNDS
        value = int(rounds)
    elif isinstance(rounds, str):
        try:
            value = parse_decimal(rounds)
        except ValueError:
            return DEFAULT_ROUNDS
    else:
        return DEFAULT_ROUNDS

    return value if value in ROUND_OPTIONS else DEFAULT_ROUNDS


def majority_threshold(rounds_target: int) -> int:
    """Score a side must exceed to have secured the match."""
    return rounds_target // 2


if __name__ == "__main__":
    print(f"Round options: {ROUND_OPTIONS} (default {DEFAULT_ROUNDS})")
    for option in ROUND_OPTIONS:
        print(f"  best of {option}: a side wins early above {majority_threshold(option)} points")
