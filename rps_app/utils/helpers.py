"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional


def parse_limit(raw, default: int, maximum: Optional[int] = None) -> int:
    """
    Reads a ``limit`` query value.

    Missing or non-numeric values give ``default``; negative values give 0.
    """
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default

    value = max(value, 0)
    if maximum is not None:
        value = min(value, maximum)
    return value


def parse_round_id(raw) -> Optional[int]:
    """Optional round id from a request body; anything non-integer means "current round"."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def json_object(data) -> dict:
    """Request body as a dict; a missing body or a non-object JSON value gives {}."""
    return data if isinstance(data, dict) else {}
