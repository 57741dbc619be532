"""
scenelens.utils - Shared utility functions.

Contains common functions used across multiple modules to avoid duplication.
"""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going toward positive infinity.

    Python's round() uses banker's rounding; scores here round 0.5 up so
    that e.g. -2.5 becomes -2 and 0.25 at one digit becomes 0.3.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        Rounded value as float
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def get_intensity_class(score: float) -> str:
    """Get display class for an intensity score.

    Args:
        score: Intensity (-10 to 10)

    Returns:
        Class name: "high", "medium", "low" or "calm"
    """
    if score >= 6:
        return "high"
    elif score >= 2:
        return "medium"
    elif score >= -2:
        return "low"
    return "calm"


def format_percent(ratio: float) -> str:
    """Format a 0-1 ratio as a whole percentage."""
    return f"{round_half_up(ratio * 100):.0f}%"
