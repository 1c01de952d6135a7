"""
Numeric helpers shared by the scorer and the duel simulator.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    Python's ``round`` uses banker's rounding; scores and damage must round
    ``x.5`` upwards consistently for both fighters.

    Example:
        >>> round_half_up(2.5), round_half_up(-2.5)
        (3, -2)
    """
    return int(math.floor(value + 0.5))


def is_falsy_number(value: float) -> bool:
    """True for ``0`` and ``NaN``."""
    return value == 0 or math.isnan(value)
