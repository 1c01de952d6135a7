"""
Character scorer: power levels, elite tags and metrics, scaled by origin.
"""

import math
import re

from loremaker.engine.origin import classify_origin
from loremaker.schemas.character import Character
from loremaker.utils.numbers import is_falsy_number, round_half_up

ELITE_TAG_RE = re.compile(r"legend|mythic|prime|leader", re.IGNORECASE)
ELITE_BONUS = 3


def power_total(character: Character) -> int:
    return sum(power.level for power in character.powers)


def elite_bonus(character: Character) -> int:
    return ELITE_BONUS if any(ELITE_TAG_RE.search(tag) for tag in character.tags) else 0


def score_character(character: Character) -> int:
    """Integer rank of a character; always at least 1.

    ``(power total + elite bonus + average level) * origin multiplier``,
    rounded half up. Characters with no usable (or non-finite) data floor at 1.
    """
    average = character.metrics.average_level if character.metrics else 0.0
    origin = classify_origin(character)
    raw = (power_total(character) + elite_bonus(character) + average) * origin.multiplier
    if is_falsy_number(raw) or not math.isfinite(raw):
        return 1
    return max(1, round_half_up(raw))
