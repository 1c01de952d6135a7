"""
Faction Arena Resolver.

Duels two taxonomy entries as a coin flip weighted by member count.
"""

import random
from typing import Optional

from loremaker.engine.rng import resolve_rng
from loremaker.schemas.duel import FactionDuelResult
from loremaker.schemas.taxonomy import TaxonomyEntry

NARRATIVE_TEMPLATE = "{winner} orchestrate a decisive maneuver, outclassing {loser} on the LoreMaker stage."


def entry_weight(entry: TaxonomyEntry) -> int:
    return max(1, entry.member_count or 0)


def arena_narrative(winner: TaxonomyEntry, loser: TaxonomyEntry) -> str:
    return NARRATIVE_TEMPLATE.format(winner=winner.name, loser=loser.name)


def resolve_faction_duel(
    left: Optional[TaxonomyEntry],
    right: Optional[TaxonomyEntry],
    rng: Optional[random.Random] = None,
) -> Optional[FactionDuelResult]:
    """Weighted duel between two entries; None when either side is missing.

    ``roll`` is drawn from ``uniform(0, w_left + w_right)`` and the left entry
    wins when ``roll <= w_left``.
    """
    if left is None or right is None:
        return None
    left_weight = entry_weight(left)
    right_weight = entry_weight(right)
    roll = resolve_rng(rng).uniform(0, left_weight + right_weight)
    winner, loser = (left, right) if roll <= left_weight else (right, left)
    return FactionDuelResult(
        winner=winner,
        loser=loser,
        narrative=arena_narrative(winner, loser),
        roll=roll,
        left_weight=left_weight,
        right_weight=right_weight,
    )
