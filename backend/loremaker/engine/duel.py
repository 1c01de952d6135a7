# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  对决模拟器 - 三回合带运气扰动的伤害交换，返回胜负、血量日志与评分拆解
  Duel Simulator - three swings of luck-perturbed damage exchange; returns the
  winner, loser, per-swing health log and score breakdown.
"""

import random
from typing import List, Optional

from loremaker.engine.origin import classify_origin
from loremaker.engine.rng import resolve_rng
from loremaker.engine.scoring import score_character
from loremaker.schemas.character import Character
from loremaker.schemas.duel import BattleRound, DuelBreakdown, DuelLog, DuelResult
from loremaker.utils.logger import get_logger
from loremaker.utils.numbers import round_half_up

logger = get_logger(__name__)

SWINGS = 3
SHIELD_FRACTION = 0.35
DAMAGE_SCALE = 48
LUCK_SPAN = 0.18
STARTING_HEALTH = 100


def roll_luck(max_base: int, rng: random.Random) -> int:
    """Luck swing in ``[-LUCK_SPAN * max_base, +LUCK_SPAN * max_base]``."""
    span = max(0, max_base)
    return round_half_up((rng.random() * 2 - 1) * LUCK_SPAN * span)


def simulate_duel(
    c1: Optional[Character],
    c2: Optional[Character],
    rng: Optional[random.Random] = None,
) -> Optional[DuelResult]:
    """
    模拟两名角色的对决

    Simulate a duel between two characters.

    Each swing both fighters strike with ``score + luck`` against the other's
    shield (``score * SHIELD_FRACTION``); ``DAMAGE_SCALE`` damage is split in
    proportion to what got through. Health never goes up and never drops below
    zero. Ties on health go to the higher score, then to a coin flip.

    Returns None when a fighter is missing or both sides are the same character.
    """
    if c1 is None or c2 is None or c1.id == c2.id:
        logger.debug("Duel skipped: need two distinct fighters")
        return None

    rng = resolve_rng(rng)
    s1 = score_character(c1)
    s2 = score_character(c2)
    max_base = max(s1, s2, 1)
    shield1 = s1 * SHIELD_FRACTION
    shield2 = s2 * SHIELD_FRACTION

    h1 = h2 = STARTING_HEALTH
    logs: List[DuelLog] = []
    for swing in range(1, SWINGS + 1):
        luck1 = roll_luck(max_base, rng)
        luck2 = roll_luck(max_base, rng)
        offensive1 = s1 + luck1
        offensive2 = s2 + luck2
        delta1 = max(0.0, offensive1 - shield2)
        delta2 = max(0.0, offensive2 - shield1)
        combined = max(1.0, delta1 + delta2)
        dmg1 = round_half_up(delta1 / combined * DAMAGE_SCALE)
        dmg2 = round_half_up(delta2 / combined * DAMAGE_SCALE)
        h2 = max(0, h2 - dmg1)
        h1 = max(0, h1 - dmg2)
        logs.append(
            DuelLog(
                swing=swing,
                h1=h1,
                h2=h2,
                luck1=luck1,
                luck2=luck2,
                offensive1=offensive1,
                offensive2=offensive2,
                dmg1=dmg1,
                dmg2=dmg2,
            )
        )

    if h1 != h2:
        winner = c1 if h1 > h2 else c2
    elif s1 != s2:
        winner = c1 if s1 > s2 else c2
    else:
        winner = c1 if rng.random() > 0.5 else c2
    loser = c2 if winner is c1 else c1

    return DuelResult(
        winner=winner,
        loser=loser,
        h1=h1,
        h2=h2,
        logs=logs,
        breakdown=DuelBreakdown(
            s1=s1,
            s2=s2,
            origin1=classify_origin(c1),
            origin2=classify_origin(c2),
        ),
    )


def battle_timeline(result: DuelResult) -> List[BattleRound]:
    """Per-round view of a duel for fighter A (first) and fighter B (second)."""
    return [
        BattleRound(
            round=log.swing,
            strike_a=log.offensive1,
            strike_b=log.offensive2,
            luck_a=log.luck1,
            luck_b=log.luck2,
            damage_to_b=log.dmg1,
            damage_to_a=log.dmg2,
            health_a=log.h1,
            health_b=log.h2,
        )
        for log in result.logs
    ]
