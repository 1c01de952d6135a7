# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  随机数源 - 可注入、可播种的伪随机数生成器（不用于任何安全用途）
  Random source - injectable, seedable PRNG. Never used for anything secret.
"""

import random
from datetime import date
from typing import Optional

from loremaker.config import settings

_default_rng = random.Random(settings.rng_seed)


def get_rng(seed: Optional[int] = None) -> random.Random:
    """
    获取随机数生成器

    Return a fresh generator seeded with ``seed``, or the process-wide default
    when no seed is given.
    """
    if seed is None:
        return _default_rng
    return random.Random(seed)


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else _default_rng


def seeded_random(seed: str) -> random.Random:
    """String-seeded generator; the same string always yields the same stream."""
    return random.Random(seed)


def today_key(today: Optional[date] = None) -> str:
    return (today or date.today()).isoformat()


def daily_rng(label: str, today: Optional[date] = None) -> random.Random:
    """Generator seeded with ``"{label}|{YYYY-MM-DD}"``; stable for one calendar day."""
    return seeded_random(f"{label}|{today_key(today)}")


def daily_int(label: str, low: int = 1, high: int = 10, today: Optional[date] = None) -> int:
    """Integer in ``[low, high]`` that is stable for ``label`` during one day."""
    return daily_rng(label, today).randint(low, high)
