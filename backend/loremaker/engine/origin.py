# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  起源分类器 - 基于文本正则将角色归入起源层级并给出倍率
  Origin Classifier - regex-based mapping of a character's free text to an
  origin tier with a score multiplier.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from loremaker.schemas.character import Character
from loremaker.schemas.duel import OriginProfile


@dataclass(frozen=True)
class OriginTier:
    """One row of the origin table. ``era_pattern`` is only consulted when set."""

    label: str
    multiplier: float
    pattern: Pattern[str]
    era_pattern: Optional[Pattern[str]] = None


# Evaluated top to bottom; first match wins.
ORIGIN_TIERS: Tuple[OriginTier, ...] = (
    OriginTier(
        label="Divine",
        multiplier=1.55,
        pattern=re.compile(r"god|deity|celestial|primordial"),
        era_pattern=re.compile(r"old gods|ancient"),
    ),
    OriginTier(label="Alien", multiplier=1.28, pattern=re.compile(r"alien|extraterrestrial|cosmic")),
    OriginTier(label="Mythic", multiplier=1.22, pattern=re.compile(r"demon|spirit|ethereal|angel|occult")),
    OriginTier(label="Enhanced", multiplier=1.14, pattern=re.compile(r"meta|mutant|enhanced|super")),
)

DEFAULT_ORIGIN = OriginProfile(label="Legend", multiplier=1.06)


def _text_buffer(character: Character) -> str:
    parts = [
        " ".join(character.tags),
        " ".join(character.alias),
        character.long_desc or "",
        character.short_desc or "",
    ]
    return " ".join(parts).lower()


def classify_origin(character: Character) -> OriginProfile:
    """
    将角色归入起源层级

    Classify a character into an origin tier.

    Tags, aliases and both descriptions are matched case-insensitively as one
    buffer. The era is matched separately and only by tiers that declare an
    era pattern (currently Divine).
    """
    buffer = _text_buffer(character)
    era = (character.era or "").lower()
    for tier in ORIGIN_TIERS:
        if tier.pattern.search(buffer):
            return OriginProfile(label=tier.label, multiplier=tier.multiplier)
        if tier.era_pattern is not None and tier.era_pattern.search(era):
            return OriginProfile(label=tier.label, multiplier=tier.multiplier)
    return DEFAULT_ORIGIN
