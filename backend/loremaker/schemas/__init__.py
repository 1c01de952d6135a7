"""
Pydantic Data Models / Pydantic 数据模型
Define data structures for API and internal use / 定义 API 和内部使用的数据结构
"""

from .character import Character, CharacterMetrics, Power
from .taxonomy import PowerMetrics, Taxonomies, TaxonomyEntry, TaxonomyType
from .duel import (
    BattleRound,
    ChampionshipMatch,
    ChampionshipResult,
    DuelBreakdown,
    DuelLog,
    DuelResult,
    FactionDuelResult,
    OriginProfile,
)

__all__ = [
    "Character",
    "CharacterMetrics",
    "Power",
    "PowerMetrics",
    "Taxonomies",
    "TaxonomyEntry",
    "TaxonomyType",
    "BattleRound",
    "ChampionshipMatch",
    "ChampionshipResult",
    "DuelBreakdown",
    "DuelLog",
    "DuelResult",
    "FactionDuelResult",
    "OriginProfile",
]
