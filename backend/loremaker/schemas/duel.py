"""
Duel data models.
"""

from typing import List

from pydantic import Field

from loremaker.schemas.character import Character, RecordModel
from loremaker.schemas.taxonomy import TaxonomyEntry


class OriginProfile(RecordModel):
    """Origin tier label and its score multiplier."""

    label: str
    multiplier: float


class DuelLog(RecordModel):
    """Health after one swing, plus the numbers that produced it."""

    swing: int
    h1: int
    h2: int
    luck1: int = 0
    luck2: int = 0
    offensive1: int = 0
    offensive2: int = 0
    dmg1: int = Field(default=0, description="Damage dealt to the second fighter")
    dmg2: int = Field(default=0, description="Damage dealt to the first fighter")


class DuelBreakdown(RecordModel):
    s1: int
    s2: int
    origin1: OriginProfile
    origin2: OriginProfile


class DuelResult(RecordModel):
    """Outcome of a three-swing character duel."""

    winner: Character
    loser: Character
    h1: int
    h2: int
    logs: List[DuelLog]
    breakdown: DuelBreakdown


class BattleRound(RecordModel):
    """Per-round view of a duel, keyed by fighter A/B."""

    round: int
    strike_a: int
    strike_b: int
    luck_a: int
    luck_b: int
    damage_to_b: int
    damage_to_a: int
    health_a: int
    health_b: int


class FactionDuelResult(RecordModel):
    """Outcome of a member-count weighted duel between two taxonomy entries."""

    winner: TaxonomyEntry
    loser: TaxonomyEntry
    narrative: str
    roll: float
    left_weight: int
    right_weight: int


class ChampionshipMatch(RecordModel):
    opponent: Character
    outcome: DuelResult


class ChampionshipResult(RecordModel):
    """A champion's run through a queue of opponents, stopping at the first loss."""

    champion: Character
    mode: str
    matches: List[ChampionshipMatch] = Field(default_factory=list)
    champion_wins: bool
    final_winner: Character
    final_loser: Character
