"""
Taxonomy data models.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field, model_validator

from loremaker.exceptions import InvariantViolation
from loremaker.schemas.character import Character, RecordModel


class TaxonomyType(str, Enum):
    """Grouping dimension of a taxonomy entry."""

    FACTION = "faction"
    LOCATION = "location"
    POWER = "power"
    TIMELINE = "timeline"


class PowerMetrics(RecordModel):
    """Aggregate levels across the wielders of one power."""

    total_level: int = 0
    max_level: int = 0
    min_level: int = 0
    samples: int = 0
    average_level: float = 0.0


class TaxonomyEntry(RecordModel):
    """
    分类条目 - 每次全量重建时生成，之后不可变

    One group within a taxonomy. Produced by a full rebuild, never mutated.
    """

    slug: str = Field(..., description="Slug, unique within its taxonomy")
    name: str = Field(..., description="Grouping value as written on the records")
    type: TaxonomyType
    filter_key: str = Field(..., description="Character attribute that produced the grouping")
    members: List[Character] = Field(default_factory=list)
    member_count: int = 0
    primary_image: Optional[str] = None
    summary: str = ""
    snippets: List[str] = Field(default_factory=list, max_length=3)
    era: Optional[str] = None
    metrics: Optional[PowerMetrics] = None

    @model_validator(mode="after")
    def _check_members(self) -> "TaxonomyEntry":
        ids = [member.id for member in self.members]
        if len(ids) != len(set(ids)):
            raise InvariantViolation(f"Duplicate member ids in taxonomy entry {self.slug!r}")
        if self.member_count != len(self.members):
            raise InvariantViolation(
                f"memberCount {self.member_count} does not match {len(self.members)} members in {self.slug!r}"
            )
        return self

    @property
    def id(self) -> str:
        """Entries are keyed by slug when paired or duelled."""
        return self.slug


class Taxonomies(RecordModel):
    """All four taxonomies built from one library."""

    factions: List[TaxonomyEntry] = Field(default_factory=list)
    locations: List[TaxonomyEntry] = Field(default_factory=list)
    powers: List[TaxonomyEntry] = Field(default_factory=list)
    timelines: List[TaxonomyEntry] = Field(default_factory=list)

    def dimension(self, name: str) -> Optional[List[TaxonomyEntry]]:
        """Entries for ``factions|locations|powers|timelines``; None if unknown."""
        if name not in type(self).model_fields:
            return None
        return getattr(self, name)

    def find(self, dimension: str, slug: str) -> Optional[TaxonomyEntry]:
        entries = self.dimension(dimension) or []
        return next((entry for entry in entries if entry.slug == slug), None)
