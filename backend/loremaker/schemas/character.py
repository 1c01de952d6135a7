"""
Character data models.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from loremaker.exceptions import InvariantViolation
from loremaker.utils.collections import normalise_array


class RecordModel(BaseModel):
    """Immutable record; camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Power(RecordModel):
    """A named power with a non-negative level."""

    name: str = Field(..., description="Power name")
    level: int = Field(default=0, description="Power level (>= 0)")

    @field_validator("level", mode="before")
    @classmethod
    def _default_level(cls, value: Any) -> Any:
        return 0 if value is None or value == "" else value

    @field_validator("level")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise InvariantViolation(f"Power level must be non-negative, got {value}")
        return value


class CharacterMetrics(RecordModel):
    """Pre-computed character metrics."""

    average_level: float = 0.0


class Character(RecordModel):
    """
    角色记录 - 由导入方创建，之后不可变

    Character record. Created by the ingest layer, immutable afterwards.
    """

    id: str = Field(..., description="Stable unique id")
    slug: str = Field(default="", description="URL-safe unique slug")
    name: str = Field(..., description="Display name")
    alias: List[str] = Field(default_factory=list)
    cover: Optional[str] = None
    gallery: List[str] = Field(default_factory=list)
    faction: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    alignment: Optional[str] = None
    status: Optional[str] = None
    identity: Optional[str] = None
    gender: Optional[str] = None
    locations: List[str] = Field(default_factory=list)
    primary_location: Optional[str] = None
    era: Optional[str] = None
    era_tags: List[str] = Field(default_factory=list)
    first_appearance: Optional[str] = None
    stories: List[str] = Field(default_factory=list)
    short_desc: Optional[str] = None
    long_desc: Optional[str] = None
    powers: List[Power] = Field(default_factory=list)
    metrics: Optional[CharacterMetrics] = None
    source_index: Optional[int] = None

    @field_validator(
        "alias", "gallery", "faction", "tags", "locations", "era_tags", "stories",
        mode="before",
    )
    @classmethod
    def _coerce_list(cls, value: Any) -> List[Any]:
        return [str(item).strip() for item in normalise_array(value) if str(item).strip()]

    @field_validator("powers", mode="before")
    @classmethod
    def _coerce_powers(cls, value: Any) -> List[Any]:
        return [item for item in normalise_array(value) if item]

    @model_validator(mode="before")
    @classmethod
    def _derive_primary_location(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("primaryLocation") or data.get("primary_location"):
            return data
        locations = normalise_array(data.get("locations"))
        if locations:
            data = dict(data)
            data.pop("primaryLocation", None)
            data["primary_location"] = str(locations[0]).strip() or None
        return data

    @property
    def portrait(self) -> Optional[str]:
        """Cover image, else the first gallery image."""
        if self.cover:
            return self.cover
        return next((image for image in self.gallery if image), None)

    @property
    def has_portrait(self) -> bool:
        return bool(self.portrait)
