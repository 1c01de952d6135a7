"""
Record normalisation: daily power jitter, era tags, unique slugs and library
invariants.
"""

import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from loremaker.engine.rng import daily_int
from loremaker.exceptions import InvariantViolation
from loremaker.ingest.parsing import normalize_drive_url
from loremaker.schemas.character import Character
from loremaker.utils.collections import normalise_array
from loremaker.utils.text import to_slug

_ERA_TAG_RE = re.compile(r"^era\s*(?:[:\-–]\s*)?(.*)$", re.IGNORECASE)
_ERA_DOTS_RE = re.compile(r"\.{2,}")
_ERA_AND_RE = re.compile(r"\band\b", re.IGNORECASE)
_ERA_SPLIT_RE = re.compile(r"[;,/|•·&\n]+")


def split_era_values(value: Any) -> List[str]:
    """
    拆分时代字段

    Split an era cell (or list of cells) into individual era names.

    Example:
        >>> split_era_values("Old Gods and Modern Age")
        ["Old Gods", "Modern Age"]
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [part for entry in value for part in split_era_values(entry) if part]
    text = _ERA_AND_RE.sub(",", _ERA_DOTS_RE.sub(",", str(value)))
    parts = [part.strip() for part in _ERA_SPLIT_RE.split(text) if part.strip()]
    if parts:
        return parts
    trimmed = str(value).strip()
    return [trimmed] if trimmed else []


def _unique(values: Iterable[Any]) -> List[Any]:
    return list(dict.fromkeys(value for value in values if value))


def daily_power_level(seed: str, label: str, base: Any, today: Optional[date] = None) -> int:
    """Level within two of the sheet level (3..10), stable for one day."""
    try:
        level = max(0, min(10, int(base or 0)))
    except (TypeError, ValueError):
        level = 0
    low = max(3, level - 2) if level else 3
    high = min(10, level + 2) if level else 9
    return daily_int(f"{seed}|{label}", low, high, today=today)


def fill_daily_powers(record: Dict[str, Any], today: Optional[date] = None) -> Dict[str, Any]:
    """
    补全并规范化一条原始记录

    Normalise one raw record dict: re-roll power levels for ``today``, move
    ``Era: X`` tags into ``eraTags``, resolve ``era`` and normalise image links.
    Returns a new dict; the input is left untouched.
    """
    seed = str(record.get("id") or record.get("name") or "character")
    slug = to_slug(record.get("slug") or record.get("id") or record.get("name") or "")
    record_id = record.get("id") or slug or to_slug(seed) or seed

    powers = []
    for index, power in enumerate(normalise_array(record.get("powers")), start=1):
        if not isinstance(power, dict):
            continue
        label = power.get("name") or f"Power {index}"
        powers.append({**power, "name": label, "level": daily_power_level(seed, label, power.get("level"), today)})

    era_tags: List[str] = []
    tags: List[Any] = []
    for tag in normalise_array(record.get("tags")):
        text = tag.strip() if isinstance(tag, str) else tag
        if not text:
            continue
        match = _ERA_TAG_RE.match(text) if isinstance(text, str) else None
        if match:
            era_tags.extend(split_era_values(match.group(1).strip() or "Era"))
        else:
            tags.append(text)

    base_eras = split_era_values(record.get("era"))
    all_eras = _unique([*base_eras, *(value.strip() for value in era_tags)])
    gallery = [normalize_drive_url(item) or item for item in normalise_array(record.get("gallery"))]

    return {
        **record,
        "id": record_id,
        "slug": slug,
        "era": base_eras[0] if base_eras else (all_eras[0] if all_eras else None),
        "alias": normalise_array(record.get("alias")),
        "locations": normalise_array(record.get("locations")),
        "faction": normalise_array(record.get("faction")),
        "tags": _unique(tags),
        "eraTags": all_eras,
        "stories": normalise_array(record.get("stories")),
        "gallery": [item for item in gallery if item],
        "cover": normalize_drive_url(record.get("cover")) or record.get("cover") or None,
        "powers": powers,
    }


def ensure_unique_slugs(records: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    保证 slug 唯一：重复时追加 -2、-3 …；缺失的 id 使用 slug

    Give every record a unique slug, suffixing ``-2``, ``-3`` … on collision.
    Records without an id, or repeating an earlier id, take their slug as id.
    Returns new dicts.
    """
    seen = set()
    seen_ids = set()
    result: List[Dict[str, Any]] = []
    for index, record in enumerate(records, start=1):
        if not record:
            continue
        base = (
            to_slug(record.get("slug") or record.get("id") or record.get("name") or "")
            or f"character-{index}"
        )
        slug, counter = base, 1
        while slug in seen:
            counter += 1
            slug = f"{base}-{counter}"
        seen.add(slug)
        record_id = record.get("id") or slug
        if record_id in seen_ids:
            record_id = slug
        seen_ids.add(record_id)
        result.append({**record, "slug": slug, "id": record_id})
    return result


def validate_library(characters: Sequence[Character]) -> None:
    """Raise InvariantViolation when ids or slugs repeat across the library."""
    ids, slugs = set(), set()
    for character in characters:
        if character.id in ids:
            raise InvariantViolation(f"Duplicate character id {character.id!r}")
        if character.slug and character.slug in slugs:
            raise InvariantViolation(f"Duplicate character slug {character.slug!r}")
        ids.add(character.id)
        slugs.add(character.slug)


def build_library(records: Sequence[Dict[str, Any]], today: Optional[date] = None) -> List[Character]:
    """Raw records to validated, immutable characters (nameless records are dropped)."""
    filled = [fill_daily_powers(record, today=today) for record in records if record and record.get("name")]
    characters = [Character.model_validate(record) for record in ensure_unique_slugs(filled)]
    validate_library(characters)
    return characters
