# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  分类构建器 - 按阵营/地点/能力/时代四个维度对角色库分组，生成摘要、引言和排序
  Taxonomy Builder - groups the character library along four dimensions
  (faction / location / power / timeline) and derives summaries, snippets and
  ordering. Output depends only on the input library.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from loremaker.schemas.character import Character
from loremaker.schemas.taxonomy import PowerMetrics, Taxonomies, TaxonomyEntry, TaxonomyType
from loremaker.utils.collections import unique_by
from loremaker.utils.logger import get_logger
from loremaker.utils.text import split_sentences, to_slug, truncate_at_word

logger = get_logger(__name__)

SUMMARY_LIMIT = 240
SNIPPET_MIN_LENGTH = 40
SNIPPET_MAX_LENGTH = 180
SNIPPET_LIMIT = 3

FILTER_KEYS = {
    TaxonomyType.FACTION: "faction",
    TaxonomyType.LOCATION: "primaryLocation",
    TaxonomyType.POWER: "powers",
    TaxonomyType.TIMELINE: "era",
}

# Member nouns used by the fallback summary: (singular, plural)
MEMBER_NOUNS = {
    TaxonomyType.FACTION: ("member", "members"),
    TaxonomyType.LOCATION: ("legend", "legends"),
    TaxonomyType.POWER: ("wielder", "wielders"),
    TaxonomyType.TIMELINE: ("figure", "figures"),
}


@dataclass
class _Group:
    """Mutable accumulator for one entry while the library is scanned."""

    name: str
    members: List[Character] = field(default_factory=list)
    levels: List[int] = field(default_factory=list)


def _faction_keys(character: Character) -> Iterable[str]:
    return character.faction


def _location_keys(character: Character) -> Iterable[str]:
    return [character.primary_location] if character.primary_location else []


def _power_keys(character: Character) -> Iterable[str]:
    return [power.name for power in character.powers]


def _timeline_keys(character: Character) -> Iterable[str]:
    return [character.era] if character.era else []


KEY_FUNCTIONS: Dict[TaxonomyType, Callable[[Character], Iterable[str]]] = {
    TaxonomyType.FACTION: _faction_keys,
    TaxonomyType.LOCATION: _location_keys,
    TaxonomyType.POWER: _power_keys,
    TaxonomyType.TIMELINE: _timeline_keys,
}


def entry_primary_image(members: Sequence[Character]) -> Optional[str]:
    """First non-empty cover, else the first non-empty leading gallery image."""
    for member in members:
        if member.cover:
            return member.cover
    for member in members:
        if member.gallery and member.gallery[0]:
            return member.gallery[0]
    return None


def entry_summary(members: Sequence[Character]) -> Optional[str]:
    """First member description (long before short), single-lined and truncated."""
    for member in members:
        text = (member.long_desc or "").strip() or (member.short_desc or "").strip()
        if text:
            return truncate_at_word(text, SUMMARY_LIMIT)
    return None


def entry_snippets(members: Sequence[Character]) -> List[str]:
    """Up to three quotable sentences from member long descriptions."""
    snippets: List[str] = []
    seen = set()
    for member in members:
        for sentence in split_sentences(member.long_desc):
            if not SNIPPET_MIN_LENGTH <= len(sentence) <= SNIPPET_MAX_LENGTH:
                continue
            marker = sentence.casefold()
            if marker in seen:
                continue
            seen.add(marker)
            snippets.append(sentence)
            if len(snippets) == SNIPPET_LIMIT:
                return snippets
    return snippets


def power_metrics(levels: Sequence[int]) -> PowerMetrics:
    if not levels:
        return PowerMetrics()
    total = sum(levels)
    return PowerMetrics(
        total_level=total,
        max_level=max(levels),
        min_level=min(levels),
        samples=len(levels),
        average_level=round(total / len(levels), 1),
    )


def default_summary(
    name: str,
    kind: TaxonomyType,
    count: int,
    metrics: Optional[PowerMetrics] = None,
) -> str:
    singular, plural = MEMBER_NOUNS[kind]
    label = singular if count == 1 else plural
    if kind is TaxonomyType.POWER and metrics and metrics.average_level:
        return (
            f"{name} is channelled by {count} {label} with an average mastery of "
            f"{metrics.average_level:g}/10."
        )
    return f"{name} unites {count} {label} within the LoreMaker Universe."


def entry_sort_key(entry: TaxonomyEntry):
    return (-entry.member_count, entry.name.casefold(), entry.name)


def _group(characters: Sequence[Character], kind: TaxonomyType) -> List[_Group]:
    groups: Dict[str, _Group] = {}
    key_fn = KEY_FUNCTIONS[kind]
    for character in characters:
        # One level sample per power occurrence
        if kind is TaxonomyType.POWER:
            keyed = [(power.name, power.level) for power in character.powers]
        else:
            keyed = [(raw, None) for raw in key_fn(character)]
        for raw, level in keyed:
            name = (raw or "").strip()
            if not name:
                continue
            group = groups.setdefault(name, _Group(name=name))
            group.members.append(character)
            if level is not None:
                group.levels.append(level)
    return list(groups.values())


def _unique_slug(base: str, used: Dict[str, int]) -> str:
    if base not in used:
        used[base] = 1
        return base
    used[base] += 1
    candidate = f"{base}-{used[base]}"
    while candidate in used:
        used[base] += 1
        candidate = f"{base}-{used[base]}"
    used[candidate] = 1
    return candidate


def build_dimension(characters: Sequence[Character], kind: TaxonomyType) -> List[TaxonomyEntry]:
    """
    构建单个维度的分类条目

    Build the ordered entries of one taxonomy dimension.

    Members are deduplicated by id in first-seen order. Entries are sorted by
    member count descending, then by name case-insensitively.
    """
    entries: List[TaxonomyEntry] = []
    used_slugs: Dict[str, int] = {}
    for index, group in enumerate(_group(characters, kind), start=1):
        members = unique_by(group.members, key=lambda member: member.id)
        metrics = power_metrics(group.levels) if kind is TaxonomyType.POWER else None
        base_slug = to_slug(group.name) or f"{kind.value}-{index}"
        entries.append(
            TaxonomyEntry(
                slug=_unique_slug(base_slug, used_slugs),
                name=group.name,
                type=kind,
                filter_key=FILTER_KEYS[kind],
                members=members,
                member_count=len(members),
                primary_image=entry_primary_image(members),
                summary=entry_summary(members)
                or default_summary(group.name, kind, len(members), metrics),
                snippets=entry_snippets(members),
                era=group.name if kind is TaxonomyType.TIMELINE else None,
                metrics=metrics,
            )
        )
    entries.sort(key=entry_sort_key)
    return entries


def build_taxonomies(characters: Optional[Sequence[Character]]) -> Taxonomies:
    """
    从角色库构建全部四个分类

    Build all four taxonomies from a character library. Entries are rebuilt
    wholesale on every call.
    """
    library = list(characters or [])
    taxonomies = Taxonomies(
        factions=build_dimension(library, TaxonomyType.FACTION),
        locations=build_dimension(library, TaxonomyType.LOCATION),
        powers=build_dimension(library, TaxonomyType.POWER),
        timelines=build_dimension(library, TaxonomyType.TIMELINE),
    )
    logger.debug(
        "Built taxonomies from %d characters: %d factions, %d locations, %d powers, %d timelines",
        len(library),
        len(taxonomies.factions),
        len(taxonomies.locations),
        len(taxonomies.powers),
        len(taxonomies.timelines),
    )
    return taxonomies
