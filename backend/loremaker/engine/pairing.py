"""
Pair Selector / 对决配对

Uniformly picks an ordered pair of distinct roster items (characters or
taxonomy entries).
"""

import random
from enum import Enum
from typing import Any, List, Optional, Sequence, TypeVar

from loremaker.engine.rng import resolve_rng
from loremaker.utils.collections import unique_by
from loremaker.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class PairFilter(str, Enum):
    ALL = "all"
    WITH_PORTRAIT = "withPortrait"


def item_id(item: Any) -> Optional[str]:
    """Id of a roster item: attribute ``id`` or mapping key ``id``."""
    if item is None:
        return None
    value = item.get("id") if isinstance(item, dict) else getattr(item, "id", None)
    return str(value) if value else None


def has_portrait(item: Any) -> bool:
    """True when the item has a cover or at least one gallery image."""
    if item is None:
        return False
    if isinstance(item, dict):
        cover, gallery = item.get("cover"), item.get("gallery")
    else:
        cover, gallery = getattr(item, "cover", None), getattr(item, "gallery", None)
    if cover:
        return True
    return bool(gallery) and any(gallery)


def eligible_items(
    roster: Optional[Sequence[T]],
    exclude_id: Optional[str] = None,
    filter: PairFilter = PairFilter.ALL,
) -> List[T]:
    """Roster items that may be paired: id present, not excluded, unique by id."""
    pool = [item for item in (roster or []) if item_id(item) and item_id(item) != exclude_id]
    if PairFilter(filter) is PairFilter.WITH_PORTRAIT:
        pool = [item for item in pool if has_portrait(item)]
    return unique_by(pool, key=item_id)


def pick_random_pair(
    roster: Optional[Sequence[T]],
    exclude_id: Optional[str] = None,
    filter: PairFilter = PairFilter.ALL,
    rng: Optional[random.Random] = None,
) -> List[T]:
    """
    随机挑选两个不同的对手

    Return ``[a, b]`` with distinct ids, drawn uniformly from every ordered
    pair of eligible items, or ``[]`` when fewer than two are eligible.
    """
    pool = eligible_items(roster, exclude_id=exclude_id, filter=filter)
    if len(pool) < 2:
        logger.debug("Pair selection skipped: %d eligible item(s)", len(pool))
        return []
    rng = resolve_rng(rng)
    first = rng.randrange(len(pool))
    second = rng.randrange(len(pool) - 1)
    if second >= first:
        second += 1
    return [pool[first], pool[second]]


def choose_random(
    roster: Optional[Sequence[T]],
    exclude_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Optional[T]:
    """One random item other than ``exclude_id``; falls back to the whole roster."""
    items = [item for item in (roster or []) if item is not None]
    if not items:
        return None
    pool = [item for item in items if item_id(item) != exclude_id] if exclude_id else items
    source = pool or items
    return source[resolve_rng(rng).randrange(len(source))]


def sample_members(members: Optional[Sequence[T]], count: int = 6, rng: Optional[random.Random] = None) -> List[T]:
    """Up to ``count`` distinct members that have a portrait, in random order."""
    pool = unique_by(
        [member for member in (members or []) if has_portrait(member)],
        key=lambda member: item_id(member) or id(member),
    )
    if not pool or count <= 0:
        return []
    return resolve_rng(rng).sample(pool, min(count, len(pool)))
