"""
Daily featured spotlight.

Picks the character of the day together with its primary faction, location
and top power. The pick is stable for one calendar day.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from loremaker.config import config
from loremaker.engine.rng import daily_rng
from loremaker.schemas.character import Character
from loremaker.utils.collections import unique_by

RELATED_LIMIT = 8


def _related_limit() -> int:
    return int(config.get("featured", {}).get("related_limit", RELATED_LIMIT))


def _bring_forward(character: Character, members: Sequence[Character], limit: int) -> List[Character]:
    return unique_by([character, *members], key=lambda member: member.id)[:limit]


def compute_featured(characters: Optional[Sequence[Character]], today: Optional[date] = None) -> Dict[str, Any]:
    """
    计算当日精选角色

    Compute the featured spotlight for ``today``.

    Characters with portraits are preferred. Each related group lists the
    featured character first, followed by up to ``related_limit - 1`` others.
    """
    empty = {"character": None, "faction": None, "location": None, "power": None, "backgrounds": []}
    library = [character for character in (characters or []) if character is not None]
    if not library:
        return empty

    rng = daily_rng("featured", today)
    with_art = [character for character in library if character.has_portrait]
    pool = with_art or library
    character = pool[int(rng.random() * len(pool))]
    limit = _related_limit()

    faction = character.faction[0] if character.faction else None
    location = character.primary_location
    ranked_powers = sorted(
        (power for power in character.powers if power.name),
        key=lambda power: power.level,
        reverse=True,
    )
    top_power = ranked_powers[0].name if ranked_powers else None

    result: Dict[str, Any] = dict(empty, character=character)
    if faction:
        members = [c for c in library if faction in c.faction]
        result["faction"] = {"name": faction, "members": _bring_forward(character, members, limit)}
    if location:
        residents = [c for c in library if c.primary_location == location]
        result["location"] = {"name": location, "residents": _bring_forward(character, residents, limit)}
    if top_power:
        wielders = [c for c in library if any(p.name == top_power for p in c.powers)]
        result["power"] = {"name": top_power, "wielders": _bring_forward(character, wielders, limit)}
    result["backgrounds"] = [image for image in [character.cover, *character.gallery] if image]
    return result
