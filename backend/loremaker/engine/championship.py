"""
Championship runs: a champion duels a queue of challengers until the first loss.
"""

import random
from typing import Dict, List, Optional, Sequence

from loremaker.config import config
from loremaker.engine.duel import simulate_duel
from loremaker.engine.pairing import item_id
from loremaker.engine.rng import resolve_rng
from loremaker.schemas.character import Character
from loremaker.schemas.duel import ChampionshipMatch, ChampionshipResult

DEFAULT_SIZES: Dict[str, int] = {"duel": 1, "championship-3": 3, "championship-4": 4}


def championship_sizes() -> Dict[str, int]:
    sizes = dict(DEFAULT_SIZES)
    sizes.update(config.get("championship", {}).get("sizes", {}) or {})
    return sizes


def queue_opponents(
    champion: Character,
    rival: Optional[Character],
    roster: Sequence[Character],
    mode: str = "duel",
    rng: Optional[random.Random] = None,
) -> List[Character]:
    """Opponents for ``champion``: the chosen rival, topped up with random contenders.

    ``duel`` mode only ever returns the rival. Unknown modes behave like ``duel``.
    """
    base = [rival] if rival is not None else []
    desired = championship_sizes().get(mode, 1)
    if mode == "duel" or desired <= len(base):
        return base
    taken = {champion.id, *(item.id for item in base)}
    pool: List[Character] = []
    for entry in roster:
        key = item_id(entry)
        if key and key not in taken:
            taken.add(key)
            pool.append(entry)
    needed = min(desired - len(base), len(pool))
    return base + resolve_rng(rng).sample(pool, needed)


def run_championship(
    champion: Optional[Character],
    opponents: Sequence[Character],
    mode: str = "duel",
    rng: Optional[random.Random] = None,
) -> Optional[ChampionshipResult]:
    """Duel each opponent in order; the run ends at the champion's first loss.

    Returns None when there is no champion or no valid opponent.
    """
    if champion is None:
        return None
    rng = resolve_rng(rng)
    matches: List[ChampionshipMatch] = []
    champion_wins = True
    for opponent in opponents:
        outcome = simulate_duel(champion, opponent, rng=rng)
        if outcome is None:
            continue
        matches.append(ChampionshipMatch(opponent=opponent, outcome=outcome))
        if outcome.winner.id != champion.id:
            champion_wins = False
            break
    if not matches:
        return None
    final = matches[-1].outcome
    return ChampionshipResult(
        champion=champion,
        mode=mode,
        matches=matches,
        champion_wins=champion_wins,
        final_winner=final.winner,
        final_loser=final.loser,
    )
