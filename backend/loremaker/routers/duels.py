"""
Duels router: character duels, championship runs, faction arena and the daily feature.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from loremaker.dependencies import get_current_index
from loremaker.engine.arena import resolve_faction_duel
from loremaker.engine.championship import queue_opponents, run_championship
from loremaker.engine.duel import battle_timeline, simulate_duel
from loremaker.engine.featured import compute_featured
from loremaker.engine.pairing import PairFilter, choose_random, eligible_items, pick_random_pair
from loremaker.engine.rng import get_rng
from loremaker.services.lore_index import DIMENSIONS, LoreIndex

router = APIRouter(tags=["duels"])


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class DuelRequest(_Request):
    """Request body for a character duel. Missing fighters are drawn at random."""

    left_id: Optional[str] = Field(default=None, description="Slug or id of the first fighter")
    right_id: Optional[str] = Field(default=None, description="Slug or id of the second fighter")
    filter: PairFilter = Field(default=PairFilter.WITH_PORTRAIT, description="Random pool filter")
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible duel")


class ChampionshipRequest(_Request):
    champion_id: str = Field(..., description="Slug or id of the champion")
    rival_id: Optional[str] = Field(default=None, description="Slug or id of the first rival")
    mode: str = Field(default="duel", pattern=r"^(duel|championship-3|championship-4)$")
    seed: Optional[int] = None


class ArenaRequest(_Request):
    left_slug: Optional[str] = None
    right_slug: Optional[str] = None
    seed: Optional[int] = None


def _lookup(index: LoreIndex, key: Optional[str]):
    if not key:
        return None
    character = index.character(key)
    if character is None:
        raise HTTPException(status_code=404, detail=f"Character not found: {key}")
    return character


@router.post("/duels")
async def create_duel(request: DuelRequest, index: LoreIndex = Depends(get_current_index)):
    """Simulate a duel; ``result`` is null when no two distinct fighters are available."""
    rng = get_rng(request.seed)
    left = _lookup(index, request.left_id)
    right = _lookup(index, request.right_id)

    if left is None and right is None:
        pair = pick_random_pair(index.characters, filter=request.filter, rng=rng)
        left, right = pair if pair else (None, None)
    elif left is None or right is None:
        anchor = left or right
        pool = eligible_items(index.characters, exclude_id=anchor.id, filter=request.filter)
        other = choose_random(pool, rng=rng)
        left, right = (anchor, other) if left is not None else (other, anchor)

    result = simulate_duel(left, right, rng=rng)
    if result is None:
        return {"result": None, "timeline": []}
    return {"result": result, "timeline": battle_timeline(result)}


@router.post("/duels/championship")
async def create_championship(request: ChampionshipRequest, index: LoreIndex = Depends(get_current_index)):
    """Run the champion through a duel or a three/four-opponent championship."""
    rng = get_rng(request.seed)
    champion = _lookup(index, request.champion_id)
    rival = _lookup(index, request.rival_id)
    contenders = eligible_items(index.characters, exclude_id=champion.id, filter=PairFilter.WITH_PORTRAIT)
    if rival is None:
        rival = choose_random(contenders, rng=rng)
    opponents = queue_opponents(champion, rival, contenders, mode=request.mode, rng=rng)
    return {"result": run_championship(champion, opponents, mode=request.mode, rng=rng)}


@router.post("/arena/{dimension}")
async def create_arena_duel(
    dimension: str,
    request: ArenaRequest,
    index: LoreIndex = Depends(get_current_index),
):
    """Weighted duel between two taxonomy entries; missing sides are drawn at random."""
    if dimension not in DIMENSIONS:
        raise HTTPException(status_code=404, detail=f"Unknown taxonomy: {dimension}")
    rng = get_rng(request.seed)
    entries = index.taxonomies.dimension(dimension) or []

    def pick(slug: Optional[str]):
        if not slug:
            return None
        entry = index.taxonomies.find(dimension, slug)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Taxonomy entry not found: {slug}")
        return entry

    left = pick(request.left_slug)
    right = pick(request.right_slug)
    if left is None and right is None:
        pair = pick_random_pair(entries, rng=rng)
        left, right = pair if pair else (None, None)
    elif left is None:
        left = choose_random(entries, exclude_id=right.slug, rng=rng)
    elif right is None:
        right = choose_random(entries, exclude_id=left.slug, rng=rng)
    if left is None or right is None or left.slug == right.slug:
        return {"result": None}
    return {"result": resolve_faction_duel(left, right, rng=rng)}


@router.get("/featured")
async def get_featured(index: LoreIndex = Depends(get_current_index)):
    """Today's featured character with its faction, location and top power."""
    return compute_featured(index.characters)
