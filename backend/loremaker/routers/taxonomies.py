"""
Taxonomies router: faction / location / power / timeline listings and spotlights.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from loremaker.dependencies import get_current_index
from loremaker.engine.pairing import sample_members
from loremaker.engine.rng import get_rng
from loremaker.services.lore_index import DIMENSIONS, LoreIndex

router = APIRouter(tags=["taxonomies"])


def _entries_or_404(index: LoreIndex, dimension: str):
    entries = index.taxonomies.dimension(dimension) if dimension in DIMENSIONS else None
    if entries is None:
        raise HTTPException(status_code=404, detail=f"Unknown taxonomy: {dimension}")
    return entries


@router.get("/taxonomies")
async def list_taxonomies(index: LoreIndex = Depends(get_current_index)):
    """Entry counts per taxonomy."""
    return {name: len(index.taxonomies.dimension(name) or []) for name in DIMENSIONS}


@router.get("/taxonomies/{dimension}")
async def get_taxonomy(dimension: str, index: LoreIndex = Depends(get_current_index)):
    """Ordered entries of one taxonomy."""
    return _entries_or_404(index, dimension)


@router.get("/taxonomies/{dimension}/{slug}")
async def get_taxonomy_entry(dimension: str, slug: str, index: LoreIndex = Depends(get_current_index)):
    """One taxonomy entry with its members."""
    _entries_or_404(index, dimension)
    entry = index.taxonomies.find(dimension, slug)
    if not entry:
        raise HTTPException(status_code=404, detail="Taxonomy entry not found")
    return entry


@router.get("/taxonomies/{dimension}/{slug}/showcase")
async def get_taxonomy_showcase(
    dimension: str,
    slug: str,
    count: int = Query(default=6, ge=1, le=24),
    seed: Optional[int] = None,
    index: LoreIndex = Depends(get_current_index),
):
    """Random portrait sample of an entry's members."""
    _entries_or_404(index, dimension)
    entry = index.taxonomies.find(dimension, slug)
    if not entry:
        raise HTTPException(status_code=404, detail="Taxonomy entry not found")
    return {"slug": entry.slug, "members": sample_members(entry.members, count=count, rng=get_rng(seed))}


@router.get("/spotlight/{dimension}")
async def get_spotlight(dimension: str, index: LoreIndex = Depends(get_current_index)):
    """Currently featured entry of a taxonomy."""
    carousel = index.spotlight(dimension)
    if carousel is None:
        raise HTTPException(status_code=404, detail=f"Unknown taxonomy: {dimension}")
    return {
        "index": carousel.index,
        "total": len(carousel.slides),
        "entry": carousel.current,
    }


@router.post("/spotlight/{dimension}/navigate")
async def navigate_spotlight(
    dimension: str,
    delta: int = Query(default=1, ge=-50, le=50),
    index: LoreIndex = Depends(get_current_index),
):
    """Move the spotlight by ``delta`` slides; restarts the auto-advance interval."""
    carousel = index.spotlight(dimension)
    if carousel is None:
        raise HTTPException(status_code=404, detail=f"Unknown taxonomy: {dimension}")
    carousel.navigate(delta)
    return {
        "index": carousel.index,
        "total": len(carousel.slides),
        "entry": carousel.current,
    }
