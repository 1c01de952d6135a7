"""
Characters router.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from loremaker.dependencies import get_current_index, get_lore_index
from loremaker.engine.origin import classify_origin
from loremaker.engine.scoring import score_character
from loremaker.exceptions import LibraryError, is_library_config_error, public_characters_error
from loremaker.services.lore_index import LoreIndex
from loremaker.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/characters", tags=["characters"])


@router.get("")
async def list_characters(
    force: bool = Query(default=False, description="Bypass the sheet cache"),
    index: LoreIndex = Depends(get_lore_index),
):
    """List the character library with its fetch time."""
    try:
        await index.refresh(force=force)
    except LibraryError as exc:
        logger.error("Character library unavailable: %s", exc)
        status = 503 if is_library_config_error(exc) else 500
        return JSONResponse(status_code=status, content={"error": public_characters_error(exc)})
    return {
        "data": index.characters,
        "fetchedAt": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/{slug}")
async def get_character(slug: str, index: LoreIndex = Depends(get_current_index)):
    """Get one character by slug or id."""
    character = index.character(slug)
    if not character:
        raise HTTPException(status_code=404, detail="Character not found")
    return character


@router.get("/{slug}/score")
async def get_character_score(slug: str, index: LoreIndex = Depends(get_current_index)):
    """Duel score and origin tier of one character."""
    character = index.character(slug)
    if not character:
        raise HTTPException(status_code=404, detail="Character not found")
    return {
        "id": character.id,
        "slug": character.slug,
        "score": score_character(character),
        "origin": classify_origin(character),
    }
