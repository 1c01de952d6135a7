"""
Lore index: the current character library plus the taxonomies derived from it.

Taxonomies are rebuilt wholesale whenever the library hands back a new roster,
and the spotlight carousels are re-pointed at the new entries.
"""

from typing import Dict, List, Optional

from loremaker.engine.taxonomy import build_taxonomies
from loremaker.schemas.character import Character
from loremaker.schemas.taxonomy import Taxonomies
from loremaker.services.spotlight import SpotlightCarousel
from loremaker.storage.library import CharacterLibrary
from loremaker.utils.logger import get_logger

logger = get_logger(__name__)

DIMENSIONS = ("factions", "locations", "powers", "timelines")


class LoreIndex:
    """Read model over one CharacterLibrary."""

    def __init__(self, library: CharacterLibrary):
        self.library = library
        self._characters: Optional[List[Character]] = None
        self._taxonomies = Taxonomies()
        self._by_slug: Dict[str, Character] = {}
        self._by_id: Dict[str, Character] = {}
        self.spotlights: Dict[str, SpotlightCarousel] = {}

    async def refresh(self, force: bool = False) -> "LoreIndex":
        characters = await self.library.load(force=force)
        if characters is not self._characters:
            self._rebuild(characters)
        return self

    def _rebuild(self, characters: List[Character]) -> None:
        self._characters = characters
        self._taxonomies = build_taxonomies(characters)
        self._by_slug = {character.slug: character for character in characters}
        self._by_id = {character.id: character for character in characters}
        for name, carousel in self.spotlights.items():
            carousel.replace(self._taxonomies.dimension(name) or [])
        logger.info("Lore index rebuilt for %d characters", len(characters))

    @property
    def characters(self) -> List[Character]:
        return self._characters or []

    @property
    def taxonomies(self) -> Taxonomies:
        return self._taxonomies

    def character(self, key: str) -> Optional[Character]:
        """Look a character up by slug, then by id."""
        return self._by_slug.get(key) or self._by_id.get(key)

    def spotlight(self, dimension: str) -> Optional[SpotlightCarousel]:
        if dimension not in DIMENSIONS:
            return None
        if dimension not in self.spotlights:
            self.spotlights[dimension] = SpotlightCarousel(self._taxonomies.dimension(dimension) or [])
        return self.spotlights[dimension]

    def start_spotlights(self) -> None:
        for dimension in DIMENSIONS:
            self.spotlight(dimension).start()

    def stop_spotlights(self) -> None:
        for carousel in self.spotlights.values():
            carousel.stop()
