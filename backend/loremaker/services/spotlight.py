# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  聚光灯轮播 - 轮流展示某一分类的前若干条目，由自动轮播调度器驱动
  Spotlight carousel - rotates through the leading entries of one taxonomy,
  driven by the auto-advance scheduler.
"""

from typing import List, Optional, Sequence

from loremaker.config import settings
from loremaker.engine.auto_advance import AutoAdvance, Timer, create_auto_advance
from loremaker.schemas.taxonomy import TaxonomyEntry
from loremaker.utils.logger import get_logger

logger = get_logger(__name__)


class SpotlightCarousel:
    """
    聚光灯轮播

    Holds the spotlight slides for one taxonomy and the index of the current one.
    Manual navigation re-arms the timer so a fresh interval starts.
    """

    def __init__(
        self,
        entries: Sequence[TaxonomyEntry],
        limit: Optional[int] = None,
        interval_ms: Optional[int] = None,
        timer: Optional[Timer] = None,
    ):
        self.limit = settings.spotlight_limit if limit is None else limit
        self.slides: List[TaxonomyEntry] = []
        self.index = 0
        self.direction = 0
        self.running = False
        self.advance: AutoAdvance = create_auto_advance(
            0,
            self.next,
            interval_ms=settings.auto_advance_interval_ms if interval_ms is None else interval_ms,
            timer=timer,
        )
        self.replace(entries)

    def replace(self, entries: Sequence[TaxonomyEntry]) -> None:
        """Swap in freshly built entries; keeps the current slide when it survives."""
        current = self.current
        self.slides = [entry for entry in entries if entry is not None and entry.slug][: max(0, self.limit)]
        slugs = [slide.slug for slide in self.slides]
        self.index = slugs.index(current.slug) if current and current.slug in slugs else 0
        self.advance.length = len(self.slides)
        if self.running:
            self.advance.schedule()

    @property
    def current(self) -> Optional[TaxonomyEntry]:
        if not self.slides:
            return None
        return self.slides[self.index % len(self.slides)]

    def step(self, delta: int) -> Optional[TaxonomyEntry]:
        if not self.slides:
            return None
        self.direction = 1 if delta >= 0 else -1
        self.index = (self.index + delta) % len(self.slides)
        return self.current

    def next(self) -> Optional[TaxonomyEntry]:
        return self.step(1)

    def previous(self) -> Optional[TaxonomyEntry]:
        return self.step(-1)

    def navigate(self, delta: int) -> Optional[TaxonomyEntry]:
        """User-driven move; restarts the auto-advance interval."""
        entry = self.step(delta)
        if self.running:
            self.advance.schedule()
        return entry

    def start(self) -> None:
        self.running = True
        self.advance.schedule()
        logger.debug("Spotlight started with %d slides", len(self.slides))

    def stop(self) -> None:
        self.running = False
        self.advance.cancel()
