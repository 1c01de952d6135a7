# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  角色库 - 从 Google Sheets 拉取角色，带 TTL 缓存，失败时回退到内置名册
  Character Library - loads characters from Google Sheets with a TTL cache and
  falls back to the bundled roster when the sheet is unreachable.
"""

import asyncio
import time
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests
import yaml

from loremaker.config import config, settings
from loremaker.exceptions import LibraryConfigError, LibraryError
from loremaker.ingest.normalize import build_library
from loremaker.ingest.parsing import parse_gviz, rows_from_gviz
from loremaker.schemas.character import Character
from loremaker.storage.base import BaseStorage
from loremaker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SHEET_NAMES = ["Characters", "Sheet1"]


def gviz_url(sheet_id: str, sheet_name: Optional[str] = None) -> str:
    base = f"https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:json"
    if sheet_name:
        return f"{base}&sheet={quote(sheet_name, safe='')}"
    return base


class CharacterLibrary(BaseStorage):
    """
    角色库（带缓存）

    Character library with a TTL cache.

    ``load()`` returns the cached roster while it is fresh, otherwise tries each
    sheet tab in turn and finally the bundled fallback roster. The library is
    replaced wholesale on every refresh.
    """

    def __init__(
        self,
        sheet_id: Optional[str] = None,
        sheet_tab: Optional[str] = None,
        cache_ttl_ms: Optional[int] = None,
        fallback_roster: Optional[Path] = None,
        fetch: Optional[Callable[[str], str]] = None,
        clock: Callable[[], float] = time.monotonic,
        data_dir: Optional[str] = None,
    ):
        super().__init__(data_dir=data_dir)
        self.sheet_id = settings.sheet_id if sheet_id is None else sheet_id
        self.sheet_tab = settings.sheet_tab if sheet_tab is None else sheet_tab
        self.cache_ttl_ms = settings.sheets_cache_ttl_ms if cache_ttl_ms is None else cache_ttl_ms
        self.fallback_roster = Path(fallback_roster or settings.fallback_roster)
        self._fetch = fetch or self._http_get
        self._clock = clock
        self._data: Optional[List[Character]] = None
        self._timestamp = 0.0
        self.source_order: Dict[str, int] = {}

    @staticmethod
    def _http_get(url: str) -> str:
        resp = requests.get(url, timeout=settings.sheets_timeout_s)
        resp.raise_for_status()
        return resp.text

    def sheet_names(self) -> List[Optional[str]]:
        """Tabs to try, in order; None means the sheet's default tab."""
        configured = (self.sheet_tab or "").strip() or None
        names = config.get("library", {}).get("fallback_sheet_names") or DEFAULT_SHEET_NAMES
        ordered = [configured, *names, None] if configured else [*names, None]
        return list(dict.fromkeys(ordered))

    def cached(self) -> Optional[List[Character]]:
        return self._data

    def clear(self) -> None:
        self._data = None
        self._timestamp = 0.0
        self.source_order.clear()

    def _is_fresh(self) -> bool:
        if self._data is None:
            return False
        return (self._clock() - self._timestamp) * 1000 < self.cache_ttl_ms

    def _store(self, characters: List[Character]) -> List[Character]:
        self._data = characters
        self._timestamp = self._clock()
        return characters

    async def load(self, force: bool = False, today: Optional[date] = None) -> List[Character]:
        """
        加载角色库

        Load the library, honouring the cache unless ``force`` is set.

        Raises:
            LibraryConfigError: 未配置表格 ID / No sheet id configured
            LibraryError: 表格与内置名册均不可用 / Neither sheet nor fallback usable
        """
        if not force and self._is_fresh():
            return self._data
        if not self.sheet_id:
            raise LibraryConfigError("Google Sheets configuration missing")

        last_error: Optional[Exception] = None
        for name in self.sheet_names():
            url = gviz_url(self.sheet_id, name)
            try:
                text = await asyncio.to_thread(self._fetch, url)
                records = rows_from_gviz(parse_gviz(text))
                if not records:
                    raise LibraryError(f"Sheet tab {name!r} has no characters")
                characters = build_library(records, today=today)
            except (requests.RequestException, LibraryError, ValueError) as exc:
                last_error = exc
                logger.debug("Sheet tab %r unusable: %s", name, exc)
                continue
            self.source_order = {
                character.id: character.source_index
                for character in characters
                if character.source_index is not None
            }
            logger.info("Loaded %d characters from sheet tab %r", len(characters), name)
            return self._store(characters)

        logger.warning("Falling back to bundled roster: %s", last_error)
        try:
            characters = await self.load_fallback(today=today)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise LibraryError("Unable to load characters from Google Sheets") from (last_error or exc)
        self.source_order.clear()
        return self._store(characters)

    async def load_fallback(self, today: Optional[date] = None) -> List[Character]:
        """Build the library from the bundled YAML roster."""
        data: Any = await self.read_yaml(self.fallback_roster)
        records = data.get("characters", []) if isinstance(data, dict) else data or []
        return build_library(records, today=today)
