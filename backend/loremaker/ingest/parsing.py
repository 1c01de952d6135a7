# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  表格解析 - 将 Google Sheets (GViz) 行解析为角色记录字典
  Sheet parsing - turn Google Sheets (GViz) rows into character record dicts.
"""

import json
import re
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from loremaker.exceptions import SheetFormatError
from loremaker.utils.text import to_slug

COLUMN_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "char_id", "character id", "code"],
    "name": ["character", "character name", "name"],
    "alias": ["alias", "aliases", "also known as"],
    "gender": ["gender", "sex"],
    "identity": ["identity", "identities", "persona"],
    "alignment": ["alignment"],
    "location": ["location", "base of operations", "locations"],
    "status": ["status"],
    "era": ["era", "origin/era", "time"],
    "firstAppearance": ["first appearance", "debut", "firstappearance"],
    "powers": ["powers", "abilities", "power"],
    "faction": ["faction", "team", "faction/team"],
    "tag": ["tag", "tags"],
    "shortDesc": ["short description", "shortdesc", "blurb"],
    "longDesc": ["long description", "longdesc", "bio"],
    "stories": ["stories", "story", "appears in"],
    "cover": ["cover image", "cover", "cover url"],
}

GALLERY_COLUMNS = 15
GALLERY_ALIASES: List[List[str]] = [
    [f"gallery image {n}", f"gallery {n}", f"img {n}", f"image {n}"]
    for n in range(1, GALLERY_COLUMNS + 1)
]

_AND_RE = re.compile(r"\band\b", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[|;/]")
_GVIZ_RE = re.compile(r"google\.visualization\.Query\.setResponse\((.*)\);?\s*$", re.DOTALL)
_POWER_COLON_RE = re.compile(r"^(.*?)[=:]\s*(\d{1,2})(?:\s*/\s*10)?$")
_POWER_PAREN_RE = re.compile(r"^(.*?)\((\d{1,2})\)$")
_POWER_TRAIL_RE = re.compile(r"^(.*?)(\d{1,2})$")
_DRIVE_FILE_RE = re.compile(r"/file/d/([^/]+)")

MAX_POWER_LEVEL = 10


def split_list(raw: Optional[str]) -> List[str]:
    """
    拆分列表单元格

    Split a list cell on commas, ``|``, ``;``, ``/`` and the word "and".

    Example:
        >>> split_list("Flight and Strength; Speed")
        ["Flight", "Strength", "Speed"]
    """
    if not raw:
        return []
    text = _SEPARATOR_RE.sub(",", _AND_RE.sub(",", raw))
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_locations(raw: Optional[str]) -> List[str]:
    """Split a location cell, dropping duplicates and keeping first-seen order."""
    return list(dict.fromkeys(split_list(raw)))


def _clamp_level(value: int) -> int:
    return min(MAX_POWER_LEVEL, max(0, value))


def parse_powers(raw: Optional[str]) -> List[Dict[str, Any]]:
    """
    解析能力单元格

    Parse a powers cell into ``{"name", "level"}`` dicts. Accepted forms:
    ``Flight: 8``, ``Flight=8/10``, ``Flight (8)``, ``Flight 8`` and bare
    ``Flight`` (level 0). Levels are clamped to ``0..10``.
    """
    powers: List[Dict[str, Any]] = []
    for item in split_list(raw):
        name, level = item.strip(), 0
        for pattern in (_POWER_COLON_RE, _POWER_PAREN_RE, _POWER_TRAIL_RE):
            match = pattern.match(item)
            if match:
                name, level = match.group(1).strip(), int(match.group(2))
                break
        powers.append({"name": name or item.strip(), "level": _clamp_level(level)})
    return powers


def _drive_view_url(file_id: Optional[str], params: Dict[str, List[str]]) -> Optional[str]:
    if not file_id:
        return None
    query = {"export": "view", "id": file_id}
    resource_key = (params.get("resourcekey") or [None])[0]
    if resource_key:
        query["resourcekey"] = resource_key
    return f"https://drive.google.com/uc?{urlencode(query)}"


def normalize_drive_url(url: Optional[str]) -> Optional[str]:
    """
    规范化 Google Drive 图片链接

    Rewrite Google Drive share links into direct ``uc?export=view`` links.
    Other URLs pass through trimmed; anything unparseable becomes None.
    """
    if not url or not isinstance(url, str):
        return None
    trimmed = url.strip()
    if not trimmed:
        return None
    try:
        parsed = urlparse(trimmed)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None

    host = parsed.netloc.lower()
    params = parse_qs(parsed.query)
    search_id = (params.get("id") or [None])[0]

    if "drive.google.com" in host:
        match = _DRIVE_FILE_RE.search(parsed.path)
        if parsed.path == "/thumbnail" and search_id:
            return _drive_view_url(search_id, params)
        if match:
            return _drive_view_url(match.group(1), params)
        if parsed.path == "/open" and search_id:
            return _drive_view_url(search_id, params)
        if parsed.path == "/uc" and search_id:
            if (params.get("export") or [None])[0] != "view":
                params["export"] = ["view"]
            return urlunparse(parsed._replace(query=urlencode(params, doseq=True)))
        if search_id:
            return _drive_view_url(search_id, params)

    if "drive.usercontent.google.com" in host:
        return _drive_view_url(search_id, params)

    if "drive.googleusercontent.com" in host:
        if parsed.path == "/uc" and search_id and not params.get("export"):
            params["export"] = ["view"]
            return urlunparse(parsed._replace(query=urlencode(params, doseq=True)))

    return trimmed


def header_map(headers: Sequence[Optional[str]]) -> Dict[str, int]:
    """Map record keys (and ``gallery_N``) to column indexes using the alias table."""
    lowered = [(header or "").lower().strip() for header in headers]

    def find_index(aliases: Sequence[str]) -> int:
        for alias in aliases:
            if alias in lowered:
                return lowered.index(alias)
        return -1

    mapping: Dict[str, int] = {}
    for key, aliases in COLUMN_ALIASES.items():
        index = find_index(aliases)
        if index != -1:
            mapping[key] = index
    for number, aliases in enumerate(GALLERY_ALIASES, start=1):
        index = find_index(aliases)
        if index != -1:
            mapping[f"gallery_{number}"] = index
    return mapping


def parse_gviz(text: str) -> Dict[str, Any]:
    """Unwrap a ``google.visualization.Query.setResponse(...)`` payload."""
    match = _GVIZ_RE.search((text or "").strip())
    if not match:
        raise SheetFormatError("GViz format not recognised")
    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise SheetFormatError(f"GViz payload is not valid JSON: {exc}") from exc


def _cell_text(cell: Any) -> Optional[str]:
    if cell is None or cell == "":
        return None
    if isinstance(cell, dict):
        value = cell.get("v")
        if value is None:
            value = cell.get("f")
    else:
        value = cell
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def row_to_character(row: Sequence[Any], mapping: Dict[str, int]) -> Optional[Dict[str, Any]]:
    """
    将一行表格数据转换为角色记录字典，无名称的行返回 None

    Convert one sheet row into a character record dict; rows without a name
    yield None.
    """

    def read(key: str) -> Optional[str]:
        index = mapping.get(key)
        if index is None or index >= len(row):
            return None
        return _cell_text(row[index])

    name = read("name")
    if not name:
        return None

    record_id = read("id") or to_slug(name) or "character"
    gallery = []
    for number in range(1, GALLERY_COLUMNS + 1):
        url = normalize_drive_url(read(f"gallery_{number}"))
        if url:
            gallery.append(url)

    return {
        "id": record_id,
        "slug": to_slug(record_id or name),
        "name": name,
        "alias": split_list(read("alias")),
        "gender": read("gender"),
        "identity": read("identity"),
        "alignment": read("alignment"),
        "locations": parse_locations(read("location")),
        "status": read("status"),
        "era": read("era"),
        "firstAppearance": read("firstAppearance"),
        "powers": parse_powers(read("powers")),
        "faction": split_list(read("faction")),
        "tags": split_list(read("tag")),
        "shortDesc": read("shortDesc"),
        "longDesc": read("longDesc"),
        "stories": split_list(read("stories")),
        "cover": normalize_drive_url(read("cover")),
        "gallery": gallery,
    }


def rows_from_gviz(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    从 GViz 表格中提取角色记录

    Extract record dicts from a GViz table. When the declared column labels do
    not contain a name column, the first row is tried as the header row.
    """
    table = payload.get("table") or {}
    rows = table.get("rows") or []
    labels = [str((col or {}).get("label") or (col or {}).get("id") or "").strip() for col in table.get("cols") or []]
    mapping = header_map(labels)
    usable = rows
    if "name" not in mapping and rows:
        guess = [_cell_text(cell) or "" for cell in (rows[0] or {}).get("c") or []]
        alternative = header_map(guess)
        if "name" in alternative:
            mapping = alternative
            usable = rows[1:]

    records: List[Dict[str, Any]] = []
    for index, row in enumerate(usable):
        record = row_to_character((row or {}).get("c") or [], mapping)
        if record is not None:
            record["sourceIndex"] = index
            records.append(record)
    return records
