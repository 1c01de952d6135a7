# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  文本规范化工具 - slug、单行化、按词截断、分句
  Text Normalization Utilities - slugs, single-line collapse, word-boundary
  truncation and sentence splitting.
"""

import re
from typing import List

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]*")

ELLIPSIS = "…"


def normalize_newlines(text: str | None) -> str:
    """
    规范化换行符（\\r\\n 和 \\r 转换为 \\n）

    Normalize \\r\\n and \\r to \\n. Accepts *None* safely (returns empty string).
    """
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")


def collapse_whitespace(text: str | None) -> str:
    """
    将任意空白（含换行）折叠为单个空格

    Collapse every whitespace run (newlines included) to one space.

    Example:
        >>> collapse_whitespace("  Born of\\n\\n the void ")
        "Born of the void"
    """
    return _WHITESPACE_RE.sub(" ", normalize_newlines(text)).strip()


def to_slug(text: str | None) -> str:
    """
    生成 URL 安全的 slug

    Lowercase, turn every non-alphanumeric run into ``-``, trim dashes.

    Example:
        >>> to_slug("  The Old Gods' Court ")
        "the-old-gods-court"
    """
    return _NON_ALNUM_RE.sub("-", (text or "").lower()).strip("-")


def truncate_at_word(text: str | None, limit: int) -> str:
    """
    在词边界处截断并追加省略号，结果长度不超过 limit

    Truncate at a word boundary, appending an ellipsis. The result, ellipsis
    included, never exceeds ``limit`` characters.
    """
    value = collapse_whitespace(text)
    if len(value) <= limit:
        return value
    if limit <= len(ELLIPSIS):
        return value[:limit]

    cut = value[: limit - len(ELLIPSIS)]
    boundary = cut.rfind(" ")
    if boundary > 0:
        cut = cut[:boundary]
    return cut.rstrip(" ,;:-") + ELLIPSIS


def split_sentences(text: str | None) -> List[str]:
    """Split text on ``.``, ``!`` and ``?`` boundaries; punctuation is kept."""
    value = collapse_whitespace(text)
    if not value:
        return []
    return [match.strip() for match in _SENTENCE_RE.findall(value) if match.strip()]
