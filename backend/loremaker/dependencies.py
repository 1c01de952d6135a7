# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  依赖注入工厂 - FastAPI Depends() 工厂函数，统一管理角色库与索引实例
  Dependency Injection - FastAPI Depends() factories for the character library
  and the lore index.

设计原则 / Design Principles:
  所有Router应通过 Depends() 获取实例，而非模块级实例化。
  Tests override these with ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException

from loremaker.exceptions import LibraryError, is_library_config_error, public_characters_error
from loremaker.services.lore_index import LoreIndex
from loremaker.storage.library import CharacterLibrary


@lru_cache(maxsize=1)
def get_character_library() -> CharacterLibrary:
    """
    获取或创建CharacterLibrary的单例实例

    Get or create singleton CharacterLibrary instance.
    """
    return CharacterLibrary()


@lru_cache(maxsize=1)
def get_lore_index() -> LoreIndex:
    """
    获取或创建LoreIndex的单例实例

    Get or create singleton LoreIndex instance.
    """
    return LoreIndex(get_character_library())


async def get_current_index(index: LoreIndex = Depends(get_lore_index)) -> LoreIndex:
    """
    返回已刷新的索引；角色库不可用时转换为 HTTP 错误

    Return the index refreshed against the library cache. Library failures map
    to 503 (missing configuration) or 500, with a user-safe message.
    """
    try:
        return await index.refresh()
    except LibraryError as exc:
        status = 503 if is_library_config_error(exc) else 500
        raise HTTPException(status_code=status, detail=public_characters_error(exc)) from exc
