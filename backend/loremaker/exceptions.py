# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  应用级异常层次 - 引擎本身是全函数（total），只有不变量被破坏时才抛出
  Application-level Exception Hierarchy. The engine is total: user-driven input
  never raises; only broken record invariants and ingest failures do.
"""

from typing import Optional

PUBLIC_AVAILABILITY_MESSAGE = "Character data is temporarily unavailable. Please try again soon."
GENERIC_LOAD_MESSAGE = "Unable to load characters. Please try again."


class LoreMakerError(Exception):
    """
    LoreMaker 业务错误的基类

    Base exception for all LoreMaker errors.
    """


class InvariantViolation(LoreMakerError):
    """
    记录不变量被破坏（程序错误，不做恢复）

    Raised when a record invariant is broken. This is a programmer error and
    is never recovered from.

    抛出时机：
    - 能力等级为负数 / Negative power level
    - 同一条目中出现重复角色 id / Duplicate member id inside an entry
    - 角色库中 id 或 slug 重复 / Duplicate id or slug across a library
    """


class LibraryError(LoreMakerError):
    """
    角色库加载失败

    Raised when the character library cannot be loaded.
    """

    def __init__(self, message: str, public_message: Optional[str] = None):
        super().__init__(message)
        self.public_message = public_message or PUBLIC_AVAILABILITY_MESSAGE


class LibraryConfigError(LibraryError):
    """Raised when no sheet id is configured."""

    code = "MISSING_SHEET_ID"


class SheetFormatError(LibraryError):
    """Raised when a sheet response is not a recognisable GViz payload."""


def is_library_config_error(error: object) -> bool:
    return isinstance(error, LibraryConfigError)


def public_characters_error(error: object) -> str:
    """
    将任意错误映射为可展示给用户的安全文案

    Map any error (or message) to a message that is safe to show users.
    Sheet configuration details never leak.
    """
    if isinstance(error, LibraryError):
        return error.public_message
    if not error:
        return GENERIC_LOAD_MESSAGE
    message = error if isinstance(error, str) else str(error)
    if not message:
        return GENERIC_LOAD_MESSAGE
    if "sheet_id" in message.lower():
        return PUBLIC_AVAILABILITY_MESSAGE
    return message
