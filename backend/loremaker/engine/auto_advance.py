# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  自动轮播调度器 - 每隔固定时间触发一次回调，可取消、可重启，总是调用最新绑定的回调
  Auto-Advance Scheduler - fires a tick callback on a fixed interval; cancellable,
  restartable, and always dispatches to the most recently bound callback.

使用示例 / Usage:
    advance = create_auto_advance(len(slides), carousel.next)
    advance.schedule()
    ...
    advance.cancel()
"""

import asyncio
from typing import Any, Callable, Optional, Protocol

from loremaker.utils.logger import get_logger

logger = get_logger(__name__)

AUTO_ADVANCE_INTERVAL_MS = 60_000

TickCallback = Callable[[], Any]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    """Anything with ``call_later(delay_seconds, fn)``; an asyncio loop qualifies."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class AutoAdvance:
    """
    自动轮播计时器

    Re-arming one-shot timer. ``schedule()`` cancels any pending tick and arms a
    fresh one; each tick invokes the current callback and re-arms. ``cancel()``
    releases the pending tick. Both are idempotent.

    With fewer than two items to rotate, ``schedule()`` arms nothing.
    """

    def __init__(
        self,
        length: int,
        callback: Optional[TickCallback],
        interval_ms: int = AUTO_ADVANCE_INTERVAL_MS,
        timer: Optional[Timer] = None,
    ):
        self.length = length
        self.interval_ms = interval_ms
        self._callback = callback
        self._timer = timer
        self._handle: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def callback(self) -> Optional[TickCallback]:
        return self._callback

    @callback.setter
    def callback(self, callback: Optional[TickCallback]) -> None:
        self._callback = callback

    def bind(self, callback: Optional[TickCallback]) -> None:
        """Swap the tick callback; already-armed ticks will call the new one."""
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._handle is not None

    def _resolve_timer(self) -> Timer:
        if self._timer is None:
            # Requires a running loop; pass ``timer`` to schedule from sync code.
            self._timer = asyncio.get_running_loop()
        return self._timer

    def schedule(self) -> None:
        self.cancel()
        if self.length <= 1:
            return
        self._generation += 1
        generation = self._generation
        self._handle = self._resolve_timer().call_later(
            self.interval_ms / 1000,
            lambda: self._tick(generation),
        )
        logger.debug("Auto-advance armed: %d items, every %d ms", self.length, self.interval_ms)

    def cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        try:
            callback = self._callback
            if callback is not None:
                callback()
        finally:
            # A cancel() issued by the callback itself wins over re-arming.
            if generation == self._generation:
                self.schedule()

    def __enter__(self) -> "AutoAdvance":
        self.schedule()
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()


def create_auto_advance(
    length: int,
    callback: Optional[TickCallback],
    interval_ms: int = AUTO_ADVANCE_INTERVAL_MS,
    timer: Optional[Timer] = None,
) -> AutoAdvance:
    """Create an (unarmed) auto-advance scheduler; call ``schedule()`` to start."""
    return AutoAdvance(length, callback, interval_ms=interval_ms, timer=timer)
