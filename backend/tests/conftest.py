"""Pytest configuration for LoreMaker backend tests."""
import heapq
import itertools
import json
import random
import sys
from pathlib import Path

import pytest

# Ensure the backend package is importable
backend_root = Path(__file__).resolve().parent.parent
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

from loremaker.schemas.character import Character  # noqa: E402


def make_character(id: str = "c1", **fields) -> Character:
    """Character with sensible defaults; ``fields`` use snake_case names."""
    fields.setdefault("name", id.replace("-", " ").title())
    fields.setdefault("slug", id)
    return Character(id=id, **fields)


def gviz_text(cols, rows) -> str:
    """A GViz response body with one labelled column per ``cols`` entry."""
    payload = {
        "table": {
            "cols": [{"label": label} for label in cols],
            "rows": [{"c": [None if value is None else {"v": value} for value in row]} for row in rows],
        }
    }
    return "/*O_o*/\ngoogle.visualization.Query.setResponse(" + json.dumps(payload) + ");"


class FixedRandom(random.Random):
    """Random whose ``random()`` always returns the same value."""

    def __init__(self, value: float = 0.5):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class _Handle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTimer:
    """Virtual clock implementing ``call_later``; time only moves via ``advance_ms``.

    Time is kept in whole milliseconds.
    """

    def __init__(self):
        self.now = 0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay, callback):
        handle = _Handle()
        heapq.heappush(self._queue, (self.now + round(delay * 1000), next(self._seq), callback, handle))
        return handle

    @property
    def pending(self):
        return sum(1 for *_, handle in self._queue if not handle.cancelled)

    def advance_ms(self, ms):
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            when, _, callback, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = when
            callback()
        self.now = target


@pytest.fixture
def manual_timer():
    return ManualTimer()
