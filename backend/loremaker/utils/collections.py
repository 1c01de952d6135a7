"""
Sequence helpers for loosely-typed record fields.
"""

from typing import Any, Callable, Hashable, Iterable, List, TypeVar

T = TypeVar("T")


def normalise_array(value: Any) -> List[Any]:
    """
    将任意值规范为列表：None -> []，字符串 -> [去空白后的字符串]，假值元素被丢弃

    Coerce a loose value into a list. ``None`` becomes ``[]``, a string becomes a
    one-item list (empty strings vanish) and falsy items are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        trimmed = value.strip()
        return [trimmed] if trimmed else []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item]
    return [value]


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Drop items whose key was already seen, keeping first-seen order."""
    seen = set()
    result: List[T] = []
    for item in items:
        marker = key(item)
        if marker in seen:
            continue
        seen.add(marker)
        result.append(item)
    return result
