from __future__ import annotations

from typing import Optional

from .model import Tag

LESS = -1
EQUAL = 0
GREATER = 1


def compare_tags(one: Optional[Tag], other: Optional[Tag]) -> Optional[int]:
    # None when either side is not a member
    if one is None or other is None:
        return None
    if one < other:
        return LESS
    if one > other:
        return GREATER
    return EQUAL
