from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)

Tag = int

DEFAULT_TAG_BITS = 64
MIN_TAG_BITS = 3


def max_tag(tag_bits: int) -> Tag:
    return (1 << tag_bits) - 1


def capacity(tag_bits: int) -> int:
    # one distinct tag per member
    return 1 << tag_bits


@dataclass(slots=True)
class Position(Generic[T]):
    prev: T
    next: T
    tag: Tag


@dataclass(slots=True)
class RebalanceStats:
    rebalances: int = 0
    relabeled: int = 0

    def record(self, num_items: int) -> None:
        self.rebalances += 1
        self.relabeled += num_items


@dataclass(frozen=True, slots=True)
class DebugState:
    op: str
    value: object
    size: int
    rebalanced: int = 0

    def __str__(self) -> str:
        extra = f", rebalanced {self.rebalanced}" if self.rebalanced else ""
        return f"<{self.op} {self.value!r}, size {self.size}{extra}>"
