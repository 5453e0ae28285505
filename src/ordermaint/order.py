from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Callable, Generic, Hashable, Iterator, Optional, TypeVar

from .errors import DuplicateElementError, NoSuchElementError, NotEmptyError, TagSpaceExhaustedError
from .model import DEFAULT_TAG_BITS, DebugState, Position, RebalanceStats, Tag, capacity, max_tag
from .ordering import compare_tags
from .rebalance import rebalance
from .thresholds import check_tag_bits
from .verify import check_structure

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

DebugHook = Callable[[DebugState], None]


class OrderMaintenance(Generic[T]):
    """
    Elements kept in a total order with O(1) comparison.

    Every member carries an integer tag whose order matches the list order.
    Inserting takes the tag just above its predecessor; when no free tag is
    left, a segment around the new element is relabeled (see
    :func:`ordermaint.rebalance.rebalance`). Tags are internal and change
    across rebalances: only their relative order is meaningful.

    Members form a ring of prev/next links anchored at ``front``, the member
    with the smallest tag.
    """

    def __init__(
        self,
        *,
        tag_bits: int = DEFAULT_TAG_BITS,
        verify: bool = False,
        debug_hook: Optional[DebugHook] = None,
    ):
        self._tag_bits = check_tag_bits(tag_bits)
        self._max_tag = max_tag(tag_bits)
        self._verify = verify
        self._debug_hook = debug_hook
        self._positions: dict[T, Position[T]] = {}
        self._front: Optional[T] = None
        self.stats = RebalanceStats()

    @property
    def tag_bits(self) -> int:
        return self._tag_bits

    @property
    def front(self) -> Optional[T]:
        return self._front

    def __len__(self) -> int:
        return len(self._positions)

    def __bool__(self) -> bool:
        return bool(self._positions)

    def __contains__(self, value: object) -> bool:
        return value in self._positions

    def __iter__(self) -> Iterator[T]:
        for value, _tag in self.iter_values_with_tags():
            yield value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def tag_of(self, value: T) -> Optional[Tag]:
        position = self._positions.get(value)
        return position.tag if position is not None else None

    def iter_values_with_tags(self) -> Iterator[tuple[T, Tag]]:
        first = self._front
        if first is None:
            return
        current = first
        while True:
            position = self._positions[current]
            yield current, position.tag
            current = position.next
            if current == first:
                return

    def compare(self, a: T, b: T) -> Optional[int]:
        """Three-way compare by position: -1, 0 or 1, or None if either is not a member."""
        return compare_tags(self.tag_of(a), self.tag_of(b))

    def sort_key(self) -> Callable[[T], object]:
        def cmp(one: T, other: T) -> int:
            res = self.compare(one, other)
            if res is None:
                missing = one if one not in self._positions else other
                raise NoSuchElementError(missing)
            return res

        return cmp_to_key(cmp)

    def insert_only(self, value: T) -> None:
        if self._positions:
            raise NotEmptyError(len(self._positions))
        self._positions[value] = Position(prev=value, next=value, tag=0)
        self._front = value
        self._after_mutation("insert_only", value)

    def insert_after(self, after: T, value: T) -> None:
        prev_position = self._positions.get(after)
        if prev_position is None:
            raise NoSuchElementError(after)
        if value in self._positions:
            raise DuplicateElementError(value)
        if len(self._positions) >= capacity(self._tag_bits):
            raise TagSpaceExhaustedError(self._tag_bits)

        prev_tag = prev_position.tag
        nxt = prev_position.next
        next_position = self._positions[nxt]
        next_tag = next_position.tag
        # clamped, not wrapped: a saturated predecessor forces a rebalance below
        tag = min(prev_tag + 1, self._max_tag)

        self._positions[value] = Position(prev=after, next=nxt, tag=tag)
        prev_position.next = value
        next_position.prev = value

        rebalanced = 0
        if tag == prev_tag or tag == next_tag:
            rebalanced = rebalance(self._positions, self._front, value, self._tag_bits)
            self.stats.record(rebalanced)
        self._after_mutation("insert_after", value, rebalanced)

    def remove(self, value: T) -> bool:
        position = self._positions.pop(value, None)
        if position is None:
            return False
        if position.next == value:
            self._front = None
        else:
            self._positions[position.prev].next = position.next
            self._positions[position.next].prev = position.prev
            if self._front == value:
                self._front = position.next
        self._after_mutation("remove", value)
        return True

    def verify(self) -> None:
        check_structure(self._positions, self._front, self._tag_bits)

    def debug(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("om: %s", list(self.iter_values_with_tags()))

    def _after_mutation(self, op: str, value: T, rebalanced: int = 0) -> None:
        if self._verify:
            self.verify()
        if self._debug_hook is not None:
            self._debug_hook(DebugState(op=op, value=value, size=len(self._positions), rebalanced=rebalanced))
