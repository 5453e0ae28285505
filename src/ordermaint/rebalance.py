from __future__ import annotations

import logging
from typing import Hashable, MutableMapping, TypeVar

from .model import DEFAULT_TAG_BITS, Position, Tag
from .thresholds import thresholds

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

Positions = MutableMapping[T, Position[T]]


def shares_prefix(tag: Tag, base_tag: Tag, mask: int) -> bool:
    return tag & ~mask == base_tag


def extend_backward(positions: Positions, front: T, first: T, base_tag: Tag, mask: int) -> tuple[T, int]:
    """Walk back from `first` while tags share the prefix, never stepping past `front`."""
    added = 0
    prev = positions[first].prev
    while first != front and shares_prefix(positions[prev].tag, base_tag, mask):
        first = prev
        prev = positions[first].prev
        added += 1
    return first, added


def extend_forward(positions: Positions, front: T, last: T, base_tag: Tag, mask: int) -> tuple[T, int]:
    """Walk forward from `last` while tags share the prefix, stopping before `front`."""
    added = 0
    nxt = positions[last].next
    while nxt != front and shares_prefix(positions[nxt].tag, base_tag, mask):
        last = nxt
        nxt = positions[last].next
        added += 1
    return last, added


def relabel(positions: Positions, first: T, last: T, base_tag: Tag, increment: int) -> None:
    item = first
    tag = base_tag
    while item != last:
        position = positions[item]
        position.tag = tag
        tag += increment
        item = position.next
    positions[last].tag = tag


def rebalance(positions: Positions, front: T, pivot: T, tag_bits: int = DEFAULT_TAG_BITS) -> int:
    """
    Spread tags over the smallest aligned segment around `pivot` that is sparse enough.

    The segment holds every member whose tag shares the pivot's high-order bits
    above the current mask. Each widening of the mask doubles the tag span and
    lowers the density threshold, so the segment eventually qualifies; a mask
    covering the whole tag space always does. Returns the number of tags rewritten.
    """
    base_tag = positions[pivot].tag
    first = last = pivot
    num_items = 1
    for width, threshold in enumerate(thresholds(len(positions), tag_bits)):
        mask = (1 << width) - 1
        base_tag &= ~mask

        first, added = extend_backward(positions, front, first, base_tag, mask)
        num_items += added
        last, added = extend_forward(positions, front, last, base_tag, mask)
        num_items += added

        increment = (mask + 1) // num_items
        if increment >= threshold or width == tag_bits:
            assert increment > 0, "more members than tags"
            relabel(positions, first, last, base_tag, increment)
            logger.debug(
                "rebalanced %d items around %r: %d-bit segment at %d, increment %d",
                num_items,
                pivot,
                width,
                base_tag,
                increment,
            )
            return num_items
    raise AssertionError("rebalance did not converge")
