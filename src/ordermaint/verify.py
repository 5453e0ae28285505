from __future__ import annotations

from typing import Hashable, Mapping, Optional, TypeVar

from .errors import InvariantViolation
from .model import Position, Tag, max_tag

T = TypeVar("T", bound=Hashable)


def check_ring_integrity(positions: Mapping[T, Position[T]], front: Optional[T]) -> None:
    """Following `next` from front visits every member once; `prev` mirrors it."""
    if front is None:
        if positions:
            raise InvariantViolation(f"{len(positions)} positions but no front")
        return
    if front not in positions:
        raise InvariantViolation(f"front {front!r} not in positions")

    value = front
    num_seen = 0
    while True:
        num_seen += 1
        if num_seen > len(positions):
            raise InvariantViolation("ring does not return to front")
        nxt = positions[value].next
        next_position = positions.get(nxt)
        if next_position is None:
            raise InvariantViolation(f"{value!r} links to missing element {nxt!r}")
        if next_position.prev != value:
            raise InvariantViolation(f"prev of {nxt!r} is {next_position.prev!r}, expected {value!r}")
        if nxt == front:
            break
        value = nxt
    if num_seen != len(positions):
        raise InvariantViolation(f"ring holds {num_seen} of {len(positions)} positions")


def check_tag_order(
    positions: Mapping[T, Position[T]],
    front: Optional[T],
    tag_bits: Optional[int] = None,
) -> None:
    """Tags strictly increase walking forward from front and fit the tag space."""
    if front is None:
        return
    top = max_tag(tag_bits) if tag_bits is not None else None
    previous: Optional[Tag] = None
    value = front
    for _ in range(len(positions)):
        tag = positions[value].tag
        if tag < 0:
            raise InvariantViolation(f"negative tag {tag} at {value!r}")
        if top is not None and tag > top:
            raise InvariantViolation(f"tag {tag} of {value!r} exceeds {top}")
        if previous is not None and not previous < tag:
            raise InvariantViolation(f"tag {tag} of {value!r} does not follow {previous}")
        previous = tag
        value = positions[value].next


def check_structure(
    positions: Mapping[T, Position[T]],
    front: Optional[T],
    tag_bits: Optional[int] = None,
) -> None:
    check_ring_integrity(positions, front)
    check_tag_order(positions, front, tag_bits)
