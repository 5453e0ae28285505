from __future__ import annotations

import math
from typing import Iterator

from .model import DEFAULT_TAG_BITS, MIN_TAG_BITS

INITIAL_THRESHOLD = 1.0


def check_tag_bits(tag_bits: int) -> int:
    if not isinstance(tag_bits, int) or isinstance(tag_bits, bool):
        raise TypeError("tag_bits must be an int")
    if tag_bits < MIN_TAG_BITS:
        raise ValueError(f"tag_bits must be at least {MIN_TAG_BITS}")
    return tag_bits


def density_multiplier(total: int, tag_bits: int = DEFAULT_TAG_BITS) -> float:
    """
    Factor applied to the density threshold each time the rebalance mask widens.

    After tag_bits - 2 widenings the threshold has dropped to
    2^(tag_bits - 2) / (2 * total), which a segment holding every member
    within a span of 2^(tag_bits - 2) tags already meets.
    """
    if total < 1:
        raise ValueError("total must be positive")
    return 2.0 / math.pow(2.0 * total, 1.0 / (tag_bits - 2))


def thresholds(total: int, tag_bits: int = DEFAULT_TAG_BITS) -> Iterator[float]:
    """Yield the threshold for mask widths 0, 1, ... tag_bits."""
    multiplier = density_multiplier(total, tag_bits)
    threshold = INITIAL_THRESHOLD
    for _ in range(tag_bits + 1):
        yield threshold
        threshold *= multiplier
