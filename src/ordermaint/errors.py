from __future__ import annotations


class OrderMaintenanceError(Exception):
    """Base class for all errors raised by :mod:`ordermaint`."""


class NotEmptyError(OrderMaintenanceError, ValueError):
    def __init__(self, size: int):
        super().__init__(f"insert_only needs an empty structure, it holds {size} elements")
        self.size = size


class NoSuchElementError(OrderMaintenanceError, KeyError):
    def __init__(self, value: object):
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"no such element: {self.value!r}"


class DuplicateElementError(OrderMaintenanceError, ValueError):
    def __init__(self, value: object):
        super().__init__(f"duplicate element: {value!r}")
        self.value = value


class TagSpaceExhaustedError(OrderMaintenanceError, OverflowError):
    def __init__(self, tag_bits: int):
        super().__init__(f"all {1 << tag_bits} tags of a {tag_bits}-bit tag space are in use")
        self.tag_bits = tag_bits


class InvariantViolation(OrderMaintenanceError, AssertionError):
    """Raised by the checkers in :mod:`ordermaint.verify` only."""
