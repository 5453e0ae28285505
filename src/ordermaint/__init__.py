from .order import OrderMaintenance, DebugHook
from .model import DebugState, RebalanceStats, Tag
from .errors import (
    OrderMaintenanceError,
    NotEmptyError,
    NoSuchElementError,
    DuplicateElementError,
    TagSpaceExhaustedError,
    InvariantViolation,
)

__all__ = [
    "OrderMaintenance",
    "DebugHook",
    "DebugState",
    "RebalanceStats",
    "Tag",
    "OrderMaintenanceError",
    "NotEmptyError",
    "NoSuchElementError",
    "DuplicateElementError",
    "TagSpaceExhaustedError",
    "InvariantViolation",
]
