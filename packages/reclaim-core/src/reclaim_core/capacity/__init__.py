"""Capacity queries over a rebuilt directory tree."""

from reclaim_core.capacity.models import (
    CapacityError,
    NoCandidate,
    OversizedTree,
    ReclaimResult,
)
from reclaim_core.capacity.search import (
    DEFAULT_CAPACITY,
    DEFAULT_REQUIRED_FREE,
    DEFAULT_SMALL_DIR_LIMIT,
    find_deletion_candidate,
    smallest_deletion_size,
    total_size_at_most,
)

__all__ = [
    "CapacityError",
    "DEFAULT_CAPACITY",
    "DEFAULT_REQUIRED_FREE",
    "DEFAULT_SMALL_DIR_LIMIT",
    "NoCandidate",
    "OversizedTree",
    "ReclaimResult",
    "find_deletion_candidate",
    "smallest_deletion_size",
    "total_size_at_most",
]
