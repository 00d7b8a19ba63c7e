"""Search for the smallest directory whose removal frees enough space."""

from __future__ import annotations

import logging

from reclaim_core.capacity.models import NoCandidate, OversizedTree, ReclaimResult
from reclaim_core.tree.models import Directory, directory_sizes

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 70_000_000
DEFAULT_REQUIRED_FREE = 30_000_000
DEFAULT_SMALL_DIR_LIMIT = 100_000


def _check_inputs(capacity: int, required_free: int) -> None:
    if capacity < 0:
        raise ValueError(f"capacity must be non-negative, got {capacity}")
    if required_free < 0:
        raise ValueError(f"required_free must be non-negative, got {required_free}")
    if required_free > capacity:
        raise ValueError(
            f"required_free ({required_free}) cannot exceed capacity ({capacity})"
        )


def find_deletion_candidate(
    root: Directory,
    capacity: int = DEFAULT_CAPACITY,
    required_free: int = DEFAULT_REQUIRED_FREE,
) -> ReclaimResult:
    """Find the smallest directory that frees at least the missing space.

    Every directory is a candidate, the root included. Raises
    ``OversizedTree`` when the tree does not fit on the disk and
    ``NoCandidate`` when nothing is large enough.
    """
    _check_inputs(capacity, required_free)

    sizes = directory_sizes(root)
    used = sizes[0][1]
    if used > capacity:
        raise OversizedTree(used, capacity)

    unused = capacity - used
    needed = required_free - unused
    if needed <= 0:
        logger.debug("%d bytes already free, nothing to delete", unused)
        return ReclaimResult(size=0, path=None, used=used, unused=unused, needed=needed)

    candidates = [(size, path) for path, size in sizes if size >= needed]
    if not candidates:
        raise NoCandidate(needed)

    size, path = min(candidates, key=lambda c: c[0])
    logger.debug(
        "%d of %d directories free at least %d bytes; smallest is %s",
        len(candidates), len(sizes), needed, path,
    )
    return ReclaimResult(size=size, path=path, used=used, unused=unused, needed=needed)


def smallest_deletion_size(
    root: Directory,
    capacity: int = DEFAULT_CAPACITY,
    required_free: int = DEFAULT_REQUIRED_FREE,
) -> int:
    """Size of the directory to delete, or 0 if nothing needs deleting."""
    return find_deletion_candidate(root, capacity, required_free).size


def total_size_at_most(root: Directory, limit: int = DEFAULT_SMALL_DIR_LIMIT) -> int:
    """Sum the sizes of every directory no larger than *limit*.

    Nested qualifying directories are counted once for themselves and again
    inside each qualifying ancestor.
    """
    return sum(size for _, size in directory_sizes(root) if size <= limit)
