"""Result and error models for capacity queries."""

from __future__ import annotations

from dataclasses import dataclass


class CapacityError(Exception):
    """Base class for failures of the deletion search."""


class OversizedTree(CapacityError):
    """The tree reports more used space than the disk holds."""

    def __init__(self, used: int, capacity: int) -> None:
        self.used = used
        self.capacity = capacity
        super().__init__(f"Tree uses {used} bytes but the disk only holds {capacity}")


class NoCandidate(CapacityError):
    """No directory is large enough to free the space needed."""

    def __init__(self, needed: int) -> None:
        self.needed = needed
        super().__init__(f"No directory frees at least {needed} bytes")


@dataclass(frozen=True)
class ReclaimResult:
    """Outcome of a deletion search.

    ``path`` is None and ``size`` is 0 when the disk already has enough
    free space and nothing needs deleting.
    """

    size: int
    path: str | None
    used: int
    unused: int
    needed: int

    @property
    def noop(self) -> bool:
        return self.path is None
