"""Reclaim Core - rebuild a directory tree from a shell transcript and size it."""

from reclaim_core.capacity import (
    CapacityError,
    ReclaimResult,
    find_deletion_candidate,
    smallest_deletion_size,
    total_size_at_most,
)
from reclaim_core.config import ReclaimConfig, load_config
from reclaim_core.transcript import ParseError, TranscriptParser, parse_transcript, tokenize
from reclaim_core.tree import Directory, directory_sizes

__version__ = "0.1.0"

__all__ = [
    "CapacityError",
    "Directory",
    "ParseError",
    "ReclaimConfig",
    "ReclaimResult",
    "TranscriptParser",
    "directory_sizes",
    "find_deletion_candidate",
    "load_config",
    "parse_transcript",
    "smallest_deletion_size",
    "tokenize",
    "total_size_at_most",
]
