"""Directory tree model."""

from reclaim_core.tree.models import (
    ROOT_NAME,
    Directory,
    directory_sizes,
    join_path,
    sized_nodes,
)

__all__ = ["ROOT_NAME", "Directory", "directory_sizes", "join_path", "sized_nodes"]
