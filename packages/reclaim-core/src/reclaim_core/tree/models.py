"""Directory tree rebuilt from a transcript."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

ROOT_NAME = "/"


def join_path(parent: str, name: str) -> str:
    """Join a child name onto an absolute ``/``-separated parent path."""
    return f"{parent.rstrip('/')}/{name}"


@dataclass
class Directory:
    """A directory node: its own files plus its immediate subdirectories.

    Sizes are never cached. ``size()`` walks the subtree every time it is
    called, so a node always reports the sum of what it currently holds.
    """

    name: str
    files: dict[str, int] = field(default_factory=dict)
    directories: dict[str, Directory] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_file(self, name: str, size: int) -> None:
        """Record a file, replacing any earlier file with the same name."""
        if size < 0:
            raise ValueError(f"File size must be non-negative, got {size} for {name!r}")
        previous = self.files.get(name)
        if previous is not None and previous != size:
            logger.warning(
                "File %r in %r listed twice (%d then %d), keeping the last",
                name, self.name, previous, size,
            )
        self.files[name] = size

    def add_directory(self, directory: Directory) -> Directory:
        """Attach *directory* under its own name, replacing any earlier one."""
        if directory.name in self.directories:
            logger.warning(
                "Directory %r in %r listed twice, keeping the last", directory.name, self.name
            )
        self.directories[directory.name] = directory
        return directory

    def get_directory(self, name: str) -> Directory | None:
        return self.directories.get(name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def size(self) -> int:
        """Total size of every file in this subtree."""
        total = 0
        stack: list[Directory] = [self]
        while stack:
            node = stack.pop()
            total += sum(node.files.values())
            stack.extend(node.directories.values())
        return total

    def walk(self, path: str = ROOT_NAME) -> Iterator[tuple[str, Directory]]:
        """Yield ``(path, node)`` depth-first, this node first.

        Children are visited in the order they were listed.
        """
        stack: list[tuple[str, Directory]] = [(path, self)]
        while stack:
            node_path, node = stack.pop()
            yield node_path, node
            for child in reversed(list(node.directories.values())):
                stack.append((join_path(node_path, child.name), child))

    def depth(self) -> int:
        """Deepest nesting level below this node (a leaf directory is 0)."""
        deepest = 0
        stack: list[tuple[int, Directory]] = [(0, self)]
        while stack:
            level, node = stack.pop()
            deepest = max(deepest, level)
            stack.extend((level + 1, child) for child in node.directories.values())
        return deepest

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Nested dict form; ``size`` is informational and ignored on load."""
        # Names may contain "/", so paths are not unique keys.
        sizes = {id(node): size for _, node, size in sized_nodes(self)}
        out: dict = {}
        stack: list[tuple[Directory, dict]] = [(self, out)]
        while stack:
            node, target = stack.pop()
            target["name"] = node.name
            target["size"] = sizes[id(node)]
            target["files"] = dict(node.files)
            target["directories"] = {}
            for name, child in node.directories.items():
                child_out: dict = {}
                target["directories"][name] = child_out
                stack.append((child, child_out))
        return out

    @classmethod
    def from_dict(cls, data: dict) -> Directory:
        root = cls(name=data["name"])
        stack: list[tuple[dict, Directory]] = [(data, root)]
        while stack:
            raw, node = stack.pop()
            for fname, fsize in raw.get("files", {}).items():
                node.add_file(fname, int(fsize))
            for dname, child_raw in raw.get("directories", {}).items():
                child = node.add_directory(cls(name=dname))
                stack.append((child_raw, child))
        return root

    def to_json(self) -> str:
        """Serialize the tree to a JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, data: str) -> Directory:
        """Deserialize a tree from a JSON string."""
        return cls.from_dict(json.loads(data))

    def save(self, path: Path) -> None:
        """Write the tree to a JSON file."""
        path.write_text(self.to_json())

    @classmethod
    def load(cls, path: Path) -> Directory:
        """Read a tree from a JSON file."""
        return cls.from_json(path.read_text())


def directory_sizes(root: Directory, path: str = ROOT_NAME) -> list[tuple[str, int]]:
    """Size of every directory under *root*, in ``walk()`` order.

    One post-order pass over the tree; each value equals what ``size()``
    would return for that node.
    """
    return [(node_path, size) for node_path, _, size in sized_nodes(root, path)]


def sized_nodes(root: Directory, path: str = ROOT_NAME) -> list[tuple[str, Directory, int]]:
    """Like ``directory_sizes`` but keeps each node next to its path and size."""
    order = _preorder(root, path)
    sizes = [sum(node.files.values()) for _, node, _ in order]
    for i in range(len(order) - 1, 0, -1):
        sizes[order[i][2]] += sizes[i]
    return [(node_path, node, sizes[i]) for i, (node_path, node, _) in enumerate(order)]


def _preorder(root: Directory, path: str) -> list[tuple[str, Directory, int]]:
    """Flatten the tree to ``(path, node, parent_index)``; parents precede children."""
    order: list[tuple[str, Directory, int]] = []
    stack: list[tuple[str, Directory, int]] = [(path, root, -1)]
    while stack:
        node_path, node, parent = stack.pop()
        index = len(order)
        order.append((node_path, node, parent))
        for child in reversed(list(node.directories.values())):
            stack.append((join_path(node_path, child.name), child, index))
    return order
