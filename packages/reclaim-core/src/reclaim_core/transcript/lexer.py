"""Line classifier that turns a transcript into a stream of tokens."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from reclaim_core.transcript.models import (
    ChangeDirectory,
    ChangeToParent,
    DirectoryEntry,
    FileEntry,
    ListDirectory,
    Malformed,
    Token,
)

logger = logging.getLogger(__name__)

_LIST = "$ ls"
_CD_PARENT = "$ cd .."
_CD_RE = re.compile(r"\$ cd (.+)")
_DIR_RE = re.compile(r"dir (.+)")
_FILE_RE = re.compile(r"([0-9]+) (.+)")


def classify(line: str, lineno: int = 0) -> Token:
    """Classify a single non-blank transcript line."""
    if line == _LIST:
        return ListDirectory(line=lineno)
    if line == _CD_PARENT:
        return ChangeToParent(line=lineno)
    if m := _CD_RE.fullmatch(line):
        return ChangeDirectory(m.group(1), line=lineno)
    if m := _DIR_RE.fullmatch(line):
        return DirectoryEntry(m.group(1), line=lineno)
    if m := _FILE_RE.fullmatch(line):
        try:
            size = int(m.group(1))
        except ValueError:
            # Past the interpreter's digit limit for int().
            return Malformed(line, line=lineno)
        return FileEntry(m.group(2), size, line=lineno)
    return Malformed(line, line=lineno)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily yield one token per non-blank line of *text*.

    Blank and whitespace-only lines are skipped. Lines that match no known
    shape come through as ``Malformed`` so the parser decides what to do.
    """
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip("\r")
        if not line.strip():
            continue
        token = classify(line, lineno)
        if isinstance(token, Malformed):
            logger.debug("Unrecognized line %d: %r", lineno, line)
        yield token
