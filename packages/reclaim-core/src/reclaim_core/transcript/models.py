"""Token and error models for the transcript subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ChangeDirectory:
    """``$ cd <name>``: enter a named child directory."""

    name: str
    line: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class ChangeToParent:
    """``$ cd ..``: go back up one level."""

    line: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class ListDirectory:
    """``$ ls``: a listing of the current directory follows."""

    line: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class DirectoryEntry:
    """``dir <name>`` inside a listing."""

    name: str
    line: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class FileEntry:
    """``<size> <name>`` inside a listing."""

    name: str
    size: int
    line: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Malformed:
    """A non-blank line matching none of the known shapes."""

    raw_line: str
    line: int = field(default=0, compare=False, repr=False)


Token = Union[
    ChangeDirectory,
    ChangeToParent,
    ListDirectory,
    DirectoryEntry,
    FileEntry,
    Malformed,
]


def _where(token: Token | None) -> str:
    if token is None or not token.line:
        return ""
    return f" (line {token.line})"


class ParseError(Exception):
    """Base class for every failure raised while building a tree."""

    def __init__(self, message: str, token: Token | None = None) -> None:
        self.token = token
        super().__init__(f"{message}{_where(token)}")


class UnexpectedToken(ParseError):
    """The tokenizer produced a line it could not classify."""

    def __init__(self, token: Malformed) -> None:
        super().__init__(f"Unrecognized line {token.raw_line!r}", token)


class TokenMismatch(ParseError):
    """``consume`` found a different token than the one it required."""

    def __init__(self, expected: Token, actual: Token) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected!r}, but was {actual!r}", actual)


class PrematureEnd(ParseError):
    """The transcript ended while a token was still required."""

    def __init__(self, expected: Token) -> None:
        self.expected = expected
        super().__init__(f"Transcript ended, expected {expected!r}")


class UnknownChild(ParseError):
    """``cd`` into a directory the current listing never announced."""

    def __init__(self, name: str, directory: str, token: Token | None = None) -> None:
        self.name = name
        self.directory = directory
        super().__init__(
            f"Cannot enter {name!r}: no 'dir {name}' entry listed in {directory!r}",
            token,
        )


class UnexpectedInContext(ParseError):
    """A valid token showed up where a directory listing cannot take it."""

    def __init__(self, token: Token, directory: str) -> None:
        self.directory = directory
        super().__init__(f"Unexpected {token!r} while reading {directory!r}", token)


class DepthLimitExceeded(ParseError):
    """Directory nesting went deeper than the configured limit."""

    def __init__(self, depth: int, limit: int, token: Token | None = None) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(f"Nesting depth {depth} exceeds limit of {limit}", token)
