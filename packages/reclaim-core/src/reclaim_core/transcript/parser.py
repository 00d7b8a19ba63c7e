"""Tree builder: reads tokens with one-token lookahead and rebuilds the tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from reclaim_core.transcript.lexer import tokenize
from reclaim_core.transcript.models import (
    ChangeDirectory,
    ChangeToParent,
    DepthLimitExceeded,
    DirectoryEntry,
    FileEntry,
    ListDirectory,
    Malformed,
    PrematureEnd,
    Token,
    TokenMismatch,
    UnexpectedInContext,
    UnexpectedToken,
    UnknownChild,
)
from reclaim_core.tree.models import ROOT_NAME, Directory, join_path

logger = logging.getLogger(__name__)


class TranscriptParser:
    """Rebuilds a directory tree from a token stream.

    Every ``$ cd <name>`` must target a directory announced by a ``dir``
    entry in the listing currently open, and must be followed by ``$ ls``.
    Nesting is tracked on an explicit stack of open directories, so deep
    transcripts never hit the interpreter recursion limit.
    """

    def __init__(self, tokens: Iterable[Token], max_depth: int | None = None) -> None:
        self._tokens = iter(tokens)
        self.max_depth = max_depth
        self.previous: Token | None = None
        self.current: Token | None = None

    # ------------------------------------------------------------------
    # Lookahead
    # ------------------------------------------------------------------

    def advance(self) -> None:
        """Shift ``current`` into ``previous`` and pull the next token."""
        self.previous = self.current
        self.current = next(self._tokens, None)
        if isinstance(self.current, Malformed):
            raise UnexpectedToken(self.current)

    def consume(self, expected: Token) -> None:
        """Advance past ``current`` if it equals *expected*, else raise."""
        if self.current is None:
            raise PrematureEnd(expected)
        if self.current != expected:
            raise TokenMismatch(expected, self.current)
        self.advance()

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> Directory:
        """Parse a whole transcript, which must open with ``$ cd /``."""
        self.advance()
        self.consume(ChangeDirectory(ROOT_NAME))
        root = self._parse_directory(ROOT_NAME)
        if self.current is not None:
            logger.warning(
                "Left the root directory before the transcript ended; ignoring tokens from %r",
                self.current,
            )
        return root

    def _parse_directory(self, name: str) -> Directory:
        self.consume(ListDirectory())
        root = Directory(name)
        # Open directories, innermost last.
        stack: list[tuple[str, Directory]] = [(name, root)]

        while stack:
            path, directory = stack[-1]
            token = self.current

            if isinstance(token, DirectoryEntry):
                self.advance()
                directory.add_directory(Directory(token.name))
            elif isinstance(token, FileEntry):
                self.advance()
                directory.add_file(token.name, token.size)
            elif isinstance(token, ChangeDirectory):
                self.advance()
                if directory.get_directory(token.name) is None:
                    raise UnknownChild(token.name, path, token)
                depth = len(stack)
                if self.max_depth is not None and depth > self.max_depth:
                    raise DepthLimitExceeded(depth, self.max_depth, token)
                self.consume(ListDirectory())
                # A fresh listing replaces whatever the placeholder held.
                child = Directory(token.name)
                directory.directories[token.name] = child
                child_path = join_path(path, token.name)
                logger.debug("Entering %s", child_path)
                stack.append((child_path, child))
            elif isinstance(token, ChangeToParent):
                self.advance()
                stack.pop()
            elif token is None:
                break
            else:
                raise UnexpectedInContext(token, path)

        return root


def parse_transcript(text: str, max_depth: int | None = None) -> Directory:
    """Tokenize and parse *text* in one call."""
    return TranscriptParser(tokenize(text), max_depth=max_depth).parse()
