"""Transcript subsystem: tokenizer and tree builder."""

from reclaim_core.transcript.lexer import classify, tokenize
from reclaim_core.transcript.models import (
    ChangeDirectory,
    ChangeToParent,
    DepthLimitExceeded,
    DirectoryEntry,
    FileEntry,
    ListDirectory,
    Malformed,
    ParseError,
    PrematureEnd,
    Token,
    TokenMismatch,
    UnexpectedInContext,
    UnexpectedToken,
    UnknownChild,
)
from reclaim_core.transcript.parser import TranscriptParser, parse_transcript

__all__ = [
    "ChangeDirectory",
    "ChangeToParent",
    "DepthLimitExceeded",
    "DirectoryEntry",
    "FileEntry",
    "ListDirectory",
    "Malformed",
    "ParseError",
    "PrematureEnd",
    "Token",
    "TokenMismatch",
    "TranscriptParser",
    "UnexpectedInContext",
    "UnexpectedToken",
    "UnknownChild",
    "classify",
    "parse_transcript",
    "tokenize",
]
