"""Reclaim - find the smallest directory worth deleting from a shell transcript."""

__version__ = "0.1.0"
