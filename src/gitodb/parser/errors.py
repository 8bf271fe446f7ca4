"""Error types for the type-specific payload parsers.

Parse errors carry the byte offset at which the payload stopped making
sense, so callers can point at the exact corruption.
"""
from __future__ import annotations

from gitodb.errors import GitObjectError


class MalformedTree(GitObjectError, ValueError):
    """Raised when a tree payload is not a sequence of valid entries.

    Parameters
    ----------
    reason:
        What was expected at ``offset``.
    offset:
        0-based byte offset into the payload.
    """

    def __init__(self, reason: str, offset: int) -> None:
        super().__init__(f"Malformed tree at byte {offset}: {reason}")
        self.reason = reason
        self.offset = offset


class TruncatedTree(MalformedTree):
    """Raised when a tree payload ends in the middle of an entry."""


class MalformedCommit(GitObjectError, ValueError):
    """Raised when a commit payload has no blank line between header and body."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Malformed commit: {reason}")
        self.reason = reason
