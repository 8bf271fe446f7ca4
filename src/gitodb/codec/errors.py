"""Error types for the object codec and compression layer."""
from __future__ import annotations

from gitodb.errors import GitObjectError


class MalformedObject(GitObjectError, ValueError):
    """Raised when canonical object bytes fail delimiter or length checks.

    Parameters
    ----------
    reason:
        What was wrong with the bytes.
    offset:
        0-based byte offset where the problem was detected, if known.
    """

    def __init__(self, reason: str, offset: int | None = None) -> None:
        location = f" at byte {offset}" if offset is not None else ""
        super().__init__(f"Malformed object{location}: {reason}")
        self.reason = reason
        self.offset = offset


class UnknownType(GitObjectError, ValueError):
    """Raised when a canonical-form type tag names no known object type."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unknown object type {type_name!r}")
        self.type_name = type_name


class DecompressionFailed(GitObjectError):
    """Raised when stored bytes are not a valid zlib stream."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to decompress object data: {detail}")
        self.detail = detail
