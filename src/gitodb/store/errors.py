"""Error types for the object store and its repository collaborator."""
from __future__ import annotations

from pathlib import Path

from gitodb.errors import GitObjectError


class ObjectNotFound(GitObjectError, KeyError):
    """Raised when no object file exists for an address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Object does not exist: {address}")
        self.address = address

    # KeyError quotes its argument in str(); keep the plain message.
    def __str__(self) -> str:
        return self.message


class NotAFile(GitObjectError):
    """Raised when an object path exists but is not a regular file."""

    def __init__(self, address: str, path: Path) -> None:
        super().__init__(f"Object is not a file: {address} ({path})")
        self.address = address
        self.path = path


class ObjectAlreadyExists(GitObjectError):
    """Raised when writing an object whose file is already present.

    The existing file is left untouched.
    """

    def __init__(self, address: str) -> None:
        super().__init__(f"Object already exists: {address}")
        self.address = address


class InvalidAddress(GitObjectError, ValueError):
    """Raised when an address is not 40 lowercase hex characters."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"Invalid object address {address[:50]!r}: expected 40 lowercase hex characters"
        )
        self.address = address


class UnexpectedObjectType(GitObjectError, TypeError):
    """Raised when an object is not of the type the caller required."""

    def __init__(self, address: str, expected: str, found: str) -> None:
        super().__init__(f"Expected {expected} object at {address}, found {found}")
        self.address = address
        self.expected = expected
        self.found = found


class RepositoryError(GitObjectError):
    """Raised when a repository cannot be located, opened or created."""
