"""Root of the gitodb error hierarchy.

Concrete error types live beside the component that raises them:

- ``gitodb.codec.errors``: canonical-form and compression failures
- ``gitodb.parser.errors``: tree and commit payload failures
- ``gitodb.store.errors``: filesystem state of the object store

Catching ``GitObjectError`` handles every failure the library reports.
"""
from __future__ import annotations


class GitObjectError(Exception):
    """Base class for all errors raised by gitodb.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
