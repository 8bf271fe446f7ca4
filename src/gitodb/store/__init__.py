"""Object store module.

Exports the ``ObjectStore``, the ``Repository`` collaborator it resolves
paths through, history traversal, and the store error types.
"""
from __future__ import annotations

from gitodb.store.errors import (
    InvalidAddress,
    NotAFile,
    ObjectAlreadyExists,
    ObjectNotFound,
    RepositoryError,
    UnexpectedObjectType,
)
from gitodb.store.history import is_ancestor, iter_history
from gitodb.store.repository import Repository, find_repository
from gitodb.store.store import ObjectStore

__all__ = [
    "ObjectStore",
    "Repository",
    "find_repository",
    "iter_history",
    "is_ancestor",
    "ObjectNotFound",
    "NotAFile",
    "ObjectAlreadyExists",
    "InvalidAddress",
    "UnexpectedObjectType",
    "RepositoryError",
]
