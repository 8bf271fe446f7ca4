"""gitodb: a content-addressable object store in git's loose-object format.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import gitodb
    from gitodb.objects import Blob, Commit

    repo = gitodb.init("project")
    store = gitodb.open_store("project")

    blob_address = store.write(Blob.from_worktree(b"hello\\r\\n"))
    obj = store.read(blob_address)

    for address, commit in gitodb.history(store, head):
        print(address, commit.summary)

    gitodb.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from gitodb.objects.nodes import Commit, GitObject
    from gitodb.store.repository import Repository
    from gitodb.store.store import ObjectStore


def init(path: str | Path = ".") -> "Repository":
    """Create a new repository at ``path``.

    Raises
    ------
    gitodb.store.RepositoryError
        If ``path`` already holds a non-empty git directory.
    """
    from gitodb.store.repository import Repository

    return Repository.create(path)


def open_store(path: str | Path = ".", compression_level: int | None = None) -> "ObjectStore":
    """Open the object store of the repository containing ``path``.

    Parameters
    ----------
    path:
        A directory inside the worktree; parents are searched for ``.git``.
    compression_level:
        Overrides the zlib level taken from the repository config.
    """
    from gitodb.store.repository import find_repository
    from gitodb.store.store import ObjectStore

    return ObjectStore(find_repository(path), compression_level=compression_level)


def hash_object(obj: "GitObject") -> str:
    """Return the address of ``obj`` without storing it."""
    from gitodb.codec.codec import address

    return address(obj)


def history(store: "ObjectStore", *starts: str) -> Iterator[tuple[str, "Commit"]]:
    """Walk commit ancestry from ``starts``, yielding each commit once."""
    from gitodb.store.history import iter_history

    return iter_history(store, *starts)


__all__ = [
    "__version__",
    "init",
    "open_store",
    "hash_object",
    "history",
]
