"""Commit history traversal.

Walks commit ancestry breadth-first from one or more starting addresses,
emitting every reachable commit exactly once.  A visited set keyed by
address stops the walk from re-exploring shared ancestors in merge
("diamond") histories and from looping on cyclic parent data.

Parents are read lazily: a parent that is not a commit is only detected
when the walk reaches it.
"""
from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from typing import cast

from gitodb.objects.nodes import Commit, ObjectType
from gitodb.store.store import ObjectStore

logger = logging.getLogger(__name__)


def iter_history(store: ObjectStore, *starts: str) -> Iterator[tuple[str, Commit]]:
    """Yield ``(address, commit)`` for every commit reachable from ``starts``.

    The first parent of each commit is queued ahead of the others, so a
    linear history comes out newest first.

    Raises
    ------
    UnexpectedObjectType
        If a start address or a parent does not refer to a commit.
    ObjectNotFound
        If a start address or a parent is missing from the store.
    """
    pending: deque[str] = deque(starts)
    visited: set[str] = set()

    while pending:
        address = pending.popleft()
        if address in visited:
            continue
        visited.add(address)

        commit = cast(Commit, store.read(address, expected=ObjectType.COMMIT))
        logger.debug("Visited commit %s (%d parent(s))", address, len(commit.parents))
        yield address, commit

        pending.extend(parent for parent in commit.parents if parent not in visited)


def is_ancestor(store: ObjectStore, commit: str, maybe_ancestor: str) -> bool:
    """Return True if ``maybe_ancestor`` is reachable from ``commit``."""
    return any(address == maybe_ancestor for address, _ in iter_history(store, commit))
