"""Unit tests for gitodb.store.history."""
from __future__ import annotations

import pytest

from gitodb.codec import compress, encode
from gitodb.objects import Blob, Commit, Tree
from gitodb.store import ObjectNotFound, ObjectStore, UnexpectedObjectType, is_ancestor, iter_history

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def _commit(store: ObjectStore, author: str, message: str, *parents: str) -> str:
    return store.write(Commit.create(tree=EMPTY_TREE, parents=parents, author=author, message=message))


def _summaries(store: ObjectStore, *starts: str) -> list[str]:
    return [commit.summary for _, commit in iter_history(store, *starts)]


class TestLinearHistory:
    def test_single_root(self, store: ObjectStore, author: str) -> None:
        root = _commit(store, author, "root")
        assert list(iter_history(store, root)) == [(root, store.read(root))]

    def test_newest_first(self, store: ObjectStore, author: str) -> None:
        first = _commit(store, author, "first")
        second = _commit(store, author, "second", first)
        third = _commit(store, author, "third", second)
        assert _summaries(store, third) == ["third", "second", "first"]

    def test_lazy(self, store: ObjectStore, author: str) -> None:
        root = _commit(store, author, "root")
        head = _commit(store, author, "head", root)
        walker = iter_history(store, head)
        assert next(walker)[0] == head

    def test_no_starts(self, store: ObjectStore) -> None:
        assert list(iter_history(store)) == []


class TestMergeHistory:
    def test_diamond_visits_shared_ancestor_once(self, store: ObjectStore, author: str) -> None:
        base = _commit(store, author, "base")
        left = _commit(store, author, "left", base)
        right = _commit(store, author, "right", base)
        merge = _commit(store, author, "merge", left, right)

        visited = [address for address, _ in iter_history(store, merge)]
        assert visited.count(base) == 1
        assert visited == [merge, left, right, base]

    def test_first_parent_queued_first(self, store: ObjectStore, author: str) -> None:
        a = _commit(store, author, "a")
        b = _commit(store, author, "b")
        merge = _commit(store, author, "merge", b, a)
        assert _summaries(store, merge) == ["merge", "b", "a"]

    def test_duplicate_starts(self, store: ObjectStore, author: str) -> None:
        root = _commit(store, author, "root")
        head = _commit(store, author, "head", root)
        assert _summaries(store, head, root, head) == ["head", "root"]

    def test_cycle_terminates(self, store: ObjectStore, author: str) -> None:
        # Content addressing cannot produce a cycle, so plant the objects by hand.
        first, second = "1" * 40, "2" * 40
        for address, parent in ((first, second), (second, first)):
            commit = Commit.create(tree=EMPTY_TREE, parents=[parent], author=author, message=address[:1])
            path = store.path_for(address)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(compress(encode(commit)))

        assert [address for address, _ in iter_history(store, first)] == [first, second]


class TestHistoryErrors:
    def test_missing_start(self, store: ObjectStore) -> None:
        with pytest.raises(ObjectNotFound):
            list(iter_history(store, "0" * 40))

    def test_start_is_not_a_commit(self, store: ObjectStore) -> None:
        blob = store.write(Blob(b"hello\n"))
        with pytest.raises(UnexpectedObjectType):
            list(iter_history(store, blob))

    def test_parent_is_not_a_commit(self, store: ObjectStore, author: str) -> None:
        tree = store.write(Tree(b""))
        head = _commit(store, author, "head", tree)
        walker = iter_history(store, head)
        assert next(walker)[0] == head
        with pytest.raises(UnexpectedObjectType):
            next(walker)

    def test_missing_parent(self, store: ObjectStore, author: str) -> None:
        head = _commit(store, author, "head", "f" * 40)
        with pytest.raises(ObjectNotFound):
            list(iter_history(store, head))


class TestIsAncestor:
    def test_ancestor(self, store: ObjectStore, author: str) -> None:
        root = _commit(store, author, "root")
        head = _commit(store, author, "head", root)
        assert is_ancestor(store, head, root)
        assert not is_ancestor(store, root, head)

    def test_commit_is_its_own_ancestor(self, store: ObjectStore, author: str) -> None:
        root = _commit(store, author, "root")
        assert is_ancestor(store, root, root)
