"""Typed object variants stored in the object database.

Every object is a frozen dataclass holding its raw payload in ``data``.
The payload is the single source of truth: the derived views (tree
entries, commit fields) are computed once at construction, cached beside
the payload and excluded from equality, so two objects compare equal
exactly when their canonical forms are equal.

The variant set is closed: ``GitObject`` is the union of ``Blob``,
``Tree``, ``Commit`` and ``Tag``, and code that dispatches on it is
expected to handle all four.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


# ---------------------------------------------------------------------------
# Object type tags
# ---------------------------------------------------------------------------


class ObjectType(Enum):
    """Type tag written in front of every canonical object."""

    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"
    TAG = "tag"

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the on-disk spelling of every type tag."""
        return tuple(member.value for member in cls)


TREE_MODE = "40000"

# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """One ``(mode, name, hash)`` triple inside a tree payload.

    Parameters
    ----------
    mode:
        ASCII octal file mode, e.g. ``"100644"`` or ``"40000"``.
    name:
        Raw path segment bytes; never contains ``NUL`` or ``/``.
    hash:
        20-byte binary digest of the referenced object.
    """

    mode: str
    name: bytes
    hash: bytes

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.path} {self.hex})"

    @property
    def hex(self) -> str:
        """Return the referenced object's address as hex."""
        return self.hash.hex()

    @property
    def path(self) -> str:
        """Return ``name`` decoded as UTF-8, keeping undecodable bytes."""
        return self.name.decode("utf-8", errors="surrogateescape")

    @property
    def is_tree(self) -> bool:
        """Return True if this entry points at a subtree."""
        return self.mode == TREE_MODE

    @property
    def object_type(self) -> ObjectType:
        """Return the type of object this entry is expected to reference."""
        if self.is_tree:
            return ObjectType.TREE
        if self.mode == "160000":
            return ObjectType.COMMIT
        return ObjectType.BLOB

    def sort_key(self) -> bytes:
        """Return git's canonical ordering key for this entry."""
        return self.name + b"/" if self.is_tree else self.name


@dataclass(frozen=True, slots=True)
class CommitFields:
    """Fields projected from a commit header and body.

    Parameters
    ----------
    tree:
        Hex address of the root tree, ``""`` when absent.
    parents:
        Parent commit addresses in encounter order.
    author:
        Identity and timestamp of the author, ``""`` when absent.
    committer:
        Identity and timestamp of the committer, ``""`` when absent.
    gpgsig:
        Signature block captured verbatim, or ``None``.
    message:
        Commit message with trailing whitespace removed.
    headers:
        Every folded ``(key, value)`` pair in first-seen order.
    """

    tree: str
    parents: tuple[str, ...]
    author: str
    committer: str
    gpgsig: str | None
    message: str
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, key: str) -> str | None:
        """Return the folded value for ``key``, or None if it was absent."""
        for name, value in self.headers:
            if name == key:
                return value
        return None

    @property
    def is_merge(self) -> bool:
        """Return True when the commit has more than one parent."""
        return len(self.parents) > 1


# ---------------------------------------------------------------------------
# Object variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Blob:
    """Opaque file contents."""

    type: ClassVar[ObjectType] = ObjectType.BLOB

    data: bytes

    def __repr__(self) -> str:
        return f"Blob(size={len(self.data)})"

    @classmethod
    def from_worktree(cls, data: bytes) -> "Blob":
        """Build a blob from working-tree bytes, normalizing CRLF to LF.

        The normalization happens once at ingestion and is never undone
        when the blob is read back.
        """
        return cls(data.replace(b"\r\n", b"\n"))

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class Tree:
    """A directory listing: an ordered sequence of ``TreeEntry`` records.

    Construction parses ``data``; a malformed payload raises
    ``gitodb.parser.MalformedTree`` (or its ``TruncatedTree`` subclass)
    and no object is produced.
    """

    type: ClassVar[ObjectType] = ObjectType.TREE

    data: bytes
    entries: tuple[TreeEntry, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        from gitodb.parser.tree import parse_tree

        object.__setattr__(self, "entries", parse_tree(self.data))

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"

    @classmethod
    def from_entries(cls, entries: Iterable[TreeEntry], sort: bool = False) -> "Tree":
        """Build a tree from entries.

        Parameters
        ----------
        entries:
            Entries in the order they should be written.
        sort:
            When True, order entries the way git does before encoding, which
            is required for addresses to match those git computes.
        """
        from gitodb.parser.tree import encode_tree

        return cls(encode_tree(entries, sort=sort))

    @property
    def size(self) -> int:
        return len(self.data)

    def get(self, name: str | bytes) -> TreeEntry | None:
        """Return the entry called ``name``, or None."""
        raw = name.encode("utf-8", errors="surrogateescape") if isinstance(name, str) else name
        for entry in self.entries:
            if entry.name == raw:
                return entry
        return None


@dataclass(frozen=True, slots=True)
class Commit:
    """A snapshot record pointing at a tree and zero or more parents.

    Construction parses ``data``; a payload without a header/body separator
    raises ``gitodb.parser.MalformedCommit``.
    """

    type: ClassVar[ObjectType] = ObjectType.COMMIT

    data: bytes
    fields: CommitFields = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        from gitodb.parser.commit import parse_commit

        object.__setattr__(self, "fields", parse_commit(self.data))

    def __repr__(self) -> str:
        return f"Commit(tree={self.tree!r}, parents={len(self.parents)}, summary={self.summary!r})"

    @classmethod
    def create(
        cls,
        tree: str,
        parents: Iterable[str] = (),
        author: str = "",
        committer: str | None = None,
        message: str = "",
        extra_headers: Iterable[tuple[str, str]] = (),
    ) -> "Commit":
        """Format and parse a new commit.

        ``committer`` defaults to ``author``.
        """
        from gitodb.parser.commit import format_commit

        return cls(
            format_commit(
                tree=tree,
                parents=parents,
                author=author,
                committer=author if committer is None else committer,
                message=message,
                extra_headers=extra_headers,
            )
        )

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def tree(self) -> str:
        return self.fields.tree

    @property
    def parents(self) -> tuple[str, ...]:
        return self.fields.parents

    @property
    def author(self) -> str:
        return self.fields.author

    @property
    def committer(self) -> str:
        return self.fields.committer

    @property
    def gpgsig(self) -> str | None:
        return self.fields.gpgsig

    @property
    def message(self) -> str:
        return self.fields.message

    @property
    def summary(self) -> str:
        """Return the first line of the message."""
        return self.fields.message.split("\n", 1)[0]

    @property
    def is_merge(self) -> bool:
        return self.fields.is_merge


@dataclass(frozen=True, slots=True)
class Tag:
    """An annotated tag. The payload is kept opaque."""

    type: ClassVar[ObjectType] = ObjectType.TAG

    data: bytes

    def __repr__(self) -> str:
        return f"Tag(size={len(self.data)})"

    @property
    def size(self) -> int:
        return len(self.data)


GitObject = Union[Blob, Tree, Commit, Tag]

