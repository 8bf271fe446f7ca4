"""Tree payload parser and encoder.

A tree payload is a run of entries with no count header and no separators
beyond each entry's own terminators::

    <mode digits> SP <name bytes> NUL <20-byte hash>

The parser is a single left-to-right byte scan.  It repeats the triple
until the cursor lands exactly on the end of the payload; an entry cut
short anywhere raises ``TruncatedTree``.

Entries are returned in on-disk order.  No canonical ordering is enforced
when parsing; ``encode_tree(..., sort=True)`` applies git's ordering when
writing.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from gitodb.codec.digest import DIGEST_SIZE
from gitodb.objects.nodes import TreeEntry
from gitodb.parser.errors import MalformedTree, TruncatedTree

_SPACE: Final[int] = 0x20
_NUL: Final[int] = 0x00


class TreeParser:
    """Cursor-based scanner over one tree payload.

    Parameters
    ----------
    data:
        The un-prefixed tree payload.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data: bytes = data
        self._pos: int = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self) -> tuple[TreeEntry, ...]:
        """Scan the whole payload and return its entries.

        Raises
        ------
        TruncatedTree
            If the payload ends in the middle of an entry.
        MalformedTree
            If an entry's mode is empty or not ASCII digits.
        """
        entries: list[TreeEntry] = []
        while self._pos < len(self._data):
            entries.append(self._scan_entry())
        return tuple(entries)

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _read_until(self, terminator: int, what: str) -> bytes:
        """Consume bytes up to ``terminator`` and skip the terminator itself."""
        end = self._data.find(terminator, self._pos)
        if end == -1:
            raise TruncatedTree(f"{what} is not terminated before end of payload", self._pos)
        value = self._data[self._pos:end]
        self._pos = end + 1
        return value

    def _scan_entry(self) -> TreeEntry:
        start = self._pos
        mode = self._read_until(_SPACE, "mode")
        if not mode or not mode.isdigit():
            raise MalformedTree(f"invalid mode {mode!r}", start)

        name = self._read_until(_NUL, "name")

        remaining = len(self._data) - self._pos
        if remaining < DIGEST_SIZE:
            raise TruncatedTree(
                f"expected {DIGEST_SIZE}-byte hash, found {remaining} byte(s)", self._pos
            )
        digest = self._data[self._pos:self._pos + DIGEST_SIZE]
        self._pos += DIGEST_SIZE

        return TreeEntry(mode=mode.decode("ascii"), name=name, hash=digest)


def parse_tree(data: bytes) -> tuple[TreeEntry, ...]:
    """Parse a tree payload into its ordered entries.

    Convenience wrapper around ``TreeParser(data).parse()``.
    """
    return TreeParser(data).parse()


def encode_tree(entries: Iterable[TreeEntry], sort: bool = False) -> bytes:
    """Serialize entries into a tree payload.

    Parameters
    ----------
    entries:
        Entries to write.
    sort:
        When True, order entries by git's rule: raw name bytes, with
        subtrees compared as though their name ended in ``/``.

    Raises
    ------
    ValueError
        If an entry has a non-digit mode, a name containing ``NUL`` or a
        hash that is not exactly 20 bytes.
    """
    items = list(entries)
    if sort:
        items.sort(key=TreeEntry.sort_key)

    chunks: list[bytes] = []
    for entry in items:
        if not entry.mode or not entry.mode.isascii() or not entry.mode.isdigit():
            raise ValueError(f"Tree entry mode must be ASCII digits, got {entry.mode!r}")
        if b"\x00" in entry.name:
            raise ValueError(f"Tree entry name must not contain NUL: {entry.name!r}")
        if len(entry.hash) != DIGEST_SIZE:
            raise ValueError(
                f"Tree entry hash must be {DIGEST_SIZE} bytes, got {len(entry.hash)} for {entry.name!r}"
            )
        chunks.append(entry.mode.encode("ascii") + b" " + entry.name + b"\x00" + entry.hash)
    return b"".join(chunks)
