"""Canonical object encoding, decoding and addressing.

The canonical form of an object is::

    <type-name> SP <decimal payload length> NUL <payload>

It is what gets hashed to produce the object's address and what gets
compressed onto disk.  ``decode`` validates it strictly: the declared
length must match the bytes that follow the ``NUL`` exactly, which is the
primary corruption check on the read path.
"""
from __future__ import annotations

from typing import Final

from gitodb.codec.digest import digest
from gitodb.codec.errors import MalformedObject, UnknownType
from gitodb.objects.nodes import Blob, Commit, GitObject, ObjectType, Tag, Tree

_SPACE: Final[int] = 0x20
_NUL: Final[int] = 0x00

_VARIANTS: Final[dict[str, type[GitObject]]] = {
    ObjectType.BLOB.value: Blob,
    ObjectType.TREE.value: Tree,
    ObjectType.COMMIT.value: Commit,
    ObjectType.TAG.value: Tag,
}


def encode(obj: GitObject) -> bytes:
    """Return the canonical form of ``obj``.

    Pure function; performs no I/O.
    """
    header = f"{obj.type.value} {len(obj.data)}".encode("ascii")
    return header + b"\x00" + obj.data


def decode(raw: bytes) -> tuple[str, bytes]:
    """Split canonical bytes into ``(type_name, payload)``.

    Parameters
    ----------
    raw:
        Decompressed canonical object bytes.

    Returns
    -------
    tuple[str, bytes]
        The type tag as text and the un-prefixed payload.  The tag is not
        checked against the known types here; see :func:`build`.

    Raises
    ------
    MalformedObject
        If the type/length space or the length/payload ``NUL`` is missing,
        the length is not a decimal number, or the payload is not exactly
        as long as declared.
    """
    space = raw.find(_SPACE)
    if space == -1:
        raise MalformedObject("missing space after type name")

    nul = raw.find(_NUL, space + 1)
    if nul == -1:
        raise MalformedObject("missing NUL after payload length", space + 1)

    try:
        type_name = raw[:space].decode("ascii")
    except UnicodeDecodeError as exc:
        raise MalformedObject("type name is not ASCII", 0) from exc

    digits = raw[space + 1:nul]
    if not digits or not digits.isdigit():
        raise MalformedObject(f"payload length {digits!r} is not a decimal number", space + 1)

    declared = int(digits)
    actual = len(raw) - (nul + 1)
    if declared != actual:
        raise MalformedObject(
            f"declared payload length {declared} but found {actual} byte(s)", nul + 1
        )

    return type_name, raw[nul + 1:]


def build(type_name: str, payload: bytes) -> GitObject:
    """Construct the typed object for ``type_name`` from its payload.

    Raises
    ------
    UnknownType
        If ``type_name`` is not ``blob``, ``tree``, ``commit`` or ``tag``.
    gitodb.parser.MalformedTree
        If a tree payload is malformed.
    gitodb.parser.MalformedCommit
        If a commit payload is malformed.
    """
    variant = _VARIANTS.get(type_name)
    if variant is None:
        raise UnknownType(type_name)
    return variant(payload)


def parse(raw: bytes) -> GitObject:
    """Decode canonical bytes and build the typed object in one step."""
    return build(*decode(raw))


def address(obj: GitObject) -> str:
    """Return the object's address: the hex digest of its canonical form."""
    return digest(encode(obj))
