"""Loose-object store.

Objects live one per file under the repository's git directory, fanned out
by the first byte of their address::

    <gitdir>/objects/ab/cdef0123...   (2 + 38 hex characters)

Each file holds the zlib-compressed canonical form of the object.  The
store is append-only: an address, once written, is never rewritten, and a
second write of the same object is reported as ``ObjectAlreadyExists``.

There is no locking and no in-memory cache.  Every ``read`` goes back to
the filesystem, and a write interrupted mid-file leaves a corrupt fragment
that later reads report as ``DecompressionFailed`` or ``MalformedObject``.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from gitodb.codec import codec
from gitodb.codec.compression import DEFAULT_LEVEL, compress, decompress
from gitodb.codec.digest import is_hex_digest
from gitodb.objects.nodes import GitObject, ObjectType
from gitodb.store.errors import (
    InvalidAddress,
    NotAFile,
    ObjectAlreadyExists,
    ObjectNotFound,
    RepositoryError,
    UnexpectedObjectType,
)
from gitodb.store.repository import Repository

__all__ = ["ObjectStore"]

logger = logging.getLogger(__name__)

_OBJECTS_DIR = "objects"


class ObjectStore:
    """Content-addressed store of typed objects.

    Parameters
    ----------
    repository:
        The repository whose git directory holds the ``objects`` tree.
    compression_level:
        zlib level used when writing.  When None, the repository config is
        consulted (``core.loosecompression``, then ``core.compression``),
        falling back to level 1.

    Raises
    ------
    RepositoryError
        If the configured level is not an integer between -1 and 9.
    ValueError
        If an explicit ``compression_level`` is out of range.
    """

    def __init__(self, repository: Repository, compression_level: int | None = None) -> None:
        self.repository = repository
        if compression_level is None:
            compression_level = self._configured_level(repository)
        if not -1 <= compression_level <= 9:
            raise ValueError(f"Compression level must be between -1 and 9, got {compression_level}")
        self.compression_level = compression_level

    def __repr__(self) -> str:
        return f"ObjectStore({str(self.repository.path(_OBJECTS_DIR))!r})"

    @staticmethod
    def _configured_level(repository: Repository) -> int:
        config = repository.config
        for option in ("loosecompression", "compression"):
            if not config.has_option("core", option):
                continue
            try:
                level = config.getint("core", option)
            except ValueError as exc:
                raise RepositoryError(f"Invalid core.{option} in {repository.gitdir}: {exc}") from exc
            if not -1 <= level <= 9:
                raise RepositoryError(
                    f"Invalid core.{option} in {repository.gitdir}: {level} is not between -1 and 9"
                )
            return level
        return DEFAULT_LEVEL

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------

    def path_for(self, address: str) -> Path:
        """Return the fan-out path for ``address``.

        Raises
        ------
        InvalidAddress
            If ``address`` is not 40 lowercase hex characters.
        """
        if not is_hex_digest(address):
            raise InvalidAddress(address)
        return self.repository.path(_OBJECTS_DIR, address[:2], address[2:])

    def contains(self, address: str) -> bool:
        """Return True if an object file exists for ``address``."""
        return self.path_for(address).is_file()

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and is_hex_digest(address) and self.contains(address)

    def iter_addresses(self) -> Iterator[str]:
        """Yield the address of every loose object, sorted."""
        root = self.repository.path(_OBJECTS_DIR)
        if not root.is_dir():
            return
        for bucket in sorted(root.iterdir()):
            if not bucket.is_dir() or len(bucket.name) != 2:
                continue
            for entry in sorted(bucket.iterdir()):
                address = bucket.name + entry.name
                if entry.is_file() and is_hex_digest(address):
                    yield address

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def write(self, obj: GitObject) -> str:
        """Persist ``obj`` and return its address.

        Raises
        ------
        ObjectAlreadyExists
            If an object file already exists at the address.  The existing
            file is not modified.
        """
        address = codec.address(obj)
        path = self.path_for(address)
        if path.exists():
            raise ObjectAlreadyExists(address)

        self.repository.dir(_OBJECTS_DIR, address[:2], mkdir=True)
        payload = compress(codec.encode(obj), self.compression_level)
        try:
            with path.open("xb") as handle:
                handle.write(payload)
        except FileExistsError as exc:
            raise ObjectAlreadyExists(address) from exc

        logger.debug("Wrote %s %s (%d bytes compressed)", obj.type.value, address, len(payload))
        return address

    def hash_object(self, obj: GitObject, write: bool = False) -> str:
        """Return the address of ``obj``, storing it when ``write`` is True.

        Unlike :meth:`write`, an object that is already stored is not an
        error here.
        """
        address = codec.address(obj)
        if write and not self.contains(address):
            try:
                self.write(obj)
            except ObjectAlreadyExists:
                logger.debug("Object %s appeared while writing; keeping existing file", address)
        return address

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def read_raw(self, address: str) -> bytes:
        """Return the decompressed canonical bytes stored at ``address``.

        Raises
        ------
        ObjectNotFound
            If no object exists at the address.
        NotAFile
            If the object path is a directory.
        DecompressionFailed
            If the file is not a valid zlib stream.
        """
        path = self.path_for(address)
        if not path.exists():
            raise ObjectNotFound(address)
        if not path.is_file():
            raise NotAFile(address, path)
        return decompress(path.read_bytes())

    def read(self, address: str, expected: ObjectType | None = None) -> GitObject:
        """Load and parse the object at ``address``.

        Parameters
        ----------
        address:
            40-character hex address.
        expected:
            If given, the object must be of this type.

        Raises
        ------
        ObjectNotFound, NotAFile, DecompressionFailed
            See :meth:`read_raw`.
        MalformedObject
            If the canonical form fails its delimiter or length checks.
        UnknownType
            If the type tag is not a known object type.
        MalformedTree, MalformedCommit
            If the payload does not parse as its declared type.
        UnexpectedObjectType
            If ``expected`` is given and does not match.
        """
        type_name, payload = codec.decode(self.read_raw(address))
        if expected is not None and type_name != expected.value:
            raise UnexpectedObjectType(address, expected.value, type_name)
        obj = codec.build(type_name, payload)
        logger.debug("Read %s %s (%d bytes)", type_name, address, len(payload))
        return obj
