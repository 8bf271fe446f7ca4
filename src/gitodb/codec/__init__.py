"""Object codec module.

Exports canonical encoding and decoding, addressing, the compression and
digest primitives, and the codec error types.
"""
from __future__ import annotations

from gitodb.codec.codec import address, build, decode, encode, parse
from gitodb.codec.compression import DEFAULT_LEVEL, compress, decompress
from gitodb.codec.digest import DIGEST_SIZE, digest, is_hex_digest, raw_digest
from gitodb.codec.errors import DecompressionFailed, MalformedObject, UnknownType

__all__ = [
    # Canonical form
    "encode",
    "decode",
    "build",
    "parse",
    "address",
    # Compression
    "compress",
    "decompress",
    "DEFAULT_LEVEL",
    # Digest
    "digest",
    "raw_digest",
    "is_hex_digest",
    "DIGEST_SIZE",
    # Errors
    "MalformedObject",
    "UnknownType",
    "DecompressionFailed",
]
