"""zlib compression of canonical object bytes.

Loose objects are stored as a single zlib stream (RFC 1950 framing, not raw
deflate), which keeps the on-disk files readable by git itself.
"""
from __future__ import annotations

import zlib
from typing import Final

from gitodb.codec.errors import DecompressionFailed

DEFAULT_LEVEL: Final[int] = 1


def compress(data: bytes, level: int = DEFAULT_LEVEL) -> bytes:
    """Compress ``data`` into a zlib stream.

    Parameters
    ----------
    data:
        Canonical object bytes.
    level:
        zlib compression level, ``-1`` (library default) or ``0`` to ``9``.

    Raises
    ------
    ValueError
        If ``level`` is out of range.
    """
    if not -1 <= level <= 9:
        raise ValueError(f"Compression level must be between -1 and 9, got {level}")
    return zlib.compress(data, level)


def decompress(data: bytes) -> bytes:
    """Inflate a zlib stream produced by :func:`compress`.

    Trailing bytes after the end of the stream are treated as corruption.

    Raises
    ------
    DecompressionFailed
        If ``data`` is not a complete, valid zlib stream.
    """
    inflater = zlib.decompressobj()
    try:
        result = inflater.decompress(data)
        result += inflater.flush()
    except zlib.error as exc:
        raise DecompressionFailed(str(exc)) from exc
    if not inflater.eof:
        raise DecompressionFailed("stream ended before the end-of-data marker")
    if inflater.unused_data:
        raise DecompressionFailed(f"{len(inflater.unused_data)} trailing byte(s) after stream")
    return result
