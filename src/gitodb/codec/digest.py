"""SHA-1 fingerprints of canonical object bytes."""
from __future__ import annotations

import hashlib
import re
from typing import Final

DIGEST_SIZE: Final[int] = 20

_HEX_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9a-f]{40}")


def digest(data: bytes) -> str:
    """Return the lowercase hex SHA-1 digest of ``data``."""
    return hashlib.sha1(data).hexdigest()


def raw_digest(data: bytes) -> bytes:
    """Return the 20-byte binary SHA-1 digest of ``data``."""
    return hashlib.sha1(data).digest()


def is_hex_digest(value: str) -> bool:
    """Return True if ``value`` is a 40-character lowercase hex digest."""
    return _HEX_PATTERN.fullmatch(value) is not None
