"""Commit payload parser and formatter.

A commit payload is a header block and a free-text body separated by the
first blank line::

    tree <hex>
    parent <hex>            (zero or more)
    author <identity> <timestamp>
    committer <identity> <timestamp>
    gpgsig -----BEGIN PGP SIGNATURE-----
     <continuation lines>
     -----END PGP SIGNATURE-----

    <message>

Parsing steps
-------------
1. Split once on the first ``\\n\\n`` into header and body.
2. Split the header once on ``\\ngpgsig``; whatever follows the marker is
   the signature, kept verbatim.
3. Split the remaining header on ``\\n`` only (one trailing ``\\r`` per
   line is dropped) and fold the lines into key/value pairs.  Lines without a
   space are skipped.  Repeated ``parent`` lines accumulate in order; any
   other repeated key keeps its last value.
4. Project the well-known fields, defaulting missing ones to ``""``.
5. Trim trailing whitespace from the body to get the message.

The parser only fails when the header/body separator is missing.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from gitodb.objects.nodes import CommitFields
from gitodb.parser.errors import MalformedCommit

_SEPARATOR: Final[str] = "\n\n"
_SIGNATURE_MARKER: Final[str] = "\ngpgsig"
_MULTI_VALUED: Final[frozenset[str]] = frozenset({"parent"})


def _fold_header(lines: Iterable[str]) -> dict[str, str]:
    """Fold ``key value`` lines into a mapping in first-seen key order."""
    folded: dict[str, str] = {}
    for line in lines:
        key, space, value = line.partition(" ")
        if not space:
            continue
        if key in _MULTI_VALUED and key in folded:
            folded[key] = f"{folded[key]} {value}"
        else:
            folded[key] = value
    return folded


def parse_commit(data: bytes) -> CommitFields:
    """Parse a commit payload.

    Parameters
    ----------
    data:
        The un-prefixed commit payload.  Bytes that are not valid UTF-8
        are replaced in the parsed fields; ``data`` itself is untouched.

    Returns
    -------
    CommitFields
        The projected header fields and message.

    Raises
    ------
    MalformedCommit
        If the payload contains no blank line separating header and body.
    """
    text = data.decode("utf-8", errors="replace")

    header, separator, body = text.partition(_SEPARATOR)
    if not separator:
        raise MalformedCommit("no blank line between header and message")

    header, marker, signature = header.partition(_SIGNATURE_MARKER)
    gpgsig = signature if marker else None

    # Lines end at LF only; other line-break characters are value text.
    folded = _fold_header(line.removesuffix("\r") for line in header.split("\n"))

    return CommitFields(
        tree=folded.get("tree", ""),
        parents=tuple(token for token in folded.get("parent", "").split(" ") if token),
        author=folded.get("author", ""),
        committer=folded.get("committer", ""),
        gpgsig=gpgsig,
        message=body.rstrip(),
        headers=tuple(folded.items()),
    )


def format_commit(
    tree: str,
    parents: Iterable[str],
    author: str,
    committer: str,
    message: str,
    extra_headers: Iterable[tuple[str, str]] = (),
) -> bytes:
    """Render a commit payload that ``parse_commit`` reads back unchanged.

    Header order is ``tree``, each ``parent``, ``author``, ``committer``,
    then ``extra_headers``.  The message is followed by a single newline.

    Raises
    ------
    ValueError
        If a header key is empty or contains a space, or any header value
        contains a newline.
    """
    headers: list[tuple[str, str]] = [("tree", tree)]
    headers.extend(("parent", parent) for parent in parents)
    headers.append(("author", author))
    headers.append(("committer", committer))
    headers.extend(extra_headers)

    lines: list[str] = []
    for key, value in headers:
        if not key or " " in key or "\n" in key:
            raise ValueError(f"Invalid commit header key {key!r}")
        if "\n" in value:
            raise ValueError(f"Commit header {key!r} must be a single line")
        lines.append(f"{key} {value}")

    return ("\n".join(lines) + _SEPARATOR + message.rstrip() + "\n").encode("utf-8")
