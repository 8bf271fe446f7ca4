"""Type-specific payload parsers.

Exports the tree and commit parsers, their encoders, and the parse error
types.  Blob and tag payloads are opaque and need no parser.
"""
from __future__ import annotations

from gitodb.parser.commit import format_commit, parse_commit
from gitodb.parser.errors import MalformedCommit, MalformedTree, TruncatedTree
from gitodb.parser.tree import TreeParser, encode_tree, parse_tree

__all__ = [
    "TreeParser",
    "parse_tree",
    "encode_tree",
    "parse_commit",
    "format_commit",
    "MalformedTree",
    "TruncatedTree",
    "MalformedCommit",
]
