"""Object model module.

Exports the typed object variants, their derived records, and the
serializer for rendering objects as JSON or YAML.
"""
from __future__ import annotations

from gitodb.objects.nodes import (
    TREE_MODE,
    Blob,
    Commit,
    CommitFields,
    GitObject,
    ObjectType,
    Tag,
    Tree,
    TreeEntry,
)
from gitodb.objects.serializer import ObjectSerializer

__all__ = [
    # Variants
    "GitObject",
    "Blob",
    "Tree",
    "Commit",
    "Tag",
    # Records and tags
    "ObjectType",
    "TreeEntry",
    "CommitFields",
    "TREE_MODE",
    # Serializer
    "ObjectSerializer",
]
