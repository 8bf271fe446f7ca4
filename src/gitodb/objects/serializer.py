"""Render typed objects as plain dicts, JSON and YAML.

The canonical form is the only round-trip format for objects; this module
is for inspection (``cat-file --format json``) and carries no
deserialization path.

Usage
-----
::

    from gitodb.objects.serializer import ObjectSerializer

    serializer = ObjectSerializer()
    data = serializer.to_dict(commit)
    json_text = serializer.to_json(commit)
    yaml_text = serializer.to_yaml(tree)
"""
from __future__ import annotations

import json

import yaml

from gitodb.objects.nodes import Blob, Commit, GitObject, Tag, Tree, TreeEntry


class ObjectSerializer:
    """Converts typed objects into JSON-compatible dicts.

    Every dict has a ``"kind"`` discriminator naming the object type.
    Byte payloads are rendered as UTF-8 text with undecodable bytes
    replaced.
    """

    def to_dict(self, obj: GitObject) -> dict[str, object]:
        """Serialize any object variant to a dict."""
        if isinstance(obj, Blob):
            return self._opaque_to_dict(obj.type.value, obj.data)
        if isinstance(obj, Tree):
            return {
                "kind": "tree",
                "size": obj.size,
                "entries": [self._entry_to_dict(e) for e in obj.entries],
            }
        if isinstance(obj, Commit):
            return self._commit_to_dict(obj)
        if isinstance(obj, Tag):
            return self._opaque_to_dict(obj.type.value, obj.data)
        raise TypeError(f"Cannot serialize {type(obj).__name__}")

    def _opaque_to_dict(self, kind: str, data: bytes) -> dict[str, object]:
        return {
            "kind": kind,
            "size": len(data),
            "content": data.decode("utf-8", errors="replace"),
        }

    def _entry_to_dict(self, entry: TreeEntry) -> dict[str, object]:
        return {
            "mode": entry.mode,
            "type": entry.object_type.value,
            "hash": entry.hex,
            "name": entry.name.decode("utf-8", errors="replace"),
        }

    def _commit_to_dict(self, commit: Commit) -> dict[str, object]:
        return {
            "kind": "commit",
            "size": commit.size,
            "tree": commit.tree,
            "parents": list(commit.parents),
            "author": commit.author,
            "committer": commit.committer,
            "gpgsig": commit.gpgsig,
            "message": commit.message,
        }

    def to_json(self, obj: GitObject, indent: int | None = 2) -> str:
        """Serialize an object to a JSON string."""
        return json.dumps(self.to_dict(obj), indent=indent, ensure_ascii=False)

    def to_yaml(self, obj: GitObject) -> str:
        """Serialize an object to a YAML string."""
        return yaml.dump(self.to_dict(obj), default_flow_style=False, allow_unicode=True, sort_keys=False)
