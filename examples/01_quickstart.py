#!/usr/bin/env python3
"""Example: Quickstart for gitodb

Minimal working example: create a repository, store a blob, a tree and
two commits, read them back, and walk the history.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install gitodb
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import gitodb
from gitodb.objects import Blob, Commit, Tree, TreeEntry

AUTHOR = "Ada Lovelace <ada@example.com> 1700000000 +0000"


def main() -> None:
    print(f"gitodb version: {gitodb.__version__}")

    with tempfile.TemporaryDirectory() as tmp:
        # Step 1: Create a repository and open its object store
        gitodb.init(Path(tmp) / "project")
        store = gitodb.open_store(Path(tmp) / "project")

        # Step 2: Store a blob; CRLF line endings are normalized on ingestion
        blob_address = store.write(Blob.from_worktree(b"hello\r\nworld\r\n"))
        print(f"blob   {blob_address}")

        # Step 3: Store a tree holding that blob
        entry = TreeEntry(mode="100644", name=b"hello.txt", hash=bytes.fromhex(blob_address))
        tree_address = store.write(Tree.from_entries([entry], sort=True))
        print(f"tree   {tree_address}")

        # Step 4: Store two commits, the second on top of the first
        root = store.write(Commit.create(tree=tree_address, author=AUTHOR, message="Initial commit"))
        head = store.write(
            Commit.create(tree=tree_address, parents=[root], author=AUTHOR, message="Second commit")
        )
        print(f"commit {head}")

        # Step 5: Read an object back as its typed variant
        tree = store.read(tree_address)
        print(f"Read back: {tree!r}")

        # Step 6: Walk the history
        for address, commit in gitodb.history(store, head):
            print(f"  {address[:10]} {commit.summary}")


if __name__ == "__main__":
    main()
