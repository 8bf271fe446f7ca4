"""Shared test fixtures for gitodb.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from gitodb.store import ObjectStore, Repository

AUTHOR = "Ada Lovelace <ada@example.com> 1700000000 +0000"


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "gitodb"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def repository(tmp_path: Path) -> Repository:
    """Return a freshly created repository under ``tmp_path``."""
    return Repository.create(tmp_path / "repo")


@pytest.fixture()
def store(repository: Repository) -> ObjectStore:
    """Return the object store of the ``repository`` fixture."""
    return ObjectStore(repository)


@pytest.fixture()
def author() -> str:
    """Return a fixed author line so commit addresses are reproducible."""
    return AUTHOR
