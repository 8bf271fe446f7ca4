"""CLI package.

The ``cli`` sub-package contains the Click application and all command
implementations.  Commands are thin: they resolve a repository, call the
store, and render results with Rich.
"""
from __future__ import annotations
