"""Repository collaborator: locating, opening and creating a git directory.

The object store needs exactly two things from a repository: the root of
the git directory, to resolve object paths beneath it, and the INI config
file, for settings such as the loose-object compression level.  Both are
passed explicitly; nothing in the library depends on the process's current
directory except ``find_repository``, which takes its starting point as an
argument.
"""
from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Final

from gitodb.store.errors import RepositoryError

logger = logging.getLogger(__name__)

GIT_DIR: Final[str] = ".git"
SUPPORTED_FORMAT_VERSION: Final[int] = 0

_DESCRIPTION: Final[str] = (
    "Unnamed repository; edit this file 'description' to name the repository.\n"
)


def default_config() -> configparser.ConfigParser:
    """Return the config written into a freshly created repository."""
    config = configparser.ConfigParser()
    config.add_section("core")
    config.set("core", "repositoryformatversion", str(SUPPORTED_FORMAT_VERSION))
    config.set("core", "filemode", "false")
    config.set("core", "bare", "false")
    return config


class Repository:
    """A worktree and the git directory that belongs to it.

    Parameters
    ----------
    worktree:
        Directory holding the checked-out files.
    gitdir:
        The git directory; defaults to ``<worktree>/.git``.
    force:
        Skip the existence and format-version checks.  Used while creating
        a repository whose directories do not exist yet.

    Raises
    ------
    RepositoryError
        If the git directory is missing or declares an unsupported
        ``core.repositoryformatversion``.
    """

    def __init__(self, worktree: str | Path, gitdir: str | Path | None = None, force: bool = False) -> None:
        self.worktree = Path(worktree)
        self.gitdir = Path(gitdir) if gitdir is not None else self.worktree / GIT_DIR
        self._config: configparser.ConfigParser | None = None

        if force:
            return

        if not self.gitdir.is_dir():
            raise RepositoryError(f"Not a git repository: {self.worktree}")

        try:
            version = self.config.getint("core", "repositoryformatversion", fallback=SUPPORTED_FORMAT_VERSION)
        except ValueError as exc:
            raise RepositoryError(f"Invalid repositoryformatversion in {self.gitdir}: {exc}") from exc
        if version != SUPPORTED_FORMAT_VERSION:
            raise RepositoryError(f"Unsupported repositoryformatversion {version} in {self.gitdir}")

    def __repr__(self) -> str:
        return f"Repository({str(self.gitdir)!r})"

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> configparser.ConfigParser:
        """Return the parsed ``config`` file; empty if the file is absent."""
        if self._config is None:
            config = configparser.ConfigParser(strict=False, interpolation=None)
            config_path = self.path("config")
            if config_path.is_file():
                try:
                    config.read(config_path, encoding="utf-8")
                except configparser.Error as exc:
                    raise RepositoryError(f"Cannot parse {config_path}: {exc}") from exc
            self._config = config
        return self._config

    def write_config(self, config: configparser.ConfigParser) -> None:
        """Replace the repository config file with ``config``."""
        with self.file("config", mkdir=True).open("w", encoding="utf-8") as handle:
            config.write(handle)
        self._config = config

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def path(self, *parts: str) -> Path:
        """Return the path of ``parts`` under the git directory."""
        return self.gitdir.joinpath(*parts)

    def file(self, *parts: str, mkdir: bool = False) -> Path:
        """Return the path of a file under the git directory.

        When ``mkdir`` is True the file's parent directories are created.
        """
        if parts[:-1]:
            self.dir(*parts[:-1], mkdir=mkdir)
        return self.path(*parts)

    def dir(self, *parts: str, mkdir: bool = False) -> Path | None:
        """Return a directory under the git directory.

        Returns None if the directory does not exist and ``mkdir`` is False.

        Raises
        ------
        NotADirectoryError
            If the path exists but is not a directory.
        """
        path = self.path(*parts)
        if path.exists():
            if not path.is_dir():
                raise NotADirectoryError(f"Not a directory: {path}")
            return path
        if mkdir:
            path.mkdir(parents=True, exist_ok=True)
            return path
        return None

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, worktree: str | Path) -> "Repository":
        """Create a new repository at ``worktree``.

        Raises
        ------
        RepositoryError
            If ``worktree`` is not a directory or already holds a non-empty
            git directory.
        """
        repo = cls(worktree, force=True)

        if repo.worktree.exists():
            if not repo.worktree.is_dir():
                raise RepositoryError(f"{repo.worktree} is not a directory")
            if repo.gitdir.exists() and any(repo.gitdir.iterdir()):
                raise RepositoryError(f"{repo.gitdir} is not empty")
        else:
            repo.worktree.mkdir(parents=True)

        repo.dir("branches", mkdir=True)
        repo.dir("objects", mkdir=True)
        repo.dir("refs", "tags", mkdir=True)
        repo.dir("refs", "heads", mkdir=True)

        repo.file("description").write_text(_DESCRIPTION, encoding="utf-8")
        repo.file("HEAD").write_text("ref: refs/heads/master\n", encoding="utf-8")
        repo.write_config(default_config())

        logger.debug("Created repository at %s", repo.gitdir)
        return repo


def find_repository(start: str | Path = ".") -> Repository:
    """Return the repository whose worktree is ``start`` or its nearest ancestor.

    Raises
    ------
    RepositoryError
        If no ancestor of ``start`` contains a ``.git`` directory.
    """
    origin = Path(start).resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / GIT_DIR).is_dir():
            logger.debug("Found repository at %s", candidate)
            return Repository(candidate)
    raise RepositoryError(f"No git directory found in {origin} or any parent")
