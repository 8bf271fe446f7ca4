"""CLI entry point for gitodb.

Invoked as::

    gitodb [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m gitodb.cli.main

Commands
--------
init          Create an empty repository
hash-object   Compute an object address from a file, optionally storing it
cat-file      Show the type, size or content of a stored object
ls-tree       List the entries of a tree object
log           Walk commit history from an address
commit-tree   Write a commit object for a tree
decompress    Inflate a loose object file and print its canonical bytes
version       Show version information
"""
from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn, cast

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from gitodb.errors import GitObjectError
from gitodb.objects.nodes import ObjectType

if TYPE_CHECKING:
    from gitodb.objects.nodes import GitObject
    from gitodb.store.store import ObjectStore

console = Console()
err_console = Console(stderr=True)

_DEFAULT_IDENTITY = "gitodb <gitodb@localhost>"


def _fail(message: str) -> NoReturn:
    """Print an error on stderr and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    sys.exit(1)


def _open_store(ctx: click.Context) -> "ObjectStore":
    """Locate the repository for this invocation, exiting if there is none."""
    from gitodb.store import ObjectStore, find_repository

    try:
        return ObjectStore(find_repository(ctx.obj["root"]))
    except GitObjectError as exc:
        _fail(str(exc))


def _read_object(store: "ObjectStore", address: str) -> "GitObject":
    """Read an object, exiting with the store's error message on failure."""
    try:
        return store.read(address)
    except GitObjectError as exc:
        _fail(str(exc))


def _identity(store: "ObjectStore", override: str | None) -> str:
    """Return ``Name <email> <timestamp> +0000`` for a new commit."""
    if override:
        person = override
    else:
        config = store.repository.config
        name = config.get("user", "name", fallback=None)
        email = config.get("user", "email", fallback=None)
        person = f"{name} <{email}>" if name and email else _DEFAULT_IDENTITY
    return f"{person} {int(time.time())} +0000"


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="gitodb")
@click.option(
    "-C",
    "root",
    default=".",
    type=click.Path(file_okay=False),
    help="Run as if started in this directory",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log store activity to stderr")
@click.pass_context
def cli(ctx: click.Context, root: str, verbose: bool) -> None:
    """Content-addressable object store in git's loose-object format."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from gitodb import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]gitodb[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# init command
# ---------------------------------------------------------------------------


@cli.command(name="init")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.pass_context
def init_command(ctx: click.Context, path: str | None) -> None:
    """Create an empty repository.

    PATH defaults to the current directory.
    """
    from gitodb.store import Repository

    target = Path(ctx.obj["root"]) / (path or ".")
    try:
        repo = Repository.create(target)
    except (GitObjectError, OSError) as exc:
        _fail(str(exc))
    console.print(f"Initialized empty repository in {escape(str(repo.gitdir.resolve()))}", soft_wrap=True)


# ---------------------------------------------------------------------------
# hash-object command
# ---------------------------------------------------------------------------


@cli.command(name="hash-object")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("-w", "write", is_flag=True, default=False, help="Write the object into the store")
@click.option(
    "-t",
    "type_name",
    type=click.Choice(list(ObjectType.names())),
    default="blob",
    help="Object type (default: blob)",
)
@click.pass_context
def hash_object_command(ctx: click.Context, file: str, write: bool, type_name: str) -> None:
    """Compute the address of FILE as an object of the given type.

    Blob contents have CRLF line endings normalized to LF.  With -w the
    object is also stored; an object that is already present is kept.
    """
    from gitodb.codec import address, build
    from gitodb.objects import Blob

    path = Path(ctx.obj["root"]) / file
    try:
        data = path.read_bytes()
    except OSError as exc:
        _fail(f"Cannot read {file}: {exc}")

    try:
        obj = Blob.from_worktree(data) if type_name == "blob" else build(type_name, data)
    except GitObjectError as exc:
        _fail(str(exc))

    if write:
        store = _open_store(ctx)
        console.print(store.hash_object(obj, write=True))
    else:
        console.print(address(obj))


# ---------------------------------------------------------------------------
# cat-file command
# ---------------------------------------------------------------------------


@cli.command(name="cat-file")
@click.argument("address")
@click.option("--type", "-t", "show_type", is_flag=True, default=False, help="Show the object type")
@click.option("--size", "-s", "show_size", is_flag=True, default=False, help="Show the payload size")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["pretty", "raw", "json", "yaml"], case_sensitive=False),
    default="pretty",
    help="Content output format",
)
@click.pass_context
def cat_file_command(
    ctx: click.Context, address: str, show_type: bool, show_size: bool, output_format: str
) -> None:
    """Show the object stored at ADDRESS."""
    from gitodb.objects import ObjectSerializer, Tree

    store = _open_store(ctx)
    obj = _read_object(store, address)

    if show_type:
        console.print(obj.type.value)
        return
    if show_size:
        console.print(obj.size)
        return

    if output_format == "raw":
        click.echo(obj.data, nl=False)
    elif output_format == "json":
        click.echo(ObjectSerializer().to_json(obj))
    elif output_format == "yaml":
        click.echo(ObjectSerializer().to_yaml(obj), nl=False)
    elif isinstance(obj, Tree):
        for entry in obj.entries:
            click.echo(f"{entry.mode:0>6} {entry.object_type.value} {entry.hex}\t{entry.path}")
    else:
        click.echo(obj.data.decode("utf-8", errors="replace"), nl=False)


# ---------------------------------------------------------------------------
# ls-tree command
# ---------------------------------------------------------------------------


@cli.command(name="ls-tree")
@click.argument("address")
@click.pass_context
def ls_tree_command(ctx: click.Context, address: str) -> None:
    """List the entries of the tree at ADDRESS."""
    from gitodb.objects import Tree

    store = _open_store(ctx)
    try:
        tree = cast(Tree, store.read(address, expected=ObjectType.TREE))
    except GitObjectError as exc:
        _fail(str(exc))

    table = Table(title=f"Tree {address}")
    table.add_column("Mode", min_width=6)
    table.add_column("Type", min_width=6)
    table.add_column("Object", no_wrap=True)
    table.add_column("Name")
    for entry in tree.entries:
        table.add_row(entry.mode, entry.object_type.value, entry.hex, escape(entry.path))
    console.print(table)


# ---------------------------------------------------------------------------
# log command
# ---------------------------------------------------------------------------


@cli.command(name="log")
@click.argument("address")
@click.option("--max-count", "-n", type=click.IntRange(min=1), default=None, help="Stop after N commits")
@click.pass_context
def log_command(ctx: click.Context, address: str, max_count: int | None) -> None:
    """Show the commit history reachable from ADDRESS.

    Each commit is listed once, even when several paths lead to it.
    """
    from gitodb.store import iter_history

    store = _open_store(ctx)
    shown = 0
    try:
        for commit_address, commit in iter_history(store, address):
            console.print(f"[yellow]{commit_address}[/yellow] {escape(commit.summary)}", highlight=False)
            shown += 1
            if max_count is not None and shown >= max_count:
                break
    except GitObjectError as exc:
        _fail(str(exc))


# ---------------------------------------------------------------------------
# commit-tree command
# ---------------------------------------------------------------------------


@cli.command(name="commit-tree")
@click.argument("tree")
@click.option("-p", "parents", multiple=True, help="Parent commit address (repeatable)")
@click.option("-m", "message", required=True, help="Commit message")
@click.option("--author", default=None, help='Author as "Name <email>" (default: user.name/user.email)')
@click.pass_context
def commit_tree_command(
    ctx: click.Context, tree: str, parents: tuple[str, ...], message: str, author: str | None
) -> None:
    """Write a commit for TREE and print its address."""
    from gitodb.objects import Commit

    store = _open_store(ctx)
    try:
        store.read(tree, expected=ObjectType.TREE)
        for parent in parents:
            store.read(parent, expected=ObjectType.COMMIT)
        identity = _identity(store, author)
        commit = Commit.create(tree=tree, parents=parents, author=identity, message=message)
        console.print(store.hash_object(commit, write=True))
    except (GitObjectError, ValueError) as exc:
        _fail(str(exc))


# ---------------------------------------------------------------------------
# decompress command
# ---------------------------------------------------------------------------


@cli.command(name="decompress")
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def decompress_command(ctx: click.Context, file: str) -> None:
    """Inflate the loose object FILE and print its canonical bytes."""
    from gitodb.codec import decompress

    try:
        data = (Path(ctx.obj["root"]) / file).read_bytes()
    except OSError as exc:
        _fail(f"Cannot read {file}: {exc}")
    try:
        click.echo(decompress(data), nl=False)
    except GitObjectError as exc:
        _fail(str(exc))


if __name__ == "__main__":
    cli()
