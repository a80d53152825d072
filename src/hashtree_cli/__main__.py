from __future__ import annotations
import logging
from typing import List
import typer
from rich import print

from hashtree.errors import HashTreeError
from hashtree.hashing import get_hash_function
from hashtree.logutil import setup_logging
from hashtree.settings import settings
from hashtree.tree import HashTree

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _hash_fn(name: str):
    try:
        return get_hash_function(name)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command()
def demo(
    hash_function: str = typer.Option(
        "dummy", help="Hash function name: sha256|dummy"
    ),
):
    """Walk through a height-2 tree: insert, recompute, read a value and its opening."""
    tree = HashTree.from_height(_hash_fn(hash_function), 2)
    tree.extend(["Hello", "Merkle", "Tree"])
    tree.update_internal_nodes()

    print(f"[cyan]root[/cyan]: {tree.get_root()}")

    position = 2
    opening = tree.get_opening(position)
    print(f"[cyan]value[/cyan]: {tree.get_value(position)}")
    print(f"[cyan]partner[/cyan]: {opening.partner_hash}")
    print(f"[cyan]root child[/cyan]: {opening.root_child_hash}")


@app.command()
def root(
    values: List[str] = typer.Argument(..., help="Leaf values, in insertion order"),
    height: int = typer.Option(settings.height, help="Tree height (1-10)"),
    hash_function: str = typer.Option(
        settings.hash_function, help="Hash function name: sha256|dummy"
    ),
):
    """Build a tree from VALUES and print its root."""
    try:
        tree = HashTree.from_height(_hash_fn(hash_function), height)
        tree.extend(values)
    except HashTreeError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    tree.update_internal_nodes()
    print(f"[green]{tree.length}/{tree.capacity} leaves[/green]")
    print(f"root: {tree.get_root()}")


@app.command()
def serve(
    host: str = typer.Option(settings.host),
    port: int = typer.Option(settings.port),
):
    """Run the HTTP service with uvicorn."""
    import uvicorn

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    setup_logging(level)
    uvicorn.run("hashtree.main:app", host=host, port=port, log_level=level)


if __name__ == "__main__":
    app()
