"""Commands to print the positional structure and contents of a file."""
from pathlib import Path
from typing import Any, List

import typer
from rich import print
from rich.markup import escape
from rich.tree import Tree

from ..config import IndexType, NavigatorConfig
from ..data import read_array
from ..dataspaces import dataspace_of, dims
from ..datatypes import datatype_class, datatype_of
from ..errors import NavigationError
from ..files import open_file
from ..handle import Handle
from ..kinds import Kind
from ..names import read_name
from ..navigator import (
    attribute_count,
    child_count,
    child_name,
    iter_attributes,
    open_child,
    open_position,
)


def _fail(e: NavigationError):
    print(f"[b][red]Error:[/red][/b] {escape(str(e))}")
    raise typer.Exit(code=1)


def _decoded(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, list):
        return [_decoded(v) for v in value]
    return value


def _summary(handle: Handle) -> str:
    """Kind, datatype class and shape of the object."""
    kind = handle.kind
    if kind not in (Kind.dataset, Kind.attribute):
        return kind.value
    with datatype_of(handle) as t:
        cls = datatype_class(t)
    with dataspace_of(handle) as s:
        shape = dims(s).extents
    return f"{kind.value} {cls.name} {shape}"


def _payload(handle: Handle) -> str:
    return escape(repr(_decoded(read_array(handle).tolist())))


def _add_attributes(node: Tree, obj: Handle, config: NavigatorConfig):
    for i, attr in enumerate(iter_attributes(obj, config)):
        label = f"[i]@{i}[/i] {escape(read_name(attr))} [dim]({_summary(attr)})[/dim]"
        node.add(label)


def tree(
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    attrs: bool = typer.Option(False, help="Also list attributes."),
    creation_order: bool = typer.Option(
        False, "--creation-order", help="Address children in creation order."
    ),
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Skip children that cannot be opened."
    ),
):
    """Print the tree of children with their positions."""
    config = NavigatorConfig(
        child_index=IndexType.creation_order if creation_order else IndexType.name
    )

    def add_children(node: Tree, container: Handle):
        for i in range(child_count(container)):
            try:
                name = escape(child_name(container, i, config))
                child = open_child(container, i, config)
            except NavigationError as e:
                if not skip_errors:
                    raise
                node.add(f"[b]{i}[/b] [red]skipped:[/red] {escape(str(e))}")
                continue
            with child:
                sub = node.add(f"[b]{i}[/b] {name} [dim]({_summary(child)})[/dim]")
                if attrs:
                    _add_attributes(sub, child, config)
                if child.kind == Kind.container:
                    add_children(sub, child)

    root_node = Tree(f"[b]{escape(str(file))}[/b]")
    try:
        with open_file(file) as root:
            if attrs:
                _add_attributes(root_node, root, config)
            add_children(root_node, root)
    except NavigationError as e:
        _fail(e)
    print(root_node)


def show(
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    positions: List[int] = typer.Argument(None, help="Child positions to follow."),
):
    """Print metadata and payload of the object at the given child positions."""
    try:
        with open_file(file) as root:
            obj = open_position(root, positions or [])
            try:
                print(f"[b]Name:[/b] {escape(read_name(obj))}")
                print(f"[b]Kind:[/b] {_summary(obj)}")
                if obj.kind in (Kind.container, Kind.file):
                    print(f"[b]Children:[/b] {child_count(obj)}")
                print(f"[b]Attributes:[/b] {attribute_count(obj)}")
                for attr in iter_attributes(obj):
                    print(f"  {escape(read_name(attr))} = {_payload(attr)}")
                if obj.kind == Kind.dataset:
                    print(f"[b]Data:[/b] {_payload(obj)}")
            finally:
                if obj is not root:
                    obj.close()
    except NavigationError as e:
        _fail(e)
