"""Positional navigation of children and attributes.

Children of a container are addressed by their position in the link index of the
group (by default: increasing name order), attributes by their position in the
attribute index of the object (by default: increasing creation order). Only groups
and datasets are supported as children.

A position-derived name is only stable while the membership of the container is
not modified. Concurrent modification from other threads is not supported, the
caller must serialize all access to the handle tree of an open file.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Optional, Sequence, TypeVar

from h5py import h5o

from . import engine as E
from .config import DEFAULT_CONFIG, NavigatorConfig
from .errors import IOFailure, NavigationError, Unsupported, engine_call
from .handle import Handle
from .kinds import Kind, expect_kind
from .names import read_sized_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

VisititemsCallback = Callable[[str, Handle], Optional[T]]

_GROUP_KINDS = (Kind.container, Kind.file)
_ATTRIBUTED_KINDS = (Kind.container, Kind.file, Kind.dataset, Kind.datatype)


def _check_position(index: int):
    if index < 0:
        raise IOFailure(f"Invalid position: {index}")


def child_count(container: Handle) -> int:
    """Return number of children (links) in a group."""
    expect_kind(container, *_GROUP_KINDS)
    with engine_call("getting group info"):
        n = E.get_group_info(container.token).num_links
    if n < 0:
        raise IOFailure("Getting group info failed!")
    return n


def child_name(
    container: Handle, index: int, config: NavigatorConfig = DEFAULT_CONFIG
) -> str:
    """Return the name of the child at given position.

    Raises `IOFailure` if there is no child at that position.
    """
    expect_kind(container, *_GROUP_KINDS)
    _check_position(index)
    token = container.token

    def by_index(buf, size):
        return E.get_name_by_index(
            token,
            index,
            buf,
            size,
            index_type=config.child_index.code,
            order=config.child_order.code,
        )

    return read_sized_name(f"getting name of child {index}", by_index)


def open_child(
    container: Handle, index: int, config: NavigatorConfig = DEFAULT_CONFIG
) -> Handle:
    """Open the child at given position, which must be a group or a dataset."""
    name = child_name(container, index, config).encode("utf-8")
    token = container.token

    with engine_call(f"getting object info of {name!r}"):
        obj_type = E.get_object_info_by_name(token, name).obj_type

    with engine_call(f"opening {name!r}"):
        if obj_type == h5o.TYPE_GROUP:
            child = E.open_group(token, name)
        elif obj_type == h5o.TYPE_DATASET:
            child = E.open_dataset(token, name)
        else:
            msg = f"Child {name!r} has unsupported object type {obj_type}!"
            raise Unsupported(msg)
    logger.debug("opened child %d (%r) of %r", index, name, container)
    return Handle(child)


def attribute_count(obj: Handle) -> int:
    """Return number of attributes attached to the object."""
    expect_kind(obj, *_ATTRIBUTED_KINDS)
    with engine_call("getting object info"):
        n = E.get_object_info(obj.token).num_attrs
    if n < 0:
        raise IOFailure("Getting object info failed!")
    return n


def open_attribute(
    obj: Handle, index: int, config: NavigatorConfig = DEFAULT_CONFIG
) -> Handle:
    """Open the attribute at given position of the object."""
    expect_kind(obj, *_ATTRIBUTED_KINDS)
    _check_position(index)
    with engine_call(f"opening attribute {index}"):
        aid = E.open_attribute_by_index(
            obj.token,
            index,
            index_type=config.attribute_index.code,
            order=config.attribute_order.code,
        )
    logger.debug("opened attribute %d of %r", index, obj)
    return Handle(aid)


# ---- traversal helpers


def iter_children(
    container: Handle, config: NavigatorConfig = DEFAULT_CONFIG
) -> Iterator[Handle]:
    """Yield opened children in order, each is closed when the next one is requested."""
    for i in range(child_count(container)):
        with open_child(container, i, config) as child:
            yield child


def iter_attributes(
    obj: Handle, config: NavigatorConfig = DEFAULT_CONFIG
) -> Iterator[Handle]:
    """Yield opened attributes in order, each is closed when the next one is requested."""
    for i in range(attribute_count(obj)):
        with open_attribute(obj, i, config) as attr:
            yield attr


def open_position(
    root: Handle, positions: Sequence[int], config: NavigatorConfig = DEFAULT_CONFIG
) -> Handle:
    """Open the object reached by following child positions from the root.

    Intermediate containers are closed. For an empty position sequence,
    the root itself is returned (it stays owned by the caller, do not close it twice).
    """
    curr = root
    for pos in positions:
        try:
            nxt = open_child(curr, pos, config)
        finally:
            if curr is not root:
                curr.close()
        curr = nxt
    return curr


def visititems(
    root: Handle,
    func: VisititemsCallback,
    config: NavigatorConfig = DEFAULT_CONFIG,
    *,
    skip_errors: bool = False,
) -> Any:
    """Visit all descendants of the root depth-first, in child order.

    Calls `func(path, handle)` with the path relative to the root (child names
    joined by "/"). The handle is only valid during the call. If `func` returns
    something else than None, the traversal stops and that value is returned.

    If `skip_errors` is set, children that fail to open (and the subtrees below)
    are skipped, otherwise the error is raised.
    """

    def visit(node: Handle, prefix: str) -> Any:
        for i in range(child_count(node)):
            try:
                name = child_name(node, i, config)
                child = open_child(node, i, config)
            except NavigationError as e:
                if not skip_errors:
                    raise
                logger.warning("skipping child %d of %r: %s", i, prefix or "/", e)
                continue

            path = f"{prefix}/{name}" if prefix else name
            with child:
                ret = func(path, child)
                if ret is not None:
                    return ret
                if child.kind == Kind.container:
                    ret = visit(child, path)
                    if ret is not None:
                        return ret
        return None

    return visit(root, "")
