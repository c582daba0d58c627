"""Human-readable names of handles.

The naming primitives of the engine write into caller-supplied fixed-size buffers,
so names are retrieved in two phases: first the length is queried with capacity 0
(nothing is written), then a buffer of `length + 1` bytes is filled.
"""
from typing import Callable, Optional

from . import engine as E
from .errors import IOFailure, Unsupported, engine_call
from .handle import Handle
from .kinds import Kind
from .util import resolve_sized

NameQuery = Callable[[Optional[bytearray], int], int]
"""Primitive taking a buffer and its capacity, returning the full name length."""

_OBJECT_NAMED = (Kind.container, Kind.dataset, Kind.file, Kind.datatype, Kind.dataspace)


def name_of(handle: Handle, buffer: Optional[bytearray], capacity: int) -> int:
    """Write the name of the handle into the buffer, return the full name length.

    If `capacity` is 0, the buffer is not touched (and may be `None`). Otherwise at
    most `capacity - 1` bytes followed by a NUL byte are written.
    """
    if capacity < 0:
        raise ValueError(f"Invalid buffer capacity: {capacity}")
    if capacity > 0 and (buffer is None or len(buffer) < capacity):
        raise ValueError("Buffer is smaller than the claimed capacity!")

    kind = handle.kind
    with engine_call(f"getting name of {kind.value}"):
        if kind == Kind.attribute:
            length = E.get_attribute_name(handle.token, buffer, capacity)
        elif kind in _OBJECT_NAMED:
            length = E.get_object_name(handle.token, buffer, capacity)
        else:
            raise Unsupported(f"Objects of kind {kind.value} have no name!")
    if length < 0:
        raise IOFailure(f"Getting name of {kind.value} failed!")
    return length


def read_sized_name(what: str, query: NameQuery) -> str:
    """Run both phases of a name query and return the decoded name."""

    def fill(length: int) -> str:
        buf = bytearray(length + 1)
        written = query(buf, len(buf))
        if written < 0:
            raise IOFailure(f"{what} failed: engine reported length {written}")
        return bytes(buf[: min(written, length)]).decode("utf-8")

    return resolve_sized(what, lambda: query(None, 0), fill)


def read_name(handle: Handle) -> str:
    """Return the name of the handle (the empty string for anonymous objects).

    For attributes this is the attribute name, for other objects the absolute
    path they were opened through.
    """
    return read_sized_name(
        f"getting name of {handle.kind.value}",
        lambda buf, cap: name_of(handle, buf, cap),
    )
