"""Introspection of dataspaces (shapes) of datasets and attributes."""
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from . import engine as E
from .errors import IOFailure, Unsupported, engine_call
from .handle import Handle
from .kinds import Kind, expect_kind
from .util import resolve_sized


class Dims(BaseModel):
    """Dimensionality and extents of a simple dataspace."""

    model_config = ConfigDict(frozen=True)

    ndims: int
    extents: Tuple[int, ...]
    max_extents: Tuple[int, ...]
    """Maximal extents (`h5py.h5s.UNLIMITED` for unlimited dimensions)."""

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.extents


def dataspace_of(handle: Handle) -> Handle:
    """Return the dataspace of a dataset or attribute (to be closed by the caller)."""
    kind = handle.kind
    with engine_call(f"getting dataspace of {kind.value}"):
        if kind == Kind.attribute:
            sid = E.get_attribute_space(handle.token)
        elif kind == Kind.dataset:
            sid = E.get_dataset_space(handle.token)
        else:
            raise Unsupported(f"Objects of kind {kind.value} carry no dataspace!")
    return Handle(sid)


def element_count(space_handle: Handle) -> int:
    """Return total number of elements (the dataspace is not closed)."""
    expect_kind(space_handle, Kind.dataspace)
    with engine_call("getting number of elements"):
        n = E.get_element_count(space_handle.token)
    if n < 0:
        raise IOFailure("Getting number of elements failed!")
    return n


def ndims(space_handle: Handle) -> int:
    expect_kind(space_handle, Kind.dataspace)
    with engine_call("getting number of dimensions"):
        n = E.get_space_ndims(space_handle.token)
    if n < 0:
        raise IOFailure("Getting number of dimensions failed!")
    return n


def dims(space_handle: Handle) -> Dims:
    """Return dimensionality with current and maximal extents."""
    expect_kind(space_handle, Kind.dataspace)
    token = space_handle.token

    def fill(n: int) -> Dims:
        extents: List[int] = [0] * n
        max_extents: List[int] = [0] * n
        if E.get_space_dims(token, extents, max_extents) < 0:
            raise IOFailure("Getting dimensions failed!")
        return Dims(ndims=n, extents=tuple(extents), max_extents=tuple(max_extents))

    return resolve_sized("getting dimensions", lambda: ndims(space_handle), fill)


def count_elements(handle: Handle) -> int:
    """Return number of elements of a dataset or attribute."""
    with dataspace_of(handle) as space:
        return element_count(space)
