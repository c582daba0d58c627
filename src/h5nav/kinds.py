"""Runtime kinds of engine identifiers.

Every kind-specific dispatch in h5nav is keyed off `kind_of`, nothing infers the kind
of an identifier from the context it was obtained in.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from h5py import h5i

from . import engine as E
from .errors import ENGINE_ERRORS, Unsupported

if TYPE_CHECKING:
    from .handle import Handle


class Kind(str, Enum):
    """Kind of resource an identifier denotes."""

    container = "container"  # group
    dataset = "dataset"
    attribute = "attribute"
    datatype = "datatype"
    dataspace = "dataspace"
    file = "file"
    reference = "reference"  # locator stored in payload data
    unknown = "unknown"

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.value}"


_H5I_KINDS = {
    h5i.GROUP: Kind.container,
    h5i.DATASET: Kind.dataset,
    h5i.ATTR: Kind.attribute,
    h5i.DATATYPE: Kind.datatype,
    h5i.DATASPACE: Kind.dataspace,
    h5i.FILE: Kind.file,
}


def kind_of(obj: Union[Handle, Any]) -> Kind:
    """Return the kind of a handle or raw identifier.

    Invalid identifiers and kinds without a counterpart in `Kind` are `Kind.unknown`.
    """
    token = getattr(obj, "token", obj)
    if E.is_reference(token):
        return Kind.reference
    try:
        code = E.get_runtime_kind(token)
    except (TypeError,) + ENGINE_ERRORS:
        return Kind.unknown
    return _H5I_KINDS.get(code, Kind.unknown)


def expect_kind(handle: Handle, *kinds: Kind) -> Kind:
    """Return kind of the handle, raise `Unsupported` if it is not one of `kinds`."""
    kind = handle.kind
    if kind not in kinds:
        expected = ", ".join(k.value for k in kinds)
        raise Unsupported(f"Expected handle of kind {expected}, got {kind.value}!")
    return kind
