"""Following object references stored in payload data."""
from typing import Union

from h5py import h5r

from . import engine as E
from .errors import IOFailure, engine_call
from .handle import Handle
from .kinds import Kind, expect_kind


def dereference(source: Handle, locator: Union[Handle, h5r.Reference]) -> Handle:
    """Open the object designated by a reference.

    The `source` is any open object of the file the reference was read from.
    The kind of the returned handle depends on the referenced object, check it
    before dispatching further.
    """
    if isinstance(locator, Handle):
        expect_kind(locator, Kind.reference)
        locator = locator.token
    with engine_call("dereferencing object reference"):
        oid = E.dereference(source.token, locator)
    if oid is None:
        raise IOFailure(f"Cannot resolve reference {locator!r}!")
    return Handle(oid)
