"""Opening files and inspecting the objects open in them."""
import logging
from enum import IntFlag
from pathlib import Path
from typing import List, Tuple, Union

from h5py import h5f

from . import engine as E
from .errors import IOFailure, engine_call
from .handle import Handle
from .kinds import Kind, expect_kind

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Access(IntFlag):
    """How to open a file.

    `truncate` and `exclusive` always create a new file (`exclusive` fails if it
    exists), `create` opens an existing file for writing or creates it if missing.
    """

    read_only = 1
    read_write = 2
    truncate = 4
    exclusive = 8
    create = 16


class ObjectFilter(IntFlag):
    """Kinds of open objects to consider in `open_object_count` and `open_object_ids`."""

    file = h5f.OBJ_FILE
    dataset = h5f.OBJ_DATASET
    container = h5f.OBJ_GROUP
    datatype = h5f.OBJ_DATATYPE
    attribute = h5f.OBJ_ATTR
    all = h5f.OBJ_ALL


def open_file(path: PathLike, access: Access = Access.read_only) -> Handle:
    """Open (or create) an HDF5 file, return the handle of its root."""
    path = Path(path)
    with engine_call(f"opening file {str(path)!r} ({access!r})"):
        if access & Access.truncate:
            fid = E.create_file(path, h5f.ACC_TRUNC)
        elif access & Access.exclusive:
            fid = E.create_file(path, h5f.ACC_EXCL)
        elif access & Access.create:
            if path.exists():
                fid = E.open_file(path, h5f.ACC_RDWR)
            else:
                fid = E.create_file(path, h5f.ACC_EXCL)
        elif access & Access.read_write:
            fid = E.open_file(path, h5f.ACC_RDWR)
        else:
            fid = E.open_file(path, h5f.ACC_RDONLY)
    logger.debug("opened file %s", path)
    return Handle(fid)


def is_hdf5(path: PathLike) -> bool:
    """Return whether the path is an existing file in HDF5 format."""
    path = Path(path)
    if not path.is_file():
        return False
    with engine_call(f"checking file format of {str(path)!r}"):
        return E.is_hdf5(path)


def library_version() -> Tuple[int, int, int]:
    """Return version of the HDF5 library in use."""
    return tuple(E.get_libversion())  # type: ignore


def open_object_count(file: Handle, types: ObjectFilter = ObjectFilter.all) -> int:
    """Return number of currently open objects of given types in the file."""
    expect_kind(file, Kind.file)
    with engine_call("counting open objects"):
        n = E.get_obj_count(file.token, int(types))
    if n < 0:
        raise IOFailure("Counting open objects failed!")
    return n


def open_object_ids(
    file: Handle, types: ObjectFilter = ObjectFilter.all
) -> List[Handle]:
    """Return new handles to the currently open objects of given types in the file.

    Each returned handle holds its own reference to the object and must be closed
    independently from the handles the objects were originally opened with.
    """
    expect_kind(file, Kind.file)
    with engine_call("listing open objects"):
        ids = E.get_obj_ids(file.token, int(types))
    return [Handle(oid) for oid in ids]
