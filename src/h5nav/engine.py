"""Storage engine primitives.

Thin pass-through functions over the low-level h5py API, one per primitive the
navigation layer consumes. They take and return raw h5py identifiers (`ObjectID`
subclasses and `h5r.Reference` locators) and let h5py exceptions propagate.
Wrapping results in owning handles and translating errors is left to the callers.

Name and dimension primitives follow the fixed-buffer contract of the HDF5 C API:
they return the full length and write into a caller-provided buffer only if its
capacity is non-zero.
"""
import os
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import h5py
import numpy as np
from h5py import h5, h5a, h5d, h5f, h5g, h5i, h5o, h5r, h5s, h5t


@dataclass(frozen=True)
class GroupInfo:
    num_links: int


@dataclass(frozen=True)
class ObjectInfo:
    obj_type: int
    """One of `h5o.TYPE_GROUP`, `h5o.TYPE_DATASET` or `h5o.TYPE_NAMED_DATATYPE`."""

    num_attrs: int


def _fill(name: bytes, buf: Optional[bytearray], size: int) -> int:
    """Copy name into buffer (NUL-terminated, truncated to size), return full length."""
    if buf is not None and size > 0:
        n = min(len(name), size - 1)
        buf[:n] = name[:n]
        buf[n] = 0
    return len(name)


def _unshared(tid: h5t.TypeID) -> h5t.TypeID:
    """Return a private copy of predefined (locked) types, so they can be released."""
    return tid.copy() if tid.locked else tid


# ---- identifiers


def is_reference(token: Any) -> bool:
    return isinstance(token, h5r.Reference)


def get_runtime_kind(token: Any) -> int:
    return h5i.get_type(token)


def close_group(gid: h5g.GroupID):
    gid.close()


def close_dataset(did: h5d.DatasetID):
    did.close()


def close_file(fid: h5f.FileID):
    fid.close()


def close_attribute(aid: h5a.AttrID):
    aid.close()


def close_dataspace(sid: h5s.SpaceID):
    sid.close()


def close_datatype(tid: h5t.TypeID):
    tid.close()


# ---- groups, objects and attributes


def get_group_info(gid: h5g.GroupID) -> GroupInfo:
    return GroupInfo(num_links=gid.get_num_objs())


def get_name_by_index(
    gid: h5g.GroupID,
    index: int,
    buf: Optional[bytearray],
    size: int,
    *,
    index_type: int = h5.INDEX_NAME,
    order: int = h5.ITER_INC,
) -> int:
    """Get name of the link at given position in the group (-1 if there is none)."""
    found: List[bytes] = []

    def first(link_name: bytes) -> bool:
        found.append(link_name)
        return True  # stop after the link at `index`

    gid.links.iterate(first, idx_type=index_type, order=order, idx=index)
    if not found:
        return -1
    return _fill(found[0], buf, size)


def get_object_info_by_name(gid: h5g.GroupID, name: bytes) -> ObjectInfo:
    info = h5o.get_info(gid, name)
    return ObjectInfo(obj_type=info.type, num_attrs=info.num_attrs)


def get_object_info(oid) -> ObjectInfo:
    info = h5o.get_info(oid)
    return ObjectInfo(obj_type=info.type, num_attrs=h5a.get_num_attrs(oid))


def get_object_name(oid, buf: Optional[bytearray], size: int) -> int:
    return _fill(h5i.get_name(oid) or b"", buf, size)


def get_attribute_name(aid: h5a.AttrID, buf: Optional[bytearray], size: int) -> int:
    name = aid.get_name()
    if isinstance(name, str):
        name = name.encode("utf-8")
    return _fill(name, buf, size)


def open_group(gid: h5g.GroupID, name: bytes) -> h5g.GroupID:
    return h5g.open(gid, name)


def open_dataset(gid: h5g.GroupID, name: bytes) -> h5d.DatasetID:
    return h5d.open(gid, name)


def open_attribute_by_index(
    oid,
    index: int,
    *,
    index_type: int = h5.INDEX_CRT_ORDER,
    order: int = h5.ITER_INC,
) -> h5a.AttrID:
    return h5a.open(oid, index=index, index_type=index_type, order=order)


# ---- datatypes


def get_attribute_type(aid: h5a.AttrID) -> h5t.TypeID:
    return aid.get_type()


def get_dataset_type(did: h5d.DatasetID) -> h5t.TypeID:
    return did.get_type()


def get_type_class(tid: h5t.TypeID) -> int:
    return tid.get_class()


def get_type_size(tid: h5t.TypeID) -> int:
    return tid.get_size()


def is_variable_str(tid: h5t.TypeID) -> bool:
    return isinstance(tid, h5t.TypeStringID) and bool(tid.is_variable_str())


def get_type_dtype(tid: h5t.TypeID) -> np.dtype:
    return tid.dtype


def get_native_type(tid: h5t.TypeID) -> h5t.TypeID:
    """Closest HDF5 type in local memory layout (variable-length data as pointers).

    Byte order is converted to the one of the platform, also inside compound and
    array types.
    """
    dtype = tid.dtype
    if not dtype.isnative:
        dtype = dtype.newbyteorder("=")
    return _unshared(h5t.py_create(dtype, logical=True))


def get_memory_type(tid: h5t.TypeID) -> h5t.TypeID:
    """HDF5 type that h5py converts into buffers of `tid.dtype` (objects for vlen data)."""
    return _unshared(h5t.py_create(tid.dtype))


def set_type_size(tid: h5t.TypeID, size: int):
    tid.set_size(size)


def create_string_type() -> h5t.TypeID:
    return h5t.C_S1.copy()


def create_variable_string_type() -> h5t.TypeID:
    tid = h5t.C_S1.copy()
    tid.set_size(h5t.VARIABLE)
    return tid


# ---- dataspaces


def get_attribute_space(aid: h5a.AttrID) -> h5s.SpaceID:
    return aid.get_space()


def get_dataset_space(did: h5d.DatasetID) -> h5s.SpaceID:
    return did.get_space()


def get_space_ndims(sid: h5s.SpaceID) -> int:
    return sid.get_simple_extent_ndims()


def get_space_dims(
    sid: h5s.SpaceID, dims: Optional[List[int]], maxdims: Optional[List[int]]
) -> int:
    """Fill the passed lists with current and maximal extents, return ndims."""
    cur = sid.get_simple_extent_dims()
    if dims is not None:
        dims[: len(cur)] = cur[: len(dims)]
    if maxdims is not None:
        mx = sid.get_simple_extent_dims(maxdims=True)
        maxdims[: len(mx)] = mx[: len(maxdims)]
    return len(cur)


def get_element_count(sid: h5s.SpaceID) -> int:
    return sid.get_simple_extent_npoints()


# ---- data


def read_attribute(aid: h5a.AttrID, tid: h5t.TypeID, buf: np.ndarray):
    aid.read(buf, mtype=tid)


def read_dataset(did: h5d.DatasetID, tid: h5t.TypeID, buf: np.ndarray):
    did.read(h5s.ALL, h5s.ALL, buf, mtype=tid)


def dereference(src, ref: h5r.Reference):
    return h5r.dereference(ref, src)


# ---- files


def open_file(path, flags: int) -> h5f.FileID:
    return h5f.open(os.fsencode(path), flags)


def create_file(path, flags: int) -> h5f.FileID:
    return h5f.create(os.fsencode(path), flags)


def is_hdf5(path) -> bool:
    return bool(h5py.is_hdf5(path))


def get_libversion() -> Tuple[int, int, int]:
    return h5.get_libversion()


def get_obj_count(fid: h5f.FileID, types: int) -> int:
    return h5f.get_obj_count(fid, types)


def get_obj_ids(fid: h5f.FileID, types: int) -> list:
    return h5f.get_obj_ids(fid, types)
