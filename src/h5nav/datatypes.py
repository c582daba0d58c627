"""Introspection of datatypes stored with datasets and attributes."""
from enum import IntEnum

from h5py import h5t

from . import engine as E
from .errors import IOFailure, NavigationError, Unsupported, engine_call
from .handle import Handle
from .kinds import Kind, expect_kind


class TypeClass(IntEnum):
    """Class of a datatype (values are the HDF5 class codes)."""

    integer = h5t.INTEGER
    float = h5t.FLOAT
    time = h5t.TIME
    string = h5t.STRING
    bitfield = h5t.BITFIELD
    opaque = h5t.OPAQUE
    compound = h5t.COMPOUND
    reference = h5t.REFERENCE
    enum = h5t.ENUM
    vlen = h5t.VLEN
    array = h5t.ARRAY


def datatype_of(handle: Handle) -> Handle:
    """Return the datatype of a dataset or attribute (to be closed by the caller)."""
    kind = handle.kind
    with engine_call(f"getting datatype of {kind.value}"):
        if kind == Kind.attribute:
            tid = E.get_attribute_type(handle.token)
        elif kind == Kind.dataset:
            tid = E.get_dataset_type(handle.token)
        else:
            raise Unsupported(f"Objects of kind {kind.value} carry no datatype!")
    return Handle(tid)


def datatype_class(type_handle: Handle) -> TypeClass:
    expect_kind(type_handle, Kind.datatype)
    with engine_call("getting datatype class"):
        code = E.get_type_class(type_handle.token)
    if code < 0:
        raise IOFailure("Getting datatype class failed!")
    try:
        return TypeClass(code)
    except ValueError:
        raise Unsupported(f"Unknown datatype class: {code}") from None


def _checked_size(type_handle: Handle) -> int:
    with engine_call("getting datatype size"):
        size = E.get_type_size(type_handle.token)
    if size <= 0:  # zero signals failure
        raise IOFailure("Getting datatype size failed!")
    return size


def encoded_size(type_handle: Handle) -> int:
    """Size in bytes of one element as it is stored."""
    expect_kind(type_handle, Kind.datatype)
    return _checked_size(type_handle)


def is_variable_length_string(type_handle: Handle) -> bool:
    expect_kind(type_handle, Kind.datatype)
    with engine_call("checking for variable-length string"):
        return E.is_variable_str(type_handle.token)


def native_type(type_handle: Handle) -> Handle:
    """Return the platform-native equivalent of a datatype (to be closed by the caller)."""
    expect_kind(type_handle, Kind.datatype)
    with engine_call("getting native datatype"):
        return Handle(E.get_native_type(type_handle.token))


def native_size(type_handle: Handle) -> int:
    """Size in bytes of one element in its platform-native representation.

    For variable-length data this is the size of the in-memory descriptor,
    not the size of the data it points to.
    """
    with native_type(type_handle) as native:
        return _checked_size(native)


def memory_type(type_handle: Handle) -> Handle:
    """Return the datatype to read the stored data into a numpy array.

    For most types this is the native type, variable-length data and references are
    converted into Python objects (as done by h5py). To be closed by the caller.
    """
    expect_kind(type_handle, Kind.datatype)
    with engine_call("getting memory datatype"):
        return Handle(E.get_memory_type(type_handle.token))


def string_type(size: int = 1) -> Handle:
    """Create a fixed-length C string datatype of given size."""
    with engine_call("creating string datatype"):
        handle = Handle(E.create_string_type())
    try:
        set_type_size(handle, size)
    except NavigationError:
        handle.close()
        raise
    return handle


def variable_string_type() -> Handle:
    """Create a variable-length C string datatype."""
    with engine_call("creating variable-length string datatype"):
        return Handle(E.create_variable_string_type())


def set_type_size(type_handle: Handle, size: int):
    expect_kind(type_handle, Kind.datatype)
    with engine_call(f"setting datatype size to {size}"):
        E.set_type_size(type_handle.token, size)
