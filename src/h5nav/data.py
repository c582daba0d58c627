"""Reading the payload of datasets and attributes."""
import numpy as np

from . import engine as E
from .dataspaces import dataspace_of, dims
from .datatypes import datatype_of, memory_type
from .errors import Unsupported, engine_call
from .handle import Handle
from .kinds import Kind, expect_kind


def read(handle: Handle, target_type: Handle, out: np.ndarray):
    """Read the complete payload of a dataset or attribute into `out`.

    The data is converted into `target_type`. No bounds checking is done, the
    caller must provide a buffer large enough for all elements in that type.
    """
    kind = handle.kind
    expect_kind(target_type, Kind.datatype)
    with engine_call(f"reading {kind.value}"):
        if kind == Kind.attribute:
            E.read_attribute(handle.token, target_type.token, out)
        elif kind == Kind.dataset:
            E.read_dataset(handle.token, target_type.token, out)
        else:
            raise Unsupported(f"Objects of kind {kind.value} carry no data!")


def read_array(handle: Handle) -> np.ndarray:
    """Read the complete payload of a dataset or attribute into a fresh array.

    Variable-length strings are returned as `bytes` objects, references as
    `h5py.h5r.Reference` objects (see `references.dereference`).
    """
    with datatype_of(handle) as stored:
        with engine_call("getting dtype"):
            dtype = E.get_type_dtype(stored.token)
        with memory_type(stored) as mtype, dataspace_of(handle) as space:
            out = np.zeros(dims(space).extents, dtype=dtype)
            read(handle, mtype, out)
    return out
