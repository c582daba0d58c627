"""Settings controlling the order in which children and attributes are enumerated."""
from enum import Enum

from h5py import h5
from pydantic import BaseModel, ConfigDict


class IndexType(str, Enum):
    """Index used to address children and attributes by position."""

    name = "name"
    creation_order = "creation_order"

    @property
    def code(self) -> int:
        return h5.INDEX_NAME if self == IndexType.name else h5.INDEX_CRT_ORDER


class IterOrder(str, Enum):
    """Direction in which an index is traversed."""

    increasing = "increasing"
    decreasing = "decreasing"
    native = "native"

    @property
    def code(self) -> int:
        return {
            IterOrder.increasing: h5.ITER_INC,
            IterOrder.decreasing: h5.ITER_DEC,
            IterOrder.native: h5.ITER_NATIVE,
        }[self]


class NavigatorConfig(BaseModel):
    """Positional addressing of children and attributes.

    Children are addressed in name order by default. Attributes are addressed in
    creation order by default. For objects created without creation order tracking
    (the h5py default) this index is not available. HDF5 then still enumerates every
    attribute exactly once, but the order is unspecified once the attributes moved
    to dense storage.
    """

    model_config = ConfigDict(frozen=True)

    child_index: IndexType = IndexType.name
    child_order: IterOrder = IterOrder.increasing
    attribute_index: IndexType = IndexType.creation_order
    attribute_order: IterOrder = IterOrder.increasing


DEFAULT_CONFIG = NavigatorConfig()
