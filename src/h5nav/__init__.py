"""h5nav package.

Uniform navigation over HDF5 files. Every opened object is wrapped in a `Handle`
that knows its runtime `Kind` and releases the underlying identifier exactly once.
Children and attributes are addressed by position (see `h5nav.navigator`).

Handles are not thread-safe. Concurrent access to the handles of one file must be
serialized by the caller.
"""
import importlib_metadata
from typing_extensions import Final

from .config import IndexType, IterOrder, NavigatorConfig  # noqa: F401
from .errors import IOFailure, NavigationError, Unsupported  # noqa: F401
from .files import Access, open_file  # noqa: F401
from .handle import Handle  # noqa: F401
from .kinds import Kind, kind_of  # noqa: F401

# Set version, will use version from pyproject.toml if defined
__version__: Final[str] = importlib_metadata.version(__package__ or __name__)
