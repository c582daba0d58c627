"""Error taxonomy of the navigation layer.

All errors raised by h5nav derive from `NavigationError`. Failures reported by the
storage engine (exceptions raised by h5py or failure sentinels like negative counts)
surface as `IOFailure`, operations requested on a kind of object that does not
support them surface as `Unsupported`.
"""
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

# exception types h5py raises for failures of the HDF5 library and for arguments
# it cannot convert to C types
ENGINE_ERRORS = (KeyError, ValueError, RuntimeError, OSError, OverflowError)


class NavigationError(Exception):
    """Base class for errors raised by h5nav."""


class IOFailure(NavigationError):
    """An engine primitive failed or returned its failure sentinel."""


class Unsupported(NavigationError):
    """The operation is not defined for the kind of the given handle."""


@contextmanager
def engine_call(what: str):
    """Translate errors raised inside the block into `IOFailure`."""
    try:
        yield
    except ENGINE_ERRORS as e:
        logger.debug("%s failed: %r", what, e)
        raise IOFailure(f"{what} failed: {e}") from e
