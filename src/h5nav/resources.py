"""Release of engine resources, dispatched on the runtime kind of an identifier."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from . import engine as E
from .errors import Unsupported, engine_call
from .kinds import Kind, kind_of

if TYPE_CHECKING:
    from .handle import Handle

logger = logging.getLogger(__name__)


def release(token: Any) -> None:
    """Release an identifier with the close primitive matching its kind.

    References do not own an engine resource, releasing them does nothing.
    Closed state is not tracked here, releasing an identifier twice is undefined
    (see `Handle`, which makes sure it does not happen).
    """
    kind = kind_of(token)
    logger.debug("releasing %r (%s)", token, kind.value)
    if kind == Kind.reference:
        return
    with engine_call(f"closing {kind.value}"):
        if kind == Kind.container:
            E.close_group(token)
        elif kind == Kind.dataset:
            E.close_dataset(token)
        elif kind == Kind.file:
            E.close_file(token)
        elif kind == Kind.attribute:
            E.close_attribute(token)
        elif kind == Kind.dataspace:
            E.close_dataspace(token)
        elif kind == Kind.datatype:
            E.close_datatype(token)
        else:
            raise Unsupported(f"Cannot close object of kind {kind.value}: {token!r}")


def close(handle: Handle) -> None:
    """Close the handle (releases the underlying identifier at most once)."""
    handle.close()
