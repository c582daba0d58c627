"""Owning handle around an engine identifier."""
from __future__ import annotations

import weakref
from typing import Any, Optional

from .kinds import Kind, kind_of
from .resources import release


class Handle:
    """An open engine resource: opaque identifier plus its runtime kind.

    The handle exclusively owns the identifier. It is released exactly once,
    either by `close()` (also called when leaving a `with` block) or, if the handle
    is never closed explicitly, when it is garbage collected.

    The kind is queried lazily and cached, as an identifier never changes what it
    denotes while it is valid.
    """

    def __init__(self, token: Any):
        if token is None:
            raise ValueError("Cannot create a handle for a missing identifier!")
        self._token = token
        self._kind: Optional[Kind] = None
        self._finalizer = weakref.finalize(self, release, token)
        self._finalizer.atexit = False

    def _guard_open(self):
        if not self._finalizer.alive:
            raise ValueError("Handle is closed!")

    @property
    def token(self) -> Any:
        """Underlying engine identifier (only valid while the handle is open)."""
        self._guard_open()
        return self._token

    @property
    def kind(self) -> Kind:
        self._guard_open()
        if self._kind is None:
            self._kind = kind_of(self._token)
        return self._kind

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def close(self) -> None:
        """Release the identifier. Closing an already closed handle does nothing."""
        self._finalizer()

    def __enter__(self) -> Handle:
        return self

    def __exit__(self, ex_type, ex_value, ex_traceback):
        self.close()

    def __repr__(self) -> str:
        if self.closed:
            return f"<{type(self).__name__} (closed)>"
        return f"<{type(self).__name__} {self.kind.value} {self._token!r}>"
