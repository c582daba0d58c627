from typing import Callable, TypeVar

from ..errors import IOFailure, engine_call

T = TypeVar("T")


def resolve_sized(what: str, length: Callable[[], int], fill: Callable[[int], T]) -> T:
    """Retrieve a variable-length result from a fixed-buffer style interface.

    First asks `length()` for the required size, then lets `fill(n)` allocate
    storage for `n` items and fetch the result into it. A negative length is an
    `IOFailure`, engine errors raised in either phase are translated as well.
    """
    with engine_call(f"{what} (length query)"):
        n = length()
    if n < 0:
        raise IOFailure(f"{what} failed: engine reported length {n}")
    with engine_call(what):
        return fill(n)
