"""
Identity based detection of self-referential containers.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from contextlib import contextmanager
from typing import Any, Iterator


# Classes --------------------------------------------------------------------------------------------------------------

class CycleGuard:
    """
    Containers currently open on the rendering path, with the sentinel text
    to show when one of them is met again.

    Membership is by identity (`id()`), never by equality: two equal lists are
    distinct containers, and unhashable containers are supported.
    Entries follow stack discipline, see `visiting()`.

    Examples:
        >>> guard = CycleGuard()
        >>> items = [1]
        >>> with guard.visiting(items, "(this array)"):
        ...     guard.sentinel_for(items)
        '(this array)'
        >>> items in guard
        False
    """
    __slots__ = ("_open",)

    def __init__(self) -> None:
        self._open: dict[int, str] = {}

    def __contains__(self, container: Any) -> bool:
        return id(container) in self._open

    def __len__(self) -> int:
        return len(self._open)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(open={len(self._open)})"

    def sentinel_for(self, container: Any) -> str | None:
        return self._open.get(id(container))

    @contextmanager
    def visiting(self, container: Any, sentinel: str) -> Iterator[None]:
        """Mark container as open for the duration of the block, also when the block raises."""
        key = id(container)
        self._open[key] = sentinel
        try:
            yield
        finally:
            self._open.pop(key, None)
