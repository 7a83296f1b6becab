"""
Single line vs multi-line layout of rendered containers.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import threading

from typing import NamedTuple

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

log = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 80

ELEMENT_SEPARATOR = ","
ELEMENT_SEPARATOR_WITH_NEWLINE = ELEMENT_SEPARATOR + "\n"

# used when formatting a container on a single line
INDENTATION_FOR_SINGLE_LINE = " "
# 4 spaces indentation after each line break
INDENTATION_AFTER_NEWLINE = "    "


# Classes --------------------------------------------------------------------------------------------------------------

class Layout(NamedTuple):
    """Element separator and the indentation put before every element but the first."""
    separator: str
    indentation: str

    def join(self, parts: list[str]) -> str:
        return (self.separator + self.indentation).join(parts)


SINGLE_LINE = Layout(ELEMENT_SEPARATOR, INDENTATION_FOR_SINGLE_LINE)
MULTI_LINE = Layout(ELEMENT_SEPARATOR_WITH_NEWLINE, INDENTATION_AFTER_NEWLINE)


class LayoutPolicy:
    """
    Decides whether a rendered single line candidate is short enough to keep.

    The threshold is an exclusive upper bound on the candidate length: a candidate
    of `max_length - 1` characters fits, one of `max_length` characters does not.

    Raises:
        TypeError: If max_length is not an int.
        ValueError: If max_length is not positive.
    """
    __slots__ = ("_max_length", "_lock")

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self._lock = threading.Lock()
        self._max_length = self._validate(max_length)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_length={self._max_length})"

    @property
    def max_length(self) -> int:
        return self._max_length

    @max_length.setter
    def max_length(self, value: int) -> None:
        value = self._validate(value)
        with self._lock:
            previous, self._max_length = self._max_length, value
        log.debug("max length for single line description changed from %d to %d", previous, value)

    def fits_single_line(self, description: str) -> bool:
        return len(description) < self._max_length

    def choose(self, single_line: str) -> Layout:
        """Layout to use for a container whose single line rendering is `single_line`."""
        return SINGLE_LINE if self.fits_single_line(single_line) else MULTI_LINE

    @staticmethod
    def _validate(value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"max length for single line description must be an int, got {class_name(value)}")
        if value <= 0:
            raise ValueError(f"max length for single line description must be > 0 but was {value}")
        return value
