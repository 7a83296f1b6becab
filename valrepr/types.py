"""
Helper value types with dedicated renderings.

Python lacks a few of the value kinds diagnostic messages need to tell apart:
single characters, key/value entries, ordering functions and predicate
descriptions. The classes below give them a distinct runtime type so the
renderer can pick their literal syntax.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Final

__all__ = [
    "Char",
    "ANONYMOUS_COMPARATOR",
    "Comparator",
    "MapEntry",
    "PredicateDescription",
    "GIVEN",
    "comparator",
    "entry",
]


# Classes --------------------------------------------------------------------------------------------------------------

class Char(str):
    """
    A single character, rendered in single quotes.

    Raises:
        ValueError: If the given text is not exactly one character long.
    """
    __slots__ = ()

    def __new__(cls, value: str) -> "Char":
        if not isinstance(value, str):
            raise TypeError(f"Char value must be a str, got {type(value).__name__}")
        if len(value) != 1:
            raise ValueError(f"Char value must be exactly one character, got {len(value)}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"


@dataclass(frozen=True)
class MapEntry:
    """A single key/value pair."""
    key: Any
    value: Any


@dataclass(frozen=True)
class PredicateDescription:
    """
    Human readable description of a predicate.

    The default description is rendered bare, any other one in single quotes.
    """
    description: str

    DEFAULT: ClassVar[str] = "given"

    @property
    def is_default(self) -> bool:
        return self.description == PredicateDescription.DEFAULT


GIVEN: Final[PredicateDescription] = PredicateDescription(PredicateDescription.DEFAULT)

# text form of comparators without a name of their own
ANONYMOUS_COMPARATOR: Final = "anonymous comparator class"


class Comparator(ABC):
    """
    Ordering function comparing two values.

    `compare(a, b)` returns a negative number, zero or a positive number when `a` sorts
    before, together with, or after `b`. Instances are callables and can produce a sort key.

    Examples:
        >>> class ByLength(Comparator):
        ...     def compare(self, a, b):
        ...         return len(a) - len(b)
        >>> sorted(["ccc", "a", "bb"], key=ByLength().key())
        ['a', 'bb', 'ccc']
    """

    @abstractmethod
    def compare(self, a: Any, b: Any) -> int:
        ...

    def __call__(self, a: Any, b: Any) -> int:
        return self.compare(a, b)

    def key(self) -> Callable[[Any], Any]:
        return functools.cmp_to_key(self.compare)


class _FunctionComparator(Comparator):
    __slots__ = ("_fn", "_description")

    def __init__(self, fn: Callable[[Any, Any], int], description: str | None = None) -> None:
        self._fn = fn
        self._description = description

    def compare(self, a: Any, b: Any) -> int:
        return self._fn(a, b)

    def __str__(self) -> str:
        if self._description is not None:
            return self._description
        name = getattr(self._fn, "__qualname__", None) or getattr(self._fn, "__name__", "")
        if not name or name.endswith("<lambda>"):
            return ANONYMOUS_COMPARATOR
        return name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fn!r})"


# Methods --------------------------------------------------------------------------------------------------------------

def comparator(fn: Callable[[Any, Any], int], description: str | None = None) -> Comparator:
    """
    Wrap a two-argument compare function into a Comparator.

    The comparator's text form is the given description, or the function's qualified name.
    Lambdas and other nameless callables are shown as `ANONYMOUS_COMPARATOR`.

    Raises:
        TypeError: If fn is not callable.
    """
    if not callable(fn):
        raise TypeError(f"compare function must be callable, got {type(fn).__name__}")
    return _FunctionComparator(fn, description)


def entry(key: Any, value: Any) -> MapEntry:
    """Shortcut for MapEntry(key, value)."""
    return MapEntry(key, value)
