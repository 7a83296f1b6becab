"""
Per-type custom formatters.

A custom formatter is a `Callable[[Any], str]` registered for an exact runtime type.
It takes precedence over every built-in rendering rule for values of that type,
but not for instances of its subclasses.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import threading

from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

log = logging.getLogger(__name__)

Formatter = Callable[[Any], str]


# Classes --------------------------------------------------------------------------------------------------------------

class FormatterRegistry(Mapping[type, Formatter]):
    """
    Read-mostly table of custom formatters keyed by exact type.

    Writers replace the whole table under a lock (copy-on-write), so readers
    always see a consistent snapshot without locking. Registration is meant
    to happen at configuration time; a render running concurrently with a
    writer sees either the old or the new table.

    Examples:
        >>> registry = FormatterRegistry()
        >>> registry.register(int, lambda v: f"int#{v}")
        >>> registry.formatter_for(5)(5)
        'int#5'
        >>> registry.formatter_for(True) is None  # bool is a subclass, not the exact type
        True
    """

    def __init__(self, formatters: Mapping[type, Formatter] | None = None) -> None:
        self._lock = threading.Lock()
        self._formatters: Mapping[type, Formatter] = MappingProxyType({})
        if formatters:
            for type_, formatter in formatters.items():
                self.register(type_, formatter)

    # ----- Mapping required methods -----

    def __getitem__(self, type_: type) -> Formatter:
        return self._formatters[type_]

    def __iter__(self) -> Iterator[type]:
        return iter(self._formatters)

    def __len__(self) -> int:
        return len(self._formatters)

    def __repr__(self) -> str:
        names = ", ".join(class_name(t, fully_qualified=True) for t in self._formatters)
        return f"{type(self).__name__}([{names}])"

    # ----- Lookup -----

    def formatter_for(self, value: Any) -> Formatter | None:
        """Formatter registered for the exact type of value, or None."""
        return self._formatters.get(type(value))

    # ----- Mutations -----

    def register(self, type_: type, formatter: Formatter) -> None:
        """
        Register formatter for all instances of type_, replacing any previous one.

        Raises:
            TypeError: If type_ is not a class or formatter is not callable.
        """
        if not isinstance(type_, type):
            raise TypeError(f"formatter key must be a type, got {class_name(type_)}")
        if not callable(formatter):
            raise TypeError(f"formatter must be callable, got {class_name(formatter)}")
        with self._lock:
            updated = dict(self._formatters)
            updated[type_] = formatter
            self._formatters = MappingProxyType(updated)
        log.debug("registered formatter for %s", class_name(type_, fully_qualified=True))

    def unregister(self, type_: type) -> Formatter | None:
        """Remove the formatter registered for type_, returning it or None."""
        with self._lock:
            if type_ not in self._formatters:
                return None
            updated = dict(self._formatters)
            removed = updated.pop(type_)
            self._formatters = MappingProxyType(updated)
        log.debug("unregistered formatter for %s", class_name(type_, fully_qualified=True))
        return removed

    def clear(self) -> None:
        """Remove all registered formatters."""
        with self._lock:
            count = len(self._formatters)
            self._formatters = MappingProxyType({})
        log.debug("removed %d registered formatters", count)
