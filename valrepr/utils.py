"""
Valrepr utilities shared across the package.

Contains class name helpers used by scalar rendering and error messages.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the canonical `module.qualname` name
            for non-builtin classes. Builtins are always returned bare.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(int, fully_qualified=True)
        'int'
        >>> class Outer:
        ...     class Inner: ...
        >>> class_name(Outer.Inner)
        'Inner'
        >>> class_name(Outer.Inner, fully_qualified=True)
        '__main__.Outer.Inner'
    """
    cls = obj if isinstance(obj, type) else obj.__class__

    if not fully_qualified or cls.__module__ == "builtins":
        return cls.__name__
    return f"{cls.__module__}.{cls.__qualname__}"


def canonical_name(cls: type) -> str:
    """Canonical name of a class, as shown in diagnostic messages."""
    return class_name(cls, fully_qualified=True)


def has_default_repr(obj: Any, form: str) -> bool:
    """
    Check whether `form` is the identity based text that `object.__repr__` gives for `obj`.

    Such text looks like '<module.Name object at 0x7f...>' and differs on every run.
    """
    return form == object.__repr__(obj)
