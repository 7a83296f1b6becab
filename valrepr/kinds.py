"""
Classification of runtime values into the kinds the renderer knows about.

A value is classified once, and the renderer dispatches on the resulting kind.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc

from enum import Enum, unique
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .scalars import is_scalar
from .types import MapEntry

# numpy dtype kinds rendered element by element on a single line: bool, ints, floats, complex
PRIMITIVE_DTYPE_KINDS = frozenset("biufc")


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ValueKind(str, Enum):
    """
    Closed set of value kinds:
        - "null": None
        - "scalar": value with a literal rendering rule
        - "array": list or numpy array holding objects or nested arrays
        - "primitive_array": flat array of numbers, bools or characters
        - "collection": any other sized, iterable container
        - "mapping": key/value mapping
        - "tuple": fixed arity ordered group
        - "map_entry": a single MapEntry
        - "opaque": rendered with its own str()
    """
    NULL = "null"
    SCALAR = "scalar"
    ARRAY = "array"
    PRIMITIVE_ARRAY = "primitive_array"
    COLLECTION = "collection"
    MAPPING = "mapping"
    TUPLE = "tuple"
    MAP_ENTRY = "map_entry"
    OPAQUE = "opaque"

    @property
    def is_container(self) -> bool:
        """Kinds that take part in self-reference detection."""
        return self in (ValueKind.ARRAY, ValueKind.COLLECTION)


# Methods --------------------------------------------------------------------------------------------------------------

def classify(value: Any) -> ValueKind:
    """
    Resolve the kind of value.

    Text-like binary values (bytes, bytearray, memoryview) and iterators are opaque:
    they are not decomposed into elements.

    Examples:
        >>> classify(None)
        <ValueKind.NULL: 'null'>
        >>> classify([1, 2])
        <ValueKind.ARRAY: 'array'>
        >>> classify(np.array([1, 2]))
        <ValueKind.PRIMITIVE_ARRAY: 'primitive_array'>
        >>> classify({1, 2})
        <ValueKind.COLLECTION: 'collection'>
    """
    if value is None:
        return ValueKind.NULL
    if is_scalar(value):
        return ValueKind.SCALAR
    if isinstance(value, array.array):
        return ValueKind.PRIMITIVE_ARRAY
    if isinstance(value, np.ndarray):
        return _classify_ndarray(value)
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.OPAQUE
    if isinstance(value, abc.Mapping):
        return ValueKind.MAPPING
    if isinstance(value, tuple):
        return ValueKind.TUPLE
    if isinstance(value, abc.Collection):
        return ValueKind.COLLECTION
    if isinstance(value, MapEntry):
        return ValueKind.MAP_ENTRY
    return ValueKind.OPAQUE


def is_primitive_array(value: Any) -> bool:
    return classify(value) is ValueKind.PRIMITIVE_ARRAY


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify_ndarray(value: np.ndarray) -> ValueKind:
    # ndarray subclasses are classified by their plain array view
    value = np.asarray(value)
    if value.ndim == 0:
        return ValueKind.OPAQUE
    if value.ndim == 1 and _is_primitive_dtype(value.dtype):
        return ValueKind.PRIMITIVE_ARRAY
    return ValueKind.ARRAY


def _is_primitive_dtype(dtype: np.dtype) -> bool:
    if dtype.kind in PRIMITIVE_DTYPE_KINDS:
        return True
    # one character unicode arrays are character arrays
    return dtype.kind == "U" and dtype.itemsize == np.dtype("U1").itemsize
