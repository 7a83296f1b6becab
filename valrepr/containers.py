"""
Recursive rendering of arrays, collections, mappings, tuples and map entries.

Formatters here only assemble text. Elements are rendered through an
`ElementRenderer` callback supplied by the representation, which applies custom
formatters, scalar rules and self-reference sentinels, and renders None as `null`.

Self-reference sentinels by kind of the repeated container:

    (this array)        list or object numpy array already open on the path
    (this Collection)   other collection already open on the path
    (this Map)          key or value that is the mapping itself
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc

from dataclasses import dataclass, field
from operator import itemgetter
from typing import Any, Callable, Iterator

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .cycles import CycleGuard
from .kinds import is_primitive_array
from .layout import SINGLE_LINE, Layout
from .types import Char, MapEntry
from .utils import class_name

DEFAULT_START = "["
DEFAULT_END = "]"

TUPLE_START = "("
TUPLE_END = ")"

MAP_START = "{"
MAP_END = "}"

THIS_ARRAY = "(this array)"
THIS_COLLECTION = "(this Collection)"
THIS_MAP = "(this Map)"

# signed integer typecodes, boxed to np.int64 when their items are 64 bits wide
_SIGNED_TYPECODES = "bhilq"

# other array.array typecodes boxed into types with a dedicated literal syntax
_BOXED_TYPECODES: dict[str, Callable[[Any], Any]] = {
    "f": np.float32,
    "u": Char,
    "w": Char,
}


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class RenderContext:
    """State of one top-level render call, threaded through the recursion."""
    guard: CycleGuard = field(default_factory=CycleGuard)


# Renders one element: (element, context, layout of the enclosing array or None) -> text
ElementRenderer = Callable[[Any, RenderContext, Layout | None], str]


# Methods --------------------------------------------------------------------------------------------------------------

def format_array(items: Any, layout: Layout, ctx: RenderContext, render_element: ElementRenderer) -> str:
    """
    Render a list or a non-primitive numpy array as `[e1, e2, ...]`.

    The array stays open in the context's guard while its elements are rendered.
    Nested arrays receive the same layout, so a layout decision made for the
    outermost array applies to all array levels below it.
    """
    if len(items) == 0:
        return DEFAULT_START + DEFAULT_END
    with ctx.guard.visiting(items, THIS_ARRAY):
        parts = [render_element(element, ctx, layout) for element in _array_elements(items)]
    return DEFAULT_START + layout.join(parts) + DEFAULT_END


def format_collection(items: abc.Collection, layout: Layout, ctx: RenderContext,
                      render_element: ElementRenderer,
                      start: str = DEFAULT_START, end: str = DEFAULT_END) -> str:
    """
    Render a sized collection in its iteration order as `[e1, e2, ...]`.

    Nested containers make their own layout decision.
    """
    if len(items) == 0:
        return start + end
    with ctx.guard.visiting(items, THIS_COLLECTION):
        parts = [render_element(element, ctx, None) for element in items]
    return start + layout.join(parts) + end


def format_primitive_array(value: Any, render_element: Callable[[Any], str]) -> str:
    """
    Render a flat array of numbers, bools or characters on a single line.

    Elements are boxed into the scalar types matching their storage,
    e.g. `array('q')` items render as `1L` and `array('u')` items as `'a'`.

    Raises:
        TypeError: If value is not a primitive array.
    """
    if not is_primitive_array(value):
        raise TypeError(f"expected an array of primitives, got {class_name(value)}")
    parts = [render_element(element) for element in _primitive_elements(value)]
    return DEFAULT_START + SINGLE_LINE.join(parts) + DEFAULT_END


def format_tuple(value: tuple, ctx: RenderContext, render_element: ElementRenderer) -> str:
    """Render a tuple as `(e1, e2, ...)`, always on a single line."""
    parts = [render_element(element, ctx, None) for element in value]
    return TUPLE_START + SINGLE_LINE.join(parts) + TUPLE_END


def format_map_entry(value: MapEntry, ctx: RenderContext, render_element: ElementRenderer) -> str:
    key = render_element(value.key, ctx, None)
    val = render_element(value.value, ctx, None)
    return f"MapEntry[key={key}, value={val}]"


def format_mapping(mapping: abc.Mapping, ctx: RenderContext, render_element: ElementRenderer) -> str:
    """
    Render a mapping as `{k1=v1, k2=v2}`, sorted by key when keys are orderable.

    Only direct self-reference is detected: a key or value that is the mapping
    itself renders as `(this Map)`. The mapping is not registered in the guard.
    """
    entries = _sorted_entries_if_possible(mapping)
    if not entries:
        return MAP_START + MAP_END

    def fmt(obj: Any) -> str:
        return THIS_MAP if obj is mapping else render_element(obj, ctx, None)

    parts = [f"{fmt(key)}={fmt(val)}" for key, val in entries]
    return MAP_START + ", ".join(parts) + MAP_END


# Private Methods ------------------------------------------------------------------------------------------------------

def _array_elements(items: Any) -> Any:
    # iterate ndarray subclasses (e.g. np.matrix) as plain arrays so rows are 1-d
    return np.asarray(items) if isinstance(items, np.ndarray) else items


def _sorted_entries_if_possible(mapping: abc.Mapping) -> list[tuple[Any, Any]]:
    """Entries sorted by key, or in iteration order if keys contain None or cannot be ordered."""
    entries = list(mapping.items())
    if any(key is None for key, _ in entries):
        return entries
    try:
        return sorted(entries, key=itemgetter(0))
    except (TypeError, ValueError):
        return entries


def _primitive_elements(value: Any) -> Iterator[Any]:
    if isinstance(value, array.array):
        box = _array_box(value)
        return iter(value) if box is None else map(box, value)
    value = np.asarray(value)
    if value.dtype.kind == "U":
        return (_as_char(element) for element in value)
    return iter(value)


def _array_box(value: array.array) -> Callable[[Any], Any] | None:
    if value.typecode in _SIGNED_TYPECODES and value.itemsize == np.dtype(np.int64).itemsize:
        return np.int64
    return _BOXED_TYPECODES.get(value.typecode)


def _as_char(element: Any) -> Any:
    text = str(element)
    return Char(text) if len(text) == 1 else text
