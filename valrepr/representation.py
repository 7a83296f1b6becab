"""
Standard representation of runtime values for failure and error messages.

The module exposes a process-wide default `Representation` together with
module level shortcuts operating on it:

    >>> render("hi")
    '"hi"'
    >>> render(["a", None, 2.5])
    '["a", null, 2.5]'
    >>> render({2: "b", 1: "a"})
    '{1="a", 2="b"}'
    >>> a = [None]; a[0] = a
    >>> render(a)
    '[(this array)]'

Callers needing an isolated configuration create their own `Representation`.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .containers import (
    RenderContext,
    format_array,
    format_collection,
    format_map_entry,
    format_mapping,
    format_primitive_array,
    format_tuple,
)
from .kinds import ValueKind, classify
from .layout import DEFAULT_MAX_LENGTH, SINGLE_LINE, Layout, LayoutPolicy
from .registry import Formatter, FormatterRegistry
from .scalars import format_scalar, null_safe

__all__ = [
    "Representation",
    "STANDARD_REPRESENTATION",
    "configure",
    "get_default",
    "get_max_length_for_single_line_description",
    "register_formatter_for_type",
    "remove_all_registered_formatters",
    "render",
    "set_max_length_for_single_line_description",
]


# Classes --------------------------------------------------------------------------------------------------------------

class Representation:
    """
    Renders values into deterministic, human readable text.

    Dispatch order, first match wins:
        1. custom formatter registered for the exact type of the value
        2. scalar literal rule (text, numbers, dates, classes, paths, ...)
        3. arrays: lists and object arrays recursively, primitive arrays flat
        4. other collections
        5. mappings
        6. tuples
        7. map entries
        8. the value's own `str()`

    Containers are rendered on one line when that line is shorter than
    `max_length`, otherwise one element per line with a 4 space indentation.

    Args:
        registry: Custom formatters; a new empty registry if None.
        max_length: Exclusive upper bound on the length of single line descriptions.

    Raises:
        TypeError: If max_length is not an int.
        ValueError: If max_length is not positive.
    """

    def __init__(self, registry: FormatterRegistry | None = None, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self._registry = registry if registry is not None else FormatterRegistry()
        self._layout = LayoutPolicy(max_length)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_length={self.max_length}, formatters={len(self._registry)})"

    # ----- Configuration -----

    @property
    def registry(self) -> FormatterRegistry:
        return self._registry

    @property
    def max_length(self) -> int:
        return self._layout.max_length

    def get_max_length_for_single_line_description(self) -> int:
        return self._layout.max_length

    def set_max_length_for_single_line_description(self, value: int) -> None:
        """
        Raises:
            TypeError: If value is not an int.
            ValueError: If value is not positive.
        """
        self._layout.max_length = value

    def register_formatter_for_type(self, type_: type, formatter: Formatter) -> None:
        """Format all instances of exactly type_ with formatter, replacing any previous one."""
        self._registry.register(type_, formatter)

    def unregister_formatter_for_type(self, type_: type) -> Formatter | None:
        return self._registry.unregister(type_)

    def remove_all_registered_formatters(self) -> None:
        self._registry.clear()

    # ----- Rendering -----

    def render(self, value: Any) -> str | None:
        """
        Text representation of value, or None if value is None.

        Inside containers None renders as `null`; at the top level the caller
        decides how to show a missing value.
        """
        return self._to_string(value, RenderContext())

    def format_array(self, value: Any) -> str | None:
        """Text of a list, numpy array or array.array, or None if value is not an array."""
        kind = classify(value)
        if kind is ValueKind.PRIMITIVE_ARRAY:
            return self.format_primitive_array(value)
        if kind is ValueKind.ARRAY:
            return self._smart_format(format_array, value, RenderContext())
        return None

    def format_primitive_array(self, value: Any) -> str:
        """
        Single line text of a flat array of numbers, bools or characters.

        Raises:
            TypeError: If value is not such an array.
        """
        ctx = RenderContext()
        return format_primitive_array(value, lambda element: self._render_element(element, ctx))

    def smart_format(self, value: Any) -> str:
        """Text of a sized collection, on one line if short enough, one element per line otherwise."""
        return self._smart_format(format_collection, value, RenderContext())

    # ----- Private -----

    def _to_string(self, value: Any, ctx: RenderContext, layout: Layout | None = None) -> str | None:
        if value is None:
            return None

        formatter = self._registry.formatter_for(value)
        if formatter is not None:
            return formatter(value)

        kind = classify(value)
        if kind.is_container and value in ctx.guard:
            return ctx.guard.sentinel_for(value)

        if kind is ValueKind.SCALAR:
            return format_scalar(value, lambda v: self._to_string(v, ctx))
        if kind is ValueKind.PRIMITIVE_ARRAY:
            return format_primitive_array(value, lambda v: self._render_element(v, ctx))
        if kind is ValueKind.ARRAY:
            if layout is not None:
                # nested array, keep the layout chosen for the outermost one
                return format_array(value, layout, ctx, self._render_element)
            return self._smart_format(format_array, value, ctx)
        if kind is ValueKind.COLLECTION:
            return self._smart_format(format_collection, value, ctx)
        if kind is ValueKind.MAPPING:
            return format_mapping(value, ctx, self._render_element)
        if kind is ValueKind.TUPLE:
            return format_tuple(value, ctx, self._render_element)
        if kind is ValueKind.MAP_ENTRY:
            return format_map_entry(value, ctx, self._render_element)
        return str(value)

    def _render_element(self, value: Any, ctx: RenderContext, layout: Layout | None = None) -> str:
        return null_safe(self._to_string(value, ctx, layout))

    def _smart_format(self, format_fn, value: Any, ctx: RenderContext) -> str:
        single_line = format_fn(value, SINGLE_LINE, ctx, self._render_element)
        layout = self._layout.choose(single_line)
        if layout is SINGLE_LINE:
            return single_line
        return format_fn(value, layout, ctx, self._render_element)


# Default Representation -----------------------------------------------------------------------------------------------

STANDARD_REPRESENTATION = Representation()


# Methods --------------------------------------------------------------------------------------------------------------

def render(value: Any) -> str | None:
    """Render value with the default representation, see `Representation.render()`."""
    return STANDARD_REPRESENTATION.render(value)


def register_formatter_for_type(type_: type, formatter: Formatter) -> None:
    """Format all instances of exactly type_ with formatter in the default representation."""
    STANDARD_REPRESENTATION.register_formatter_for_type(type_, formatter)


def remove_all_registered_formatters() -> None:
    """Clear all custom formatters of the default representation."""
    STANDARD_REPRESENTATION.remove_all_registered_formatters()


def set_max_length_for_single_line_description(value: int) -> None:
    """
    Set the single line length threshold of the default representation.

    Raises:
        TypeError: If value is not an int.
        ValueError: If value is not positive.
    """
    STANDARD_REPRESENTATION.set_max_length_for_single_line_description(value)


def get_max_length_for_single_line_description() -> int:
    return STANDARD_REPRESENTATION.get_max_length_for_single_line_description()


def configure(*, max_length: int | None = None, formatters: Mapping[type, Formatter] | None = None) -> Representation:
    """
    Update the default representation in one call and return it.

    Args:
        max_length: New single line length threshold; unchanged if None.
        formatters: Custom formatters to register, added to the existing ones.

    Raises:
        TypeError: If max_length is not an int, or a formatter key or value is invalid.
        ValueError: If max_length is not positive.
    """
    if max_length is not None:
        STANDARD_REPRESENTATION.set_max_length_for_single_line_description(max_length)
    for type_, formatter in (formatters or {}).items():
        STANDARD_REPRESENTATION.register_formatter_for_type(type_, formatter)
    return STANDARD_REPRESENTATION


def get_default() -> Representation:
    return STANDARD_REPRESENTATION
