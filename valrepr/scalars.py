"""
Literal rendering of terminal values.

Each scalar kind has a fixed, non configurable syntax:

    "text"              str
    'c'                 Char
    3L                  numpy.int64
    2.5f                numpy.float32
    3, 1.5, 1/2         other numbers, in their natural form
    2024-01-02T03:04:05.006
                        datetime (with milliseconds), date (at midnight, no milliseconds)
    pkg.mod.Name        classes, by canonical name
    /abs/path           path-like objects, made absolute
    a+b*                regex patterns and string templates, unquoted
    'cmp'               Comparator instances
    given, 'desc'       PredicateDescription
    Future[...]         futures: [Incomplete], [Completed: x], [Failed: x], [Cancelled]
    ValueError: msg     exceptions

Rendering of nested values (future results, future errors) goes through the
`render` callback so that custom formatters apply to them as well.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import asyncio
import concurrent.futures
import datetime as dt
import numbers
import os
import re
import string

from typing import Any, Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .types import ANONYMOUS_COMPARATOR, Char, Comparator, PredicateDescription
from .utils import canonical_name, class_name, has_default_repr

Render = Callable[[Any], str | None]

NULL = "null"

DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

IDENTITY_MARKER = " at 0x"

FUTURE_TYPES = (concurrent.futures.Future, asyncio.Future)


# Methods --------------------------------------------------------------------------------------------------------------

def is_scalar(value: Any) -> bool:
    """True if value has a dedicated literal rendering rule."""
    return _find_rule(value) is not None


def format_scalar(value: Any, render: Render) -> str:
    """
    Render a scalar value with its literal syntax.

    Args:
        value: A value for which `is_scalar(value)` is true.
        render: Callback rendering nested values, used for future results and errors.

    Raises:
        TypeError: If value has no scalar rule.
    """
    rule = _find_rule(value)
    if rule is None:
        raise TypeError(f"no scalar rendering rule for {class_name(value)}")
    return rule(value, render)


def quote(text: str) -> str:
    return f"'{text}'"


def null_safe(text: str | None) -> str:
    """Text of a rendered value, or the null literal for a missing one."""
    return NULL if text is None else text


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_datetime(value: dt.datetime, render: Render) -> str:
    return f"{value.strftime(DATETIME_FORMAT)}.{value.microsecond // 1000:03d}"


def _fmt_date(value: dt.date, render: Render) -> str:
    return dt.datetime.combine(value, dt.time()).strftime(DATETIME_FORMAT)


def _fmt_type(value: type, render: Render) -> str:
    return canonical_name(value)


def _fmt_number(value: numbers.Number, render: Render) -> str:
    if isinstance(value, np.int64):
        return f"{value!s}L"
    if isinstance(value, np.float32):
        return f"{value!s}f"
    return str(value)


def _fmt_path(value: os.PathLike, render: Render) -> str:
    path = os.fsdecode(os.fspath(value))
    if os.path.isabs(path):
        return path
    return os.path.join(os.getcwd(), path)


def _fmt_str(value: str, render: Render) -> str:
    return f'"{value}"'


def _fmt_char(value: Char, render: Render) -> str:
    return f"'{value}'"


def _fmt_comparator(value: Comparator, render: Render) -> str:
    form = str(value)
    if IDENTITY_MARKER not in form:
        return quote(form)
    short_name = type(value).__name__
    if not short_name:
        return quote(ANONYMOUS_COMPARATOR)
    # text form not redefined, the short class name is more helpful
    if has_default_repr(value, form):
        return quote(short_name)
    return quote(form)


def _fmt_pattern(value: re.Pattern, render: Render) -> str:
    pattern = value.pattern
    return pattern if isinstance(pattern, str) else str(pattern)


def _fmt_template(value: string.Template, render: Render) -> str:
    return value.template


def _fmt_predicate(value: PredicateDescription, render: Render) -> str:
    return value.description if value.is_default else quote(value.description)


def _fmt_future(value: concurrent.futures.Future | asyncio.Future, render: Render) -> str:
    """
    Render the state of a future without waiting for it.

    Reading the error of a failed asyncio future marks it as retrieved, so asyncio
    no longer logs "exception was never retrieved" for it once it has been rendered.
    concurrent.futures futures have no such bookkeeping.
    """
    name = type(value).__name__
    if not value.done():
        return f"{name}[Incomplete]"
    if value.cancelled():
        return f"{name}[Cancelled]"
    error = value.exception()
    if error is not None:
        return f"{name}[Failed: {null_safe(render(error))}]"
    return f"{name}[Completed: {null_safe(render(value.result()))}]"


def _fmt_exception(value: BaseException, render: Render) -> str:
    name = class_name(value)
    message = str(value)
    return f"{name}: {message}" if message else name


def _is_number(value: Any) -> bool:
    # bool is an int subclass but renders as its own text form
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


# Order matters: datetime before date, Char before str
_RULES: tuple[tuple[Callable[[Any], bool], Callable[[Any, Render], str]], ...] = (
    (lambda v: isinstance(v, dt.datetime), _fmt_datetime),
    (lambda v: isinstance(v, dt.date), _fmt_date),
    (lambda v: isinstance(v, type), _fmt_type),
    (_is_number, _fmt_number),
    (lambda v: isinstance(v, os.PathLike), _fmt_path),
    (lambda v: isinstance(v, Char), _fmt_char),
    (lambda v: isinstance(v, str), _fmt_str),
    (lambda v: isinstance(v, Comparator), _fmt_comparator),
    (lambda v: isinstance(v, re.Pattern), _fmt_pattern),
    (lambda v: isinstance(v, string.Template), _fmt_template),
    (lambda v: isinstance(v, PredicateDescription), _fmt_predicate),
    (lambda v: isinstance(v, FUTURE_TYPES), _fmt_future),
    (lambda v: isinstance(v, BaseException), _fmt_exception),
)


def _find_rule(value: Any) -> Callable[[Any, Render], str] | None:
    for matches, rule in _RULES:
        if matches(value):
            return rule
    return None
