"""Rendering of Python values as SQL literals."""

from __future__ import annotations

import datetime as dt
import io
from decimal import Decimal
from typing import Any, Callable

from ..utils.exceptions import UnsupportedLiteralError
from ..utils.typing import SqlLiteral, SupportsWrite
from .escape import escape_as_string_literal

LiteralRenderer = Callable[[Any, SupportsWrite], None]

_RENDERERS: dict[type, LiteralRenderer] = {}


def register_literal(type_: type, renderer: LiteralRenderer) -> None:
    """Register ``renderer`` for values of ``type_`` (and its subclasses).

    Registered renderers take precedence over the built-in ones, so this can
    also be used to change how e.g. ``float`` is written.

    Example:
        >>> import uuid
        >>> register_literal(uuid.UUID, lambda v, out: out.write(f"toUUID('{v}')"))
    """
    _RENDERERS[type_] = renderer


def unregister_literal(type_: type) -> None:
    _RENDERERS.pop(type_, None)


def _find_renderer(value: object) -> LiteralRenderer | None:
    for klass in type(value).__mro__:
        renderer = _RENDERERS.get(klass)
        if renderer is not None:
            return renderer
    return None


def write_literal(value: object, out: SupportsWrite) -> None:
    """Write ``value`` to ``out`` as a SQL literal.

    Args:
        value: Value to render
        out: Text sink

    Raises:
        UnsupportedLiteralError: If the value's type has no literal form
    """
    renderer = _find_renderer(value)
    if renderer is not None:
        renderer(value, out)
        return
    if isinstance(value, SqlLiteral):
        value.write_sql_literal(out)
        return
    if value is None:
        out.write("NULL")
        return
    # bool before int, it is a subclass
    if isinstance(value, bool):
        out.write("true" if value else "false")
        return
    if isinstance(value, (int, float, Decimal)):
        out.write(str(value))
        return
    if isinstance(value, str):
        escape_as_string_literal(value, out)
        return
    if isinstance(value, dt.datetime):
        escape_as_string_literal(_datetime_text(value), out)
        return
    if isinstance(value, dt.date):
        escape_as_string_literal(value.isoformat(), out)
        return
    if isinstance(value, (list, tuple)):
        _write_sequence(value, out)
        return
    raise UnsupportedLiteralError(
        f"Unsupported literal type: {type(value)!r}",
        context={"value": repr(value)},
    )


def _datetime_text(value: dt.datetime) -> str:
    """Aware values are converted to UTC; naive ones are written as given."""
    if value.utcoffset() is not None:
        value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    timespec = "microseconds" if value.microsecond else "seconds"
    return value.isoformat(sep=" ", timespec=timespec)


def _write_sequence(values: list[Any] | tuple[Any, ...], out: SupportsWrite) -> None:
    out.write("[")
    push_separator = False
    for item in values:
        if push_separator:
            out.write(", ")
        else:
            push_separator = True
        write_literal(item, out)
    out.write("]")


def format_literal(value: object) -> str:
    buf = io.StringIO()
    write_literal(value, buf)
    return buf.getvalue()
