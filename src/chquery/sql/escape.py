"""Quoting and escaping of string literals and identifiers.

Inside a quoted token a backslash is written as ``\\\\`` and the quote
character itself as a backslash followed by the quote. Everything else,
including newlines, is written through unchanged.

See https://clickhouse.com/docs/en/sql-reference/syntax#string and
https://clickhouse.com/docs/en/sql-reference/syntax#identifiers
"""

from __future__ import annotations

import io
from typing import Optional, Union

from ..engine.dialects import DialectSpec, get_dialect
from ..utils.typing import SupportsWrite


def escape_as_string_literal(src: str, out: SupportsWrite) -> None:
    """Write ``src`` to ``out`` as a single-quoted string literal."""
    escape(src, out, "'")


def escape_as_identifier(src: str, out: SupportsWrite) -> None:
    """Write ``src`` to ``out`` as a backtick-quoted identifier."""
    escape(src, out, "`")


def escape(src: str, out: SupportsWrite, quote: str) -> None:
    """Write ``src`` to ``out`` wrapped in ``quote``.

    Errors raised by ``out.write`` propagate immediately, so a failing sink may
    be left holding a partial token.
    """
    out.write(quote)

    # TODO: escape newlines once the expected dialect behaviour is pinned down.
    for idx, part in enumerate(src.split(quote)):
        if idx > 0:
            out.write("\\")
            out.write(quote)

        for sub_idx, sub_part in enumerate(part.split("\\")):
            if sub_idx > 0:
                out.write("\\\\")
            out.write(sub_part)

    out.write(quote)


def quote_string(src: str) -> str:
    buf = io.StringIO()
    escape_as_string_literal(src, buf)
    return buf.getvalue()


def quote_identifier(src: str, dialect: Optional[Union[str, DialectSpec]] = None) -> str:
    """Return ``src`` quoted as an identifier.

    Args:
        src: Table, column or other name
        dialect: Dialect name or spec whose identifier quote is used
            (default: backtick)

    Returns:
        The quoted identifier
    """
    buf = io.StringIO()
    if dialect is None:
        escape_as_identifier(src, buf)
    else:
        spec = get_dialect(dialect) if isinstance(dialect, str) else dialect
        escape(src, buf, spec.identifier_quote)
    return buf.getvalue()
