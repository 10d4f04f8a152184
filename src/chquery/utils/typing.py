"""Typing helpers shared across the project."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SupportsWrite(Protocol):
    """A text sink, e.g. ``io.StringIO`` or an open text file."""

    def write(self, s: str, /) -> object: ...


@runtime_checkable
class SqlLiteral(Protocol):
    """A value that knows how to render itself as a SQL literal."""

    def write_sql_literal(self, out: SupportsWrite) -> None: ...
