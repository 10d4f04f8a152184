"""Incremental construction of SQL query strings."""

from __future__ import annotations

import io
import logging
import weakref
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar, Union

from ..config import DEFAULT_CONFIG, BuilderConfig
from ..engine.dialects import DialectSpec, get_dialect
from ..utils.exceptions import (
    BuilderBorrowedError,
    BuilderFinalizedError,
    ChqueryError,
    QueryFormatError,
)
from .escape import escape
from .literals import write_literal

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

Sep = TypeVar("Sep")


class QueryBuilder:
    """Accumulates raw SQL fragments and escaped literals into one query string.

    Every call appends immediately; there is no way to take text back out.
    ``build()`` hands over the finished string and retires the builder.

    Example:
        >>> qb = QueryBuilder("SELECT * FROM test")
        >>> qb.push(" WHERE foo = ").push_bind("bar").build()
        "SELECT * FROM test WHERE foo = 'bar'"
    """

    def __init__(
        self,
        init: object = "",
        dialect: Optional[Union[str, DialectSpec]] = None,
        config: Optional[BuilderConfig] = None,
    ):
        self._config = config or DEFAULT_CONFIG
        if dialect is None:
            self._dialect = self._config.dialect_spec
        elif isinstance(dialect, str):
            self._dialect = get_dialect(dialect)
        else:
            self._dialect = dialect
        self._query = io.StringIO()
        self._query.write(str(init))
        self._finalized = False
        # weak, so a view dropped without finish() releases the builder
        self._borrowed_by: Optional[weakref.ReferenceType[Separated[Any]]] = None

    @property
    def dialect(self) -> DialectSpec:
        return self._dialect

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def is_borrowed(self) -> bool:
        """True while a ``Separated`` session holds this builder."""
        return self._borrower() is not None

    def push(self, sql: object) -> QueryBuilder:
        """Append the text form of ``sql`` without any escaping.

        Only pass text that is already safe: keywords, operators, trusted
        identifiers. Use ``push_bind`` for values.
        """
        self._check_usable()
        return self._push(sql)

    def push_bind(self, value: object) -> QueryBuilder:
        """Append ``value`` rendered as an escaped SQL literal."""
        self._check_usable()
        return self._push_bind(value)

    def push_identifier(self, name: object) -> QueryBuilder:
        """Append ``name`` quoted as an identifier for this builder's dialect."""
        self._check_usable()
        return self._push_identifier(name)

    def separated(self, separator: Sep) -> Separated[Sep]:
        """Start a separator-delimited list on this builder.

        The builder is unusable until the returned view is finished, either by
        calling ``finish()`` or by leaving its ``with`` block.

        Args:
            separator: Text written between consecutive items

        Returns:
            A ``Separated`` view borrowing this builder
        """
        self._check_usable()
        view = Separated(self, separator)
        self._borrowed_by = weakref.ref(view)
        return view

    def build(self) -> str:
        """Return the accumulated query. The builder cannot be used afterwards."""
        self._check_usable()
        query = self._query.getvalue()
        self._finalized = True
        self._query.close()
        if self._config.log_queries:
            logger.debug("Built query (%s): %s", self._dialect.name, query)
        return query

    # Unchecked appends, shared with Separated which already holds the borrow.
    # Text is rendered in full before it is written, so a failed append
    # leaves the buffer untouched.

    def _push(self, sql: object) -> QueryBuilder:
        self._query.write(_to_text(sql))
        return self

    def _push_bind(self, value: object) -> QueryBuilder:
        self._query.write(self._render_literal(value))
        return self

    def _push_identifier(self, name: object) -> QueryBuilder:
        self._query.write(self._render_identifier(name))
        return self

    def _render_literal(self, value: object) -> str:
        buf = io.StringIO()
        try:
            write_literal(value, buf)
        except ChqueryError:
            raise
        except Exception as exc:
            raise QueryFormatError(
                "error formatting literal", context={"type": type(value).__name__}
            ) from exc
        return buf.getvalue()

    def _render_identifier(self, name: object) -> str:
        buf = io.StringIO()
        escape(_to_text(name), buf, self._dialect.identifier_quote)
        return buf.getvalue()

    def _release(self, view: Separated[Any]) -> None:
        if self._borrower() is view:
            self._borrowed_by = None

    def _borrower(self) -> Optional[Separated[Any]]:
        if self._borrowed_by is None:
            return None
        view = self._borrowed_by()
        if view is None:
            self._borrowed_by = None
        return view

    def _check_usable(self) -> None:
        if self._finalized:
            logger.debug("QueryBuilder used after build()")
            raise BuilderFinalizedError("QueryBuilder has already been built")
        view = self._borrower()
        if view is not None:
            logger.debug("QueryBuilder used while a separated session is active")
            raise BuilderBorrowedError(
                "QueryBuilder is borrowed by an active separated session",
                context={"separator": repr(view.separator)},
            )

    def __str__(self) -> str:
        if self._finalized:
            return ""
        return self._query.getvalue()

    def __repr__(self) -> str:
        state = "built" if self._finalized else repr(self._query.getvalue())
        return f"QueryBuilder({state}, dialect={self._dialect.name!r})"


class Separated(Generic[Sep]):
    """A view on a ``QueryBuilder`` that writes ``separator`` between items.

    The separator goes before every ``push``/``push_bind``/``push_identifier``
    except the first one made through this view. ``push_unseparated`` never
    writes it and does not count as an item.

    Example:
        >>> qb = QueryBuilder("SELECT * FROM t WHERE id IN (")
        >>> with qb.separated(", ") as sep:
        ...     for value in (1, 2, 3):
        ...         sep.push_bind(value)
        >>> qb.push(")").build()
        'SELECT * FROM t WHERE id IN (1, 2, 3)'
    """

    def __init__(self, builder: QueryBuilder, separator: Sep):
        self._builder: Optional[QueryBuilder] = builder
        self.separator = separator
        self._push_separator = False

    @property
    def is_finished(self) -> bool:
        return self._builder is None

    def push_unseparated(self, sql: object) -> Separated[Sep]:
        """Append ``sql`` without a separator, e.g. an opening parenthesis."""
        self._active()._push(sql)
        return self

    def push(self, sql: object) -> Separated[Sep]:
        builder = self._active()
        self._push_item(builder, _to_text(sql))
        return self

    def push_bind(self, value: object) -> Separated[Sep]:
        builder = self._active()
        self._push_item(builder, builder._render_literal(value))
        return self

    def push_identifier(self, name: object) -> Separated[Sep]:
        builder = self._active()
        self._push_item(builder, builder._render_identifier(name))
        return self

    def _push_item(self, builder: QueryBuilder, text: str) -> None:
        if self._push_separator:
            builder._push(_to_text(self.separator) + text)
        else:
            builder._push(text)
            self._push_separator = True

    def finish(self) -> QueryBuilder:
        """End the session and hand the builder back."""
        builder = self._active()
        builder._release(self)
        self._builder = None
        return builder

    def _active(self) -> QueryBuilder:
        if self._builder is None:
            logger.debug("Separated session used after finish()")
            raise BuilderFinalizedError("Separated session has already finished")
        return self._builder

    def __enter__(self) -> Separated[Sep]:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._builder is not None:
            self.finish()


def _to_text(sql: object) -> str:
    try:
        return str(sql)
    except Exception as exc:
        raise QueryFormatError(
            "error formatting `sql`", context={"type": type(sql).__name__}
        ) from exc
