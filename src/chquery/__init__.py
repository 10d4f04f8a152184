"""Public chquery API."""

from __future__ import annotations

from .config import BuilderConfig, create_config
from .engine.dialects import DialectSpec, get_dialect
from .sql.builders import QueryBuilder, Separated
from .sql.escape import (
    escape_as_identifier,
    escape_as_string_literal,
    quote_identifier,
    quote_string,
)
from .sql.literals import format_literal, register_literal

__version__ = "0.1.0"

__all__ = [
    "BuilderConfig",
    "DialectSpec",
    "QueryBuilder",
    "Separated",
    "__version__",
    "create_config",
    "escape_as_identifier",
    "escape_as_string_literal",
    "format_literal",
    "get_dialect",
    "query",
    "quote_identifier",
    "quote_string",
    "register_literal",
]


def query(init: object = "", **options: object) -> QueryBuilder:
    """Start a ``QueryBuilder`` configured from arguments and the environment.

    Configuration can be provided via arguments or environment variables:
    - CHQUERY_URL: Database URL whose backend selects the dialect
    - CHQUERY_DIALECT: Dialect name
    - CHQUERY_LOG_QUERIES: Log built queries at DEBUG level (true/false)

    Args:
        init: Initial query text
        **options: Passed to ``create_config`` (``url``, ``dialect``, ``log_queries``)

    Returns:
        A new QueryBuilder

    Example:
        >>> from chquery import query
        >>> query("SELECT 1", dialect="mysql").build()
        'SELECT 1'
    """
    url = options.pop("url", None)
    config = create_config(url, **options)  # type: ignore[arg-type]
    return QueryBuilder(init, config=config)
