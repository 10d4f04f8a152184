"""Dialect registry and helpers."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from ..utils.exceptions import ValidationError


@dataclass(frozen=True)
class DialectSpec:
    name: str
    identifier_quote: str = "`"


# Both dialects escape with backslashes inside quoted tokens.
# See https://clickhouse.com/docs/en/sql-reference/syntax#string
DIALECTS: dict[str, DialectSpec] = {
    "clickhouse": DialectSpec(name="clickhouse"),
    "mysql": DialectSpec(name="mysql"),
    "mariadb": DialectSpec(name="mysql"),
}

DEFAULT_DIALECT = "clickhouse"


def get_dialect(name: str) -> DialectSpec:
    try:
        return DIALECTS[name.lower()]
    except KeyError as exc:
        raise ValidationError(
            f"Unknown dialect '{name}'", context={"known": ", ".join(sorted(DIALECTS))}
        ) from exc


def register_dialect(spec: DialectSpec, *aliases: str) -> None:
    """Register ``spec`` under its own name and any extra aliases."""
    for key in (spec.name, *aliases):
        DIALECTS[key.lower()] = spec


def dialect_from_url(url: str) -> DialectSpec:
    """Resolve a dialect from a database URL such as ``clickhouse+native://host/db``.

    The driver suffix is ignored, only the backend name is looked up.
    """
    try:
        backend = make_url(url).get_backend_name()
    except ArgumentError as exc:
        raise ValidationError(f"Could not parse database URL '{url}'") from exc
    return get_dialect(backend)
