"""Runtime configuration objects for chquery."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .engine.dialects import DEFAULT_DIALECT, DialectSpec, dialect_from_url, get_dialect
from .utils.exceptions import ValidationError

_TRUTHY = ("true", "1", "yes", "on")
_FALSY = ("false", "0", "no", "off", "")


@dataclass
class BuilderConfig:
    """Options shared by every ``QueryBuilder`` created with this config."""

    dialect: str = DEFAULT_DIALECT
    log_queries: bool = False
    options: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize and validate the dialect name."""
        self.dialect = self.dialect.lower()
        get_dialect(self.dialect)

    @property
    def dialect_spec(self) -> DialectSpec:
        return get_dialect(self.dialect)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValidationError(
        f"Invalid boolean in environment variable {name}: {raw!r}",
        context={"accepted": ", ".join(_TRUTHY + _FALSY[:-1])},
    )


def _load_env_config() -> dict[str, object]:
    """Load configuration from environment variables.

    Returns:
        Dictionary of configuration values from environment
    """
    config: dict[str, object] = {}

    # URL is handled separately in create_config
    if "CHQUERY_DIALECT" in os.environ:
        config["dialect"] = os.environ["CHQUERY_DIALECT"]

    if "CHQUERY_LOG_QUERIES" in os.environ:
        config["log_queries"] = _parse_bool(
            "CHQUERY_LOG_QUERIES", os.environ["CHQUERY_LOG_QUERIES"]
        )

    return config


def create_config(url: str | None = None, **kwargs: object) -> BuilderConfig:
    """Build a ``BuilderConfig`` from arguments and the environment.

    Supports environment variables for configuration:
    - CHQUERY_URL: Database URL whose backend selects the dialect
    - CHQUERY_DIALECT: Dialect name (overrides the URL)
    - CHQUERY_LOG_QUERIES: Log each built query at DEBUG level (true/false)

    Args:
        url: Database URL (e.g., "clickhouse+native://localhost/default").
             If None, will try the CHQUERY_URL environment variable.
             Only used to pick the dialect; no connection is made.
        **kwargs: Configuration options. Valid keys include:
            - dialect: Dialect name, wins over the URL
            - log_queries: Log built queries
            - Other options are stored in config.options

    Returns:
        BuilderConfig instance with parsed configuration

    Raises:
        ValidationError: If the dialect is unknown or an environment value is invalid
    """
    if url is None:
        url = os.environ.get("CHQUERY_URL")

    env_config = _load_env_config()

    # Merge: kwargs override env vars, env vars override the URL
    merged_kwargs = {**env_config, **kwargs}

    if "dialect" not in merged_kwargs and url:
        merged_kwargs["dialect"] = dialect_from_url(url).name

    config_kwargs: dict[str, object] = {
        k: merged_kwargs.pop(k)
        for k in list(merged_kwargs)
        if k in BuilderConfig.__dataclass_fields__ and k != "options"
    }
    return BuilderConfig(**config_kwargs, options=merged_kwargs)  # type: ignore[arg-type]


DEFAULT_CONFIG = BuilderConfig()
