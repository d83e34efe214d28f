"""Config file loading and auto-discovery for bizdash.

Uses ``$BIZDASH_CONFIG`` when set, otherwise searches for ``bizdash.yaml``
in the current directory and its parents. Paths inside the file resolve
against the file's own directory.

Example::

    catalog: ./catalog.yaml        # optional, defaults to the bundled catalog
    accounts: ./accounts.yaml      # in-memory profile store seed
    store:                         # or a PostgREST profile store
      url: https://xyz.supabase.co
      api_key: eyJ...
      timeout: 5
    upgrade:
      webhook_url: https://billing.example.com/hooks/upgrade
      history_size: 100
    log_level: INFO
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "bizdash.yaml"
CONFIG_ENV = "BIZDASH_CONFIG"
DEFAULT_STORE_TIMEOUT = 10.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class BizdashConfig:
    """Parsed bizdash project configuration."""

    config_path: Path | None = None
    catalog: str | None = None
    accounts: str | None = None
    store_url: str | None = None
    store_api_key: str | None = None
    store_timeout: float = DEFAULT_STORE_TIMEOUT
    upgrade: dict[str, Any] | None = None
    log_level: str = "INFO"

    @property
    def uses_rest_store(self) -> bool:
        """True when both the store URL and its API key are configured."""
        return bool(self.store_url and self.store_api_key)

    @property
    def upgrade_webhook_url(self) -> str | None:
        return (self.upgrade or {}).get("webhook_url")


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``bizdash.yaml`` at or above *start* (default cwd)."""
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: str | Path | None = None,
    *,
    auto_discover: bool = True,
) -> BizdashConfig:
    """Load the project config.

    An explicit *path* wins, then ``$BIZDASH_CONFIG``; both must exist.
    Otherwise the nearest ``bizdash.yaml`` is used when *auto_discover* is
    set. With nothing found every setting keeps its default.
    """
    explicit = path if path is not None else os.environ.get(CONFIG_ENV)
    if explicit:
        config_path = Path(explicit).resolve()
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return _parse_config(config_path)

    found = find_config() if auto_discover else None
    return _parse_config(found) if found is not None else BizdashConfig()


def _section(data: dict[str, Any], key: str, config_path: Path) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be a mapping in {config_path}")
    return value


def _parse_config(config_path: Path) -> BizdashConfig:
    """Read a YAML config file and validate each section."""
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping in {config_path}, got {type(data).__name__}",
        )

    store = _section(data, "store", config_path)
    upgrade = _section(data, "upgrade", config_path)

    timeout = float(store.get("timeout", DEFAULT_STORE_TIMEOUT))
    if timeout <= 0:
        raise ValueError(f"'store.timeout' must be positive in {config_path}")

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log_level {log_level!r} in {config_path} "
            f"(expected one of {', '.join(LOG_LEVELS)})",
        )

    def _relative(key: str) -> str | None:
        value = data.get(key)
        return None if value is None else str((config_path.parent / value).resolve())

    return BizdashConfig(
        config_path=config_path,
        catalog=_relative("catalog"),
        accounts=_relative("accounts"),
        store_url=store.get("url"),
        store_api_key=store.get("api_key"),
        store_timeout=timeout,
        upgrade=upgrade or None,
        log_level=log_level,
    )
