"""Dashboard API configuration.

Built from a project ``bizdash.yaml`` (``from_project``) or from
``BIZDASH_DASHBOARD_*`` environment variables (``from_env``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

from bizdash.config import DEFAULT_STORE_TIMEOUT, LOG_LEVELS, BizdashConfig
from bizdash.upgrade.handler import DEFAULT_HISTORY_SIZE

ENV_PREFIX = "BIZDASH_DASHBOARD_"


@dataclass
class DashboardConfig:
    """Settings for the dashboard API.

    Unset ``catalog_file`` means the bundled catalog. With neither an
    accounts file nor a store URL every gated area is locked.
    """

    host: str = "127.0.0.1"
    port: int = 8420
    catalog_file: str | None = None
    accounts_file: str | None = None
    store_url: str | None = None
    store_api_key: str | None = None
    store_timeout: float = DEFAULT_STORE_TIMEOUT
    upgrade_webhook_url: str | None = None
    upgrade_history_size: int = DEFAULT_HISTORY_SIZE
    log_level: str = "INFO"
    dev_mode: bool = False

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.store_timeout <= 0:
            raise ValueError("store_timeout must be positive")

    @classmethod
    def from_env(cls) -> DashboardConfig:
        """Create config from ``BIZDASH_DASHBOARD_<FIELD>`` variables.

        e.g. ``BIZDASH_DASHBOARD_PORT=9000``, ``BIZDASH_DASHBOARD_DEV_MODE=1``.
        """
        kwargs: dict[str, Any] = {}
        for fld in fields(cls):
            val = os.environ.get(f"{ENV_PREFIX}{fld.name.upper()}")
            if val is None:
                continue
            kwargs[fld.name] = _coerce(fld.type, val)
        return cls(**kwargs)

    @classmethod
    def from_project(cls, project: BizdashConfig, **overrides: Any) -> DashboardConfig:
        """Carry the store, upgrade and logging settings of a ``bizdash.yaml``.

        *overrides* that are ``None`` are ignored, so unset CLI flags fall
        back to the project file.
        """
        upgrade = project.upgrade or {}
        kwargs: dict[str, Any] = {
            "catalog_file": project.catalog,
            "accounts_file": project.accounts,
            "store_url": project.store_url,
            "store_api_key": project.store_api_key,
            "store_timeout": project.store_timeout,
            "upgrade_webhook_url": project.upgrade_webhook_url,
            "upgrade_history_size": upgrade.get("history_size", DEFAULT_HISTORY_SIZE),
            "log_level": project.log_level,
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    def project_config(self) -> BizdashConfig:
        """The subset of settings the core store factory reads."""
        return BizdashConfig(
            catalog=self.catalog_file,
            accounts=self.accounts_file,
            store_url=self.store_url,
            store_api_key=self.store_api_key,
            store_timeout=self.store_timeout,
            upgrade={
                "webhook_url": self.upgrade_webhook_url,
                "history_size": self.upgrade_history_size,
            },
            log_level=self.log_level,
        )


def _coerce(field_type: Any, value: str) -> Any:
    # Annotations are strings under ``from __future__ import annotations``.
    if field_type == "int":
        return int(value)
    if field_type == "float":
        return float(value)
    if field_type == "bool":
        return value.lower() in ("1", "true", "yes")
    return value
