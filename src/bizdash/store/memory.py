"""In-memory profile store, optionally seeded from a YAML accounts file.

File format::

    accounts:
      acct-tools:
        organization: org-acme
        profile:
          id: pt-starter
          name: Starter
          features: [tools]
          subscription_status: active
    organizations:
      org-acme:
        metrics: {revenue: 1250.0, users: 14, conversion_rate: 3.1, growth: 4.5}

Used for local development, the demo and tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from bizdash.models import DashboardMetrics, ProfileTypeRecord
from bizdash.store.base import ProfileLoadError


class InMemoryProfileStore:
    """Dict-backed ProfileStore."""

    def __init__(
        self,
        organizations: dict[str, str] | None = None,
        profiles: dict[str, ProfileTypeRecord] | None = None,
        metrics: dict[str, DashboardMetrics] | None = None,
    ) -> None:
        # account_id -> organization_id
        self._organizations = dict(organizations or {})
        # account_id -> profile type (within its organization)
        self._profiles = dict(profiles or {})
        self._metrics = dict(metrics or {})

    def add_account(
        self,
        account_id: str,
        organization_id: str,
        profile: ProfileTypeRecord | None = None,
    ) -> None:
        self._organizations[account_id] = organization_id
        if profile is not None:
            self._profiles[account_id] = profile

    def set_metrics(self, organization_id: str, metrics: DashboardMetrics) -> None:
        self._metrics[organization_id] = metrics

    @property
    def account_ids(self) -> list[str]:
        return sorted(self._organizations)

    async def resolve_organization_for(self, account_id: str) -> str | None:
        return self._organizations.get(account_id)

    async def fetch_profile_type(
        self, account_id: str, organization_id: str,
    ) -> ProfileTypeRecord | None:
        if self._organizations.get(account_id) != organization_id:
            return None
        return self._profiles.get(account_id)

    async def fetch_dashboard_metrics(
        self, organization_id: str,
    ) -> DashboardMetrics | None:
        return self._metrics.get(organization_id)


def load_store_file(path: str | Path) -> InMemoryProfileStore:
    """Build an InMemoryProfileStore from a YAML accounts file."""
    path = Path(path)
    if not path.is_file():
        raise ProfileLoadError(f"Accounts file not found: {path}")
    try:
        raw: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ProfileLoadError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ProfileLoadError(f"Expected a YAML mapping in {path}")

    store = InMemoryProfileStore()
    for account_id, entry in (raw.get("accounts") or {}).items():
        if not isinstance(entry, dict) or "organization" not in entry:
            raise ProfileLoadError(
                f"Account '{account_id}' needs an 'organization' in {path}"
            )
        profile = None
        if entry.get("profile") is not None:
            try:
                profile = ProfileTypeRecord(**entry["profile"])
            except (ValidationError, TypeError) as e:
                raise ProfileLoadError(
                    f"Invalid profile for account '{account_id}' in {path}: {e}"
                ) from e
        store.add_account(str(account_id), str(entry["organization"]), profile)

    for org_id, entry in (raw.get("organizations") or {}).items():
        if isinstance(entry, dict) and entry.get("metrics") is not None:
            try:
                store.set_metrics(str(org_id), DashboardMetrics(**entry["metrics"]))
            except (ValidationError, TypeError) as e:
                raise ProfileLoadError(
                    f"Invalid metrics for organization '{org_id}' in {path}: {e}"
                ) from e
    return store
