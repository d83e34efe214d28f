"""Profile store protocol: the remote data the access policy depends on.

The store owns the account -> organization -> profile-type linkage and the
dashboard metrics. bizdash only reads from it. Implementations raise
ProfileLoadError for transport or data errors; the resolver turns every
such failure into "no profile" (all gated features locked).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bizdash.models import DashboardMetrics, ProfileTypeRecord


class ProfileLoadError(Exception):
    """Raised when a profile store lookup fails."""


@runtime_checkable
class ProfileStore(Protocol):
    """Async lookups consumed by the access policy resolver and the dashboard."""

    async def resolve_organization_for(self, account_id: str) -> str | None:
        """Return the organization the account belongs to, if any."""
        ...

    async def fetch_profile_type(
        self, account_id: str, organization_id: str,
    ) -> ProfileTypeRecord | None:
        """Return the account's profile type within the organization, if any."""
        ...

    async def fetch_dashboard_metrics(
        self, organization_id: str,
    ) -> DashboardMetrics | None:
        """Return display-only metrics for the organization, if any."""
        ...
