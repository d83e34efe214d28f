"""PostgREST-backed profile store (Supabase-style REST API).

Reads three tables:

- ``user_companies``: account -> company link, subscription status and the
  embedded ``user_profile_types`` row (``id``, ``name``, ``features``)
- ``social_metrics``: per-company dashboard statistics

Uses stdlib ``urllib.request``, so no extra dependencies are required. Blocking
calls run in a worker thread so the event loop never stalls.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from pydantic import ValidationError

from bizdash.models import DashboardMetrics, ProfileTypeRecord
from bizdash.store.base import ProfileLoadError

logger = logging.getLogger(__name__)

_PROFILE_SELECT = (
    "subscription_status,subscription_expires_at,"
    "profile_type:user_profile_types(id,name,features)"
)


class RestProfileStore:
    """Query a PostgREST endpoint for account linkage and profile types.

    Configure with the project URL and an API key::

        store = RestProfileStore(
            base_url="https://xyz.supabase.co",
            api_key="eyJ...",
        )
        org = await store.resolve_organization_for("user-123")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
    ) -> None:
        self._base = base_url.rstrip("/") + "/rest/v1"
        self._api_key = api_key
        self._timeout = timeout

    async def resolve_organization_for(self, account_id: str) -> str | None:
        rows = await self._select(
            "user_companies",
            {"select": "company_id", "user_id": f"eq.{account_id}", "limit": "1"},
        )
        if not rows:
            return None
        company_id = rows[0].get("company_id")
        return str(company_id) if company_id else None

    async def fetch_profile_type(
        self, account_id: str, organization_id: str,
    ) -> ProfileTypeRecord | None:
        rows = await self._select(
            "user_companies",
            {
                "select": _PROFILE_SELECT,
                "user_id": f"eq.{account_id}",
                "company_id": f"eq.{organization_id}",
                "limit": "1",
            },
        )
        if not rows or not rows[0].get("profile_type"):
            return None
        row = rows[0]
        try:
            return ProfileTypeRecord(
                **row["profile_type"],
                subscription_status=row.get("subscription_status"),
                subscription_expires_at=row.get("subscription_expires_at"),
            )
        except (ValidationError, TypeError) as e:
            raise ProfileLoadError(f"Malformed profile type for {account_id}: {e}") from e

    async def fetch_dashboard_metrics(
        self, organization_id: str,
    ) -> DashboardMetrics | None:
        rows = await self._select(
            "social_metrics",
            {"select": "*", "company_id": f"eq.{organization_id}", "limit": "1"},
        )
        if not rows:
            return None
        try:
            return DashboardMetrics(**rows[0])
        except (ValidationError, TypeError) as e:
            raise ProfileLoadError(f"Malformed metrics for {organization_id}: {e}") from e

    async def _select(self, table: str, query: dict[str, str]) -> list[dict[str, Any]]:
        url = f"{self._base}/{table}?{urllib.parse.urlencode(query)}"
        return await asyncio.to_thread(self._get_json, url)

    def _get_json(self, url: str) -> list[dict[str, Any]]:
        req = urllib.request.Request(
            url,
            headers={
                "apikey": self._api_key,
                "Authorization": f"Bearer {self._api_key}",
                "Accept": "application/json",
            },
            method="GET",
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                data = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            raise ProfileLoadError(f"Profile store returned HTTP {e.code} for {url}") from e
        except (urllib.error.URLError, OSError, json.JSONDecodeError) as e:
            raise ProfileLoadError(f"Profile store request failed: {e}") from e

        if not isinstance(data, list):
            raise ProfileLoadError(f"Expected a JSON array from {url}")
        logger.debug("Fetched %d row(s) from %s", len(data), url)
        return data
