"""Tests for profile store adapters."""

import asyncio
import json
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bizdash.config import BizdashConfig
from bizdash.models import DashboardMetrics, ProfileTypeRecord
from bizdash.store import (
    InMemoryProfileStore,
    ProfileLoadError,
    ProfileStore,
    RestProfileStore,
    build_store,
    load_store_file,
)

ACCOUNTS_YAML = """\
accounts:
  acct-tools:
    organization: org-acme
    profile:
      id: pt-starter
      name: Starter
      features: [tools]
      subscription_status: active
  acct-orphan:
    organization: org-acme
organizations:
  org-acme:
    metrics: {revenue: 1250.0, users: 14, conversion_rate: 3.1, growth: 4.5}
"""


def _write(tmp_path: Path, text: str, name: str = "accounts.yaml") -> Path:
    f = tmp_path / name
    f.write_text(text, encoding="utf-8")
    return f


def _response(payload) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = json.dumps(payload).encode("utf-8")
    cm = MagicMock()
    cm.__enter__.return_value = resp
    cm.__exit__.return_value = False
    return cm


# --- InMemoryProfileStore ---


class TestInMemoryStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryProfileStore(), ProfileStore)
        assert isinstance(RestProfileStore("https://x", "k"), ProfileStore)

    def test_lookups(self):
        store = InMemoryProfileStore()
        record = ProfileTypeRecord(id="pt", name="Plan", features=["crm"])
        store.add_account("a", "o", record)
        assert asyncio.run(store.resolve_organization_for("a")) == "o"
        assert asyncio.run(store.fetch_profile_type("a", "o")) == record
        assert asyncio.run(store.resolve_organization_for("b")) is None

    def test_profile_scoped_to_organization(self):
        store = InMemoryProfileStore()
        store.add_account("a", "o", ProfileTypeRecord(id="pt", name="Plan"))
        assert asyncio.run(store.fetch_profile_type("a", "other-org")) is None

    def test_metrics(self):
        store = InMemoryProfileStore()
        store.set_metrics("o", DashboardMetrics(users=5))
        assert asyncio.run(store.fetch_dashboard_metrics("o")).users == 5
        assert asyncio.run(store.fetch_dashboard_metrics("x")) is None

    def test_account_ids_sorted(self):
        store = InMemoryProfileStore(organizations={"b": "o", "a": "o"})
        assert store.account_ids == ["a", "b"]


class TestLoadStoreFile:
    def test_loads_accounts(self, tmp_path: Path):
        store = load_store_file(_write(tmp_path, ACCOUNTS_YAML))
        assert store.account_ids == ["acct-orphan", "acct-tools"]
        record = asyncio.run(store.fetch_profile_type("acct-tools", "org-acme"))
        assert record.features == ["tools"]
        assert record.subscription_status == "active"
        assert asyncio.run(store.fetch_profile_type("acct-orphan", "org-acme")) is None
        assert asyncio.run(store.fetch_dashboard_metrics("org-acme")).revenue == 1250.0

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ProfileLoadError, match="not found"):
            load_store_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        with pytest.raises(ProfileLoadError, match="Invalid YAML"):
            load_store_file(_write(tmp_path, "accounts: [\n"))

    def test_not_a_mapping(self, tmp_path: Path):
        with pytest.raises(ProfileLoadError, match="mapping"):
            load_store_file(_write(tmp_path, "- a\n- b\n"))

    def test_account_without_organization(self, tmp_path: Path):
        text = "accounts:\n  a:\n    profile: {id: p, name: P}\n"
        with pytest.raises(ProfileLoadError, match="needs an 'organization'"):
            load_store_file(_write(tmp_path, text))

    def test_invalid_profile(self, tmp_path: Path):
        text = "accounts:\n  a:\n    organization: o\n    profile: {name: P}\n"
        with pytest.raises(ProfileLoadError, match="Invalid profile for account 'a'"):
            load_store_file(_write(tmp_path, text))

    def test_invalid_metrics(self, tmp_path: Path):
        text = "organizations:\n  o:\n    metrics: {users: lots}\n"
        with pytest.raises(ProfileLoadError, match="Invalid metrics"):
            load_store_file(_write(tmp_path, text))

    def test_empty_file(self, tmp_path: Path):
        assert load_store_file(_write(tmp_path, "")).account_ids == []


# --- RestProfileStore ---


class TestRestProfileStore:
    def _store(self) -> RestProfileStore:
        return RestProfileStore(base_url="https://xyz.supabase.co/", api_key="secret", timeout=3.0)

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_resolve_organization(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response([{"company_id": "org-9"}])
        assert asyncio.run(self._store().resolve_organization_for("u1")) == "org-9"

        req = mock_urlopen.call_args[0][0]
        assert req.full_url.startswith("https://xyz.supabase.co/rest/v1/user_companies?")
        assert "user_id=eq.u1" in req.full_url
        assert req.get_header("Apikey") == "secret"
        assert req.get_header("Authorization") == "Bearer secret"
        assert req.get_method() == "GET"
        assert mock_urlopen.call_args[1]["timeout"] == 3.0

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_resolve_organization_no_rows(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response([])
        assert asyncio.run(self._store().resolve_organization_for("u1")) is None

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_fetch_profile_type(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response([{
            "subscription_status": "trialing",
            "subscription_expires_at": "2030-01-01T00:00:00+00:00",
            "profile_type": {"id": "pt-1", "name": "Professional", "features": ["crm", "pr"]},
        }])
        record = asyncio.run(self._store().fetch_profile_type("u1", "org-9"))
        assert record.name == "Professional"
        assert record.features == ["crm", "pr"]
        assert record.subscription_status == "trialing"
        assert record.subscription_expires_at.year == 2030

        url = mock_urlopen.call_args[0][0].full_url
        assert "company_id=eq.org-9" in url
        assert "user_profile_types" in url

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_fetch_profile_type_missing(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response([{"profile_type": None}])
        assert asyncio.run(self._store().fetch_profile_type("u1", "org-9")) is None

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_malformed_profile_type(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response([{"profile_type": {"name": "No id"}}])
        with pytest.raises(ProfileLoadError, match="Malformed profile type"):
            asyncio.run(self._store().fetch_profile_type("u1", "org-9"))

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_fetch_metrics(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response([
            {"company_id": "org-9", "revenue": 10.5, "users": 2, "growth": 1.0},
        ])
        metrics = asyncio.run(self._store().fetch_dashboard_metrics("org-9"))
        assert metrics.revenue == 10.5
        assert metrics.users == 2
        assert "social_metrics" in mock_urlopen.call_args[0][0].full_url

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_http_error(self, mock_urlopen: MagicMock):
        mock_urlopen.side_effect = urllib.error.HTTPError(
            "https://xyz.supabase.co", 401, "Unauthorized", None, None,
        )
        with pytest.raises(ProfileLoadError, match="HTTP 401"):
            asyncio.run(self._store().resolve_organization_for("u1"))

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_connection_error(self, mock_urlopen: MagicMock):
        mock_urlopen.side_effect = urllib.error.URLError("refused")
        with pytest.raises(ProfileLoadError, match="request failed"):
            asyncio.run(self._store().resolve_organization_for("u1"))

    @patch("bizdash.store.rest.urllib.request.urlopen")
    def test_non_array_response(self, mock_urlopen: MagicMock):
        mock_urlopen.return_value = _response({"message": "oops"})
        with pytest.raises(ProfileLoadError, match="Expected a JSON array"):
            asyncio.run(self._store().resolve_organization_for("u1"))


# --- build_store ---


class TestBuildStore:
    def test_empty_config(self):
        store = build_store(BizdashConfig())
        assert isinstance(store, InMemoryProfileStore)
        assert store.account_ids == []

    def test_accounts_from_config(self, tmp_path: Path):
        f = _write(tmp_path, ACCOUNTS_YAML)
        store = build_store(BizdashConfig(accounts=str(f)))
        assert "acct-tools" in store.account_ids

    def test_rest_from_config(self):
        store = build_store(BizdashConfig(store_url="https://x.co", store_api_key="k"))
        assert isinstance(store, RestProfileStore)

    def test_explicit_accounts_win(self, tmp_path: Path):
        f = _write(tmp_path, ACCOUNTS_YAML)
        cfg = BizdashConfig(store_url="https://x.co", store_api_key="k")
        assert isinstance(build_store(cfg, str(f)), InMemoryProfileStore)

    def test_url_without_key_is_ignored(self):
        store = build_store(BizdashConfig(store_url="https://x.co"))
        assert isinstance(store, InMemoryProfileStore)
