"""Pick a profile store from configuration."""

from __future__ import annotations

from bizdash.config import BizdashConfig
from bizdash.store.base import ProfileStore
from bizdash.store.memory import InMemoryProfileStore, load_store_file
from bizdash.store.rest import RestProfileStore


def build_store(
    config: BizdashConfig,
    accounts: str | None = None,
) -> ProfileStore:
    """Build the configured store.

    Precedence: explicit *accounts* file > REST store from config >
    accounts file from config > empty in-memory store (everything locked).
    """
    if accounts:
        return load_store_file(accounts)
    if config.uses_rest_store:
        return RestProfileStore(
            base_url=config.store_url,
            api_key=config.store_api_key,
            timeout=config.store_timeout,
        )
    if config.accounts:
        return load_store_file(config.accounts)
    return InMemoryProfileStore()
