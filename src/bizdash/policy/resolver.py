"""Access Policy Resolver: turns an account into its unlocked feature set.

Resolution:
1. Look up the account's organization
2. Fetch the account's profile type within that organization
3. Keep only known feature keys from the profile's feature list

Every failure along the way (store error, missing organization, missing
profile type) resolves to ``None``, which locks every gated feature. The
resolver never raises to its caller.
"""

from __future__ import annotations

import logging
from datetime import datetime

from bizdash.models import (
    AccessProfile,
    AccessSentinel,
    Classification,
    FeatureKey,
    LockDecision,
    ProfileTypeRecord,
)
from bizdash.policy.classifier import classify, normalize_path
from bizdash.store.base import ProfileStore

logger = logging.getLogger(__name__)


def is_locked(
    classification: Classification,
    profile: AccessProfile | None,
    now: datetime | None = None,
) -> bool:
    """Decide whether a classified area is locked for *profile*."""
    if classification == AccessSentinel.ALWAYS_UNLOCKED:
        return False
    if classification == AccessSentinel.ALWAYS_LOCKED:
        return True
    if profile is None:
        return True
    return classification not in profile.effective_features(now)


class AccessSnapshot:
    """Lock decisions for one render pass against a fixed profile.

    Build a new snapshot per pass; the profile may change between passes
    (e.g. right after an upgrade).
    """

    def __init__(self, profile: AccessProfile | None, now: datetime | None = None) -> None:
        self._profile = profile
        self._now = now

    @property
    def profile(self) -> AccessProfile | None:
        return self._profile

    def is_locked(self, classification: Classification) -> bool:
        return is_locked(classification, self._profile, self._now)

    def decide(self, path: str) -> LockDecision:
        feature = classify(path)
        return LockDecision(
            path=normalize_path(path),
            feature=feature,
            is_locked=self.is_locked(feature),
        )

    def unlocked_features(self) -> frozenset[FeatureKey]:
        if self._profile is None:
            return frozenset()
        return self._profile.effective_features(self._now)


def _to_profile(
    account_id: str, organization_id: str, record: ProfileTypeRecord,
) -> AccessProfile:
    granted: set[FeatureKey] = set()
    for raw in record.features:
        try:
            granted.add(FeatureKey(raw))
        except ValueError:
            logger.warning(
                "Ignoring unknown feature key %r on profile type %s", raw, record.id,
            )
    return AccessProfile(
        id=record.id,
        name=record.name,
        account_id=account_id,
        organization_id=organization_id,
        granted_features=frozenset(granted),
        subscription_status=record.subscription_status,
        subscription_expires_at=record.subscription_expires_at,
    )


class AccessPolicyResolver:
    """Loads AccessProfiles from a ProfileStore, failing closed."""

    def __init__(self, store: ProfileStore) -> None:
        self._store = store

    @property
    def store(self) -> ProfileStore:
        return self._store

    async def resolve(self, account_id: str | None) -> AccessProfile | None:
        """Resolve the account's profile, or None if anything is missing."""
        if not account_id:
            return None
        try:
            organization_id = await self._store.resolve_organization_for(account_id)
            if organization_id is None:
                logger.warning("No organization linked to account %s", account_id)
                return None
            record = await self._store.fetch_profile_type(account_id, organization_id)
            if record is None:
                logger.warning(
                    "No profile type for account %s in organization %s",
                    account_id,
                    organization_id,
                )
                return None
        except Exception:
            logger.exception("Failed to load access profile for account %s", account_id)
            return None

        profile = _to_profile(account_id, organization_id, record)
        logger.info(
            "Resolved profile %s for account %s (%d feature(s))",
            profile.name,
            account_id,
            len(profile.granted_features),
        )
        return profile


class AccessSession:
    """Tracks the current account identity and its applied profile.

    A profile load is issued whenever the account identity changes. While
    it is pending every gated feature reads as locked. Each load is tagged
    with the account id it was issued for, and a result is only applied if
    that id still matches the current identity; late answers for a previous
    account are discarded.
    """

    def __init__(self, resolver: AccessPolicyResolver) -> None:
        self._resolver = resolver
        self._account_id: str | None = None
        self._profile: AccessProfile | None = None
        self._pending = False
        self._loaded = False

    @property
    def account_id(self) -> str | None:
        return self._account_id

    @property
    def profile(self) -> AccessProfile | None:
        return self._profile

    @property
    def pending(self) -> bool:
        return self._pending

    def begin(self, account_id: str | None) -> None:
        """Switch identity and drop the previous account's profile."""
        self._account_id = account_id
        self._profile = None
        self._loaded = False
        self._pending = account_id is not None

    def apply(self, account_id: str | None, profile: AccessProfile | None) -> bool:
        """Apply a load result issued for *account_id*. Returns False if stale."""
        if account_id != self._account_id:
            logger.debug(
                "Discarding stale profile for account %s (current: %s)",
                account_id,
                self._account_id,
            )
            return False
        self._profile = profile
        self._pending = False
        self._loaded = True
        return True

    async def switch(self, account_id: str | None) -> bool:
        """Load the profile for *account_id* if the identity changed.

        Returns True if a result was applied.
        """
        if account_id == self._account_id and (self._loaded or self._pending):
            return False
        self.begin(account_id)
        if account_id is None:
            return False
        profile = await self._resolver.resolve(account_id)
        return self.apply(account_id, profile)

    async def refresh(self) -> bool:
        """Reload the current account's profile (e.g. after an upgrade)."""
        account_id = self._account_id
        if account_id is None:
            return False
        self._pending = True
        profile = await self._resolver.resolve(account_id)
        return self.apply(account_id, profile)

    def snapshot(self, now: datetime | None = None) -> AccessSnapshot:
        """Decisions for one render pass. Pending loads yield no profile."""
        return AccessSnapshot(None if self._pending else self._profile, now)

    def is_locked(self, classification: Classification) -> bool:
        return self.snapshot().is_locked(classification)

    def decide(self, path: str) -> LockDecision:
        return self.snapshot().decide(path)
