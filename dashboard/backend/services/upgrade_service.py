"""Upgrade prompt and upgrade request dispatch for the API."""

from __future__ import annotations

from bizdash.policy.classifier import classify, normalize_path
from bizdash.upgrade.handler import UpgradeHandler, UpgradeRequest, dispatch_upgrade
from bizdash.upgrade.plans import UpgradePrompt, build_upgrade_prompt
from dashboard.backend.schemas import UpgradeRequestResponse
from dashboard.backend.services.access_service import AccessService


class UpgradeService:
    def __init__(self, access: AccessService, handlers: list[UpgradeHandler]) -> None:
        self._access = access
        self._handlers = handlers

    @property
    def handlers(self) -> list[UpgradeHandler]:
        return self._handlers

    async def prompt(self, account_id: str | None, path: str | None = None) -> UpgradePrompt:
        snapshot = await self._access.snapshot(account_id)
        feature = classify(path) if path else None
        node = self._access.catalog.get(normalize_path(path)) if path else None
        return build_upgrade_prompt(
            snapshot.profile,
            feature,
            node.name if node is not None else None,
            self._access.plans,
        )

    async def request(
        self, account_id: str | None, path: str | None = None,
    ) -> UpgradeRequestResponse:
        """Hand an upgrade request to every handler; handler failures only warn."""
        prompt = await self.prompt(account_id, path)
        feature = classify(path) if path else None
        request = UpgradeRequest(
            account_id=account_id,
            path=normalize_path(path) if path else None,
            feature=feature,
            feature_name=prompt.feature_name,
            required_plan=prompt.required_plan,
        )
        dispatch_upgrade(self._handlers, request)
        return UpgradeRequestResponse(request=request, prompt=prompt)
