"""Mounted sidebar instances.

Each instance owns one SidebarPresenter (and so one NavTree) plus an
AccessSession that follows the caller's account. Instances live until
they are unmounted.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from bizdash.gate.lock import ActivationEvent
from bizdash.policy.classifier import normalize_path
from bizdash.policy.resolver import AccessSession
from bizdash.views.sidebar import SidebarPresenter
from dashboard.backend.schemas import (
    SidebarActivateResponse,
    SidebarInstanceResponse,
)
from dashboard.backend.services.access_service import AccessService

logger = logging.getLogger(__name__)


@dataclass
class SidebarInstance:
    id: str
    session: AccessSession
    presenter: SidebarPresenter


class SidebarService:
    def __init__(self, access: AccessService) -> None:
        self._access = access
        self._instances: dict[str, SidebarInstance] = {}

    def __len__(self) -> int:
        return len(self._instances)

    async def mount(
        self, account_id: str | None, current_path: str | None = None,
    ) -> SidebarInstance:
        session = AccessSession(self._access.resolver)
        await session.switch(account_id)
        presenter = SidebarPresenter(
            self._access.catalog,
            session,
            self._access.gate,
            current_path=normalize_path(current_path) if current_path else None,
        )
        instance = SidebarInstance(id=uuid.uuid4().hex, session=session, presenter=presenter)
        self._instances[instance.id] = instance
        logger.debug("Mounted sidebar %s for account %s", instance.id, account_id)
        return instance

    def get(self, instance_id: str) -> SidebarInstance | None:
        return self._instances.get(instance_id)

    def unmount(self, instance_id: str) -> bool:
        instance = self._instances.pop(instance_id, None)
        if instance is None:
            return False
        logger.debug("Unmounted sidebar %s", instance_id)
        return True

    async def follow(self, instance: SidebarInstance, account_id: str | None) -> None:
        """Reload the instance's profile if the caller's account changed."""
        await instance.session.switch(account_id)

    @staticmethod
    def describe(instance: SidebarInstance) -> SidebarInstanceResponse:
        return SidebarInstanceResponse(
            id=instance.id,
            account_id=instance.session.account_id,
            pending=instance.session.pending,
            view=instance.presenter.render(),
        )

    def activate(
        self, instance: SidebarInstance, path: str, source: str = "pointer",
    ) -> SidebarActivateResponse:
        """Click the sidebar entry at *path*. Raises CatalogError if unknown."""
        event = ActivationEvent(normalize_path(path), source)
        outcome = instance.presenter.activate(event.path, event)
        base = self._access.activation_response(outcome, event, instance.session.profile)
        return SidebarActivateResponse(
            outcome=base.outcome,
            default_prevented=base.default_prevented,
            propagation_stopped=base.propagation_stopped,
            trace=base.trace,
            upgrade=base.upgrade,
            id=instance.id,
            view=instance.presenter.render(),
        )

    @staticmethod
    def toggle(instance: SidebarInstance) -> SidebarInstanceResponse:
        instance.presenter.toggle_sidebar()
        return SidebarService.describe(instance)
