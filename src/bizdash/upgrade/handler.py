"""Upgrade request dispatch.

Hands an upgrade request to the external commerce flow. Fire-and-forget --
failures are warned but never block the navigation flow.

Built-in handlers:
- LoggingUpgradeHandler: log the request and keep the most recent ones
- WebhookUpgradeHandler: POST JSON to a URL (stdlib only)

Custom handlers just need a ``request_upgrade(request: UpgradeRequest) -> None`` method.
"""

from __future__ import annotations

import json
import logging
import urllib.request
import warnings
from collections import deque
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from bizdash.models import Classification

logger = logging.getLogger(__name__)


class UpgradeWarning(UserWarning):
    """Emitted when an upgrade handler fails (non-fatal)."""


class UpgradeRequest(BaseModel):
    account_id: str | None = None
    path: str | None = None
    feature: Classification | None = None
    feature_name: str | None = None
    required_plan: str | None = None
    requested_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))


@runtime_checkable
class UpgradeHandler(Protocol):
    """Protocol for upgrade triggers."""

    def request_upgrade(self, request: UpgradeRequest) -> None:
        """Start the external upgrade flow for *request*."""
        ...


DEFAULT_HISTORY_SIZE = 100


class LoggingUpgradeHandler:
    """Log upgrade requests and keep the last *history_size* for inspection."""

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        self.requests: deque[UpgradeRequest] = deque(maxlen=history_size)

    def request_upgrade(self, request: UpgradeRequest) -> None:
        self.requests.append(request)
        logger.info(
            "Upgrade requested by %s for %s (requires %s)",
            request.account_id or "anonymous",
            request.feature_name or request.path or "plan",
            request.required_plan or "any plan",
        )


class WebhookUpgradeHandler:
    """POST upgrade requests as JSON to a webhook URL.

    Uses stdlib urllib.request -- no extra dependencies required.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout

    def request_upgrade(self, request: UpgradeRequest) -> None:
        envelope = {
            "type": "upgrade_request",
            "request": request.model_dump(mode="json"),
        }
        body = json.dumps(envelope, sort_keys=True).encode("utf-8")
        req = urllib.request.Request(
            self._url,
            data=body,
            headers={"Content-Type": "application/json", **self._headers},
            method="POST",
        )
        urllib.request.urlopen(req, timeout=self._timeout)  # noqa: S310


def dispatch_upgrade(
    handlers: list[UpgradeHandler],
    request: UpgradeRequest,
) -> None:
    """Fire-and-forget upgrade dispatch."""
    for handler in handlers:
        try:
            handler.request_upgrade(request)
        except Exception as exc:
            warnings.warn(
                f"Upgrade handler {type(handler).__name__} failed: {exc}",
                UpgradeWarning,
                stacklevel=2,
            )


def build_upgrade_handlers(config: dict[str, Any] | None) -> list[UpgradeHandler]:
    """Build handler instances from a configuration dict.

    Supported keys:
    - webhook_url: URL for WebhookUpgradeHandler
    - webhook_headers: optional headers dict
    - webhook_timeout: optional timeout (default 10.0)
    - history_size: requests kept by the logging handler (default 100)

    A LoggingUpgradeHandler is always included.
    """
    config = config or {}
    handlers: list[UpgradeHandler] = [
        LoggingUpgradeHandler(config.get("history_size", DEFAULT_HISTORY_SIZE)),
    ]

    if config.get("webhook_url") is not None:
        handlers.append(
            WebhookUpgradeHandler(
                url=config["webhook_url"],
                headers=config.get("webhook_headers"),
                timeout=config.get("webhook_timeout", 10.0),
            ),
        )

    return handlers
