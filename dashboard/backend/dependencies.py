"""FastAPI dependencies for identifying the calling account."""

from __future__ import annotations

from typing import Annotated

from fastapi import Header

ACCOUNT_HEADER = "X-Account-Id"


def current_account_id(
    x_account_id: Annotated[str | None, Header(alias=ACCOUNT_HEADER)] = None,
) -> str | None:
    """Return the caller's account id, or None for anonymous callers.

    Anonymous callers are not rejected; they simply resolve to no profile,
    so every gated area is locked for them.
    """
    if x_account_id is None:
        return None
    return x_account_id.strip() or None
