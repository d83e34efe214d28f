#!/usr/bin/env python3
"""Demo: one sidebar and one dashboard grid for three different accounts.

Shows the same catalog gated three ways: a tools-only plan, a
Professional plan, and a lapsed Enterprise subscription (everything gated
is locked). Clicks go through the lock gate exactly as the UI would.

Run from the project root:
    python examples/demo_dashboard.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Add src to path for running without install
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from bizdash import (
    AccessPolicyResolver,
    AccessSession,
    DashboardPresenter,
    SidebarPresenter,
    UpgradeRequired,
    default_catalog,
)
from bizdash.store import load_store_file
from bizdash.views import load_dashboard_metrics


def _show_outcome(label: str, outcome) -> None:
    if isinstance(outcome, UpgradeRequired):
        print(f"    {label:<28} -> LOCKED: upgrade to {outcome.required_plan}")
    else:
        print(f"    {label:<28} -> {outcome.kind}: {outcome.path}")


async def run_account(account_id: str, store) -> None:
    catalog = default_catalog()
    session = AccessSession(AccessPolicyResolver(store))
    await session.switch(account_id)

    profile = session.profile
    plan = profile.name if profile else "none"
    print(f"\n  Account {account_id} (plan: {plan})")
    print("  " + "-" * 60)

    upgrades: list[UpgradeRequired] = []
    sidebar = SidebarPresenter(catalog, session, on_request_upgrade=upgrades.append)

    print("  Sidebar:")
    _show_outcome("click Tools", sidebar.activate("/tools"))
    _show_outcome("click Tools > PDF Tools", sidebar.activate("/tools/pdf"))
    _show_outcome("click Social Media", sidebar.activate("/social-media"))
    _show_outcome("click Advisor", sidebar.activate("/advisor"))
    _show_outcome("click Vox > Call Analytics", sidebar.activate("/vox/analytics"))

    metrics = await load_dashboard_metrics(store, profile)
    dashboard = DashboardPresenter(catalog, session, metrics=metrics)
    view = dashboard.render()
    unlocked = [t.name for t in view.tiles if not t.gate.locked]
    print(f"  Dashboard: revenue {view.metrics.revenue:.2f}, users {view.metrics.users}")
    print(f"    unlocked tiles: {', '.join(unlocked)}")
    _show_outcome("tile Public Relations", dashboard.activate_tile("/pr"))

    print(f"  Upgrade prompts requested: {len(upgrades)}")


def main() -> None:
    accounts = Path(__file__).resolve().parent / "accounts.yaml"
    store = load_store_file(accounts)

    print("=" * 64)
    print("  bizdash Demo: feature-gated navigation")
    print("=" * 64)

    for account_id in ("acct-tools", "acct-pro", "acct-lapsed"):
        asyncio.run(run_account(account_id, store))


if __name__ == "__main__":
    main()
