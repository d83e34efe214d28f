"""Access decisions, catalog listing and stateless activation for the API."""

from __future__ import annotations

from collections.abc import Sequence

from bizdash.catalog.loader import NavCatalog
from bizdash.gate.lock import ActivationEvent, LockGate
from bizdash.models import AccessProfile, NavOutcome, NoChange, UpgradeRequired
from bizdash.nav.icons import render_icon
from bizdash.nav.tree import NavTree
from bizdash.policy.classifier import classify, matching_rule, normalize_path
from bizdash.policy.resolver import AccessPolicyResolver, AccessSnapshot
from bizdash.store.base import ProfileStore
from bizdash.upgrade.plans import DEFAULT_PLANS, PlanTier, build_upgrade_prompt
from bizdash.views.dashboard import DashboardPresenter, DashboardView, load_dashboard_metrics
from dashboard.backend.schemas import (
    AccessResponse,
    ActivateResponse,
    CatalogEntry,
    CatalogResponse,
    ClassifyResponse,
)


class AccessService:
    """Resolves the caller's profile per request and answers lock questions.

    Each request gets its own AccessSnapshot; nothing is cached between
    requests, so a plan change shows up on the next call.
    """

    def __init__(
        self,
        catalog: NavCatalog,
        store: ProfileStore,
        plans: Sequence[PlanTier] = DEFAULT_PLANS,
    ) -> None:
        self._catalog = catalog
        self._resolver = AccessPolicyResolver(store)
        self._plans = tuple(plans)
        self._gate = LockGate(self._plans)

    @property
    def catalog(self) -> NavCatalog:
        return self._catalog

    @property
    def resolver(self) -> AccessPolicyResolver:
        return self._resolver

    @property
    def gate(self) -> LockGate:
        return self._gate

    @property
    def plans(self) -> tuple[PlanTier, ...]:
        return self._plans

    async def snapshot(self, account_id: str | None) -> AccessSnapshot:
        return AccessSnapshot(await self._resolver.resolve(account_id))

    def catalog_entries(self) -> CatalogResponse:
        entries = []
        for node, depth in self._catalog.walk():
            parent = self._catalog.parent_of(node.path)
            entries.append(CatalogEntry(
                name=node.name,
                path=node.path,
                depth=depth,
                description=node.description,
                section=node.section,
                is_branch=node.is_branch,
                parent=parent.path if parent is not None else None,
                icon=render_icon(node.icon, node.name),
                gate=str(classify(node.path)),
            ))
        return CatalogResponse(entries=entries, total=len(entries))

    @staticmethod
    def classify(path: str) -> ClassifyResponse:
        rule = matching_rule(path)
        return ClassifyResponse(
            path=normalize_path(path),
            classification=str(classify(path)),
            rule=rule.name if rule is not None else None,
        )

    async def access_summary(self, account_id: str | None) -> AccessResponse:
        snapshot = await self.snapshot(account_id)
        profile = snapshot.profile
        return AccessResponse(
            account_id=account_id,
            profile=profile,
            live=profile.is_live() if profile is not None else False,
            unlocked_features=sorted(str(f) for f in snapshot.unlocked_features()),
            decisions=[snapshot.decide(path) for path in self._catalog.paths()],
        )

    async def activate(
        self, account_id: str | None, path: str, source: str = "pointer",
    ) -> ActivateResponse:
        """Resolve a click on *path* against a freshly mounted tree.

        Paths outside the catalog are still gated; if they happen to be
        unlocked the click has no effect.
        """
        snapshot = await self.snapshot(account_id)
        event = ActivationEvent(normalize_path(path), source)
        decision = snapshot.decide(event.path)
        node = self._catalog.get(decision.path)
        view = self._gate.render(
            node,
            decision.is_locked,
            node.name if node is not None else decision.path,
            decision=decision,
        )
        if node is None:
            outcome = self._gate.activate(
                view, event, lambda _e: NoChange(path=decision.path, reason="not in catalog"),
            )
        else:
            tree = NavTree(self._catalog)
            outcome = self._gate.activate(view, event, lambda _e: tree.click(node.path))
        return self.activation_response(outcome, event, snapshot.profile)

    def activation_response(
        self,
        outcome: NavOutcome | None,
        event: ActivationEvent,
        profile: AccessProfile | None,
    ) -> ActivateResponse:
        if outcome is None:
            outcome = NoChange(path=event.path, reason="no handler")
        upgrade = None
        if isinstance(outcome, UpgradeRequired):
            upgrade = build_upgrade_prompt(
                profile, outcome.feature, outcome.feature_name, self._plans,
            )
        return ActivateResponse(
            outcome=outcome,
            default_prevented=event.default_prevented,
            propagation_stopped=event.propagation_stopped,
            trace=list(event.trace),
            upgrade=upgrade,
        )

    async def dashboard(self, account_id: str | None) -> DashboardView:
        snapshot = await self.snapshot(account_id)
        metrics = await load_dashboard_metrics(self._resolver.store, snapshot.profile)
        presenter = DashboardPresenter(self._catalog, snapshot, self._gate, metrics=metrics)
        return presenter.render()
