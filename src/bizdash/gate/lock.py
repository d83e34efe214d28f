"""Lock presentation gate.

Wraps any navigable element. Unlocked content passes through untouched.
Locked content is dimmed, made non-interactive and non-selectable, and sits
under an overlay that names the feature and offers a single "Upgrade Now"
action. The overlay swallows every interaction: the element's own handler
never runs, the default navigation is prevented before anything else
happens, and the upgrade prompt is requested instead.

The sidebar and the tile grid both go through the same LockGate.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel

from bizdash.models import AccessSentinel, LockDecision, UpgradeRequired
from bizdash.upgrade.plans import DEFAULT_PLANS, PlanTier, required_plan_for

ContentT = TypeVar("ContentT")
ResultT = TypeVar("ResultT")

UpgradeCallback = Callable[[UpgradeRequired], None]

CTA_LABEL = "Upgrade Now"


class ActivationEvent:
    """A pointer or keyboard activation of a navigable element.

    ``trace`` records the order in which the gate and handlers touched the
    event.
    """

    def __init__(self, path: str, source: str = "pointer") -> None:
        self.path = path
        self.source = source
        self.default_prevented = False
        self.propagation_stopped = False
        self.trace: list[str] = []

    def prevent_default(self) -> None:
        self.default_prevented = True
        self.trace.append("prevent_default")

    def stop_propagation(self) -> None:
        self.propagation_stopped = True
        self.trace.append("stop_propagation")

    def record(self, step: str) -> None:
        self.trace.append(step)


class LockOverlay(BaseModel):
    title: str
    message: str
    feature_name: str
    required_plan: str
    cta_label: str = CTA_LABEL


class GateState(BaseModel):
    """Serializable presentation flags for a gated element."""

    locked: bool
    interactive: bool
    dimmed: bool
    selectable: bool
    overlay: LockOverlay | None = None


@dataclass(frozen=True)
class GatedView(Generic[ContentT]):
    content: ContentT
    locked: bool
    feature_name: str
    overlay: LockOverlay | None = None
    decision: LockDecision | None = None
    on_request_upgrade: UpgradeCallback | None = field(
        default=None, repr=False, compare=False,
    )

    @property
    def interactive(self) -> bool:
        return not self.locked

    @property
    def dimmed(self) -> bool:
        return self.locked

    @property
    def selectable(self) -> bool:
        return not self.locked

    def state(self) -> GateState:
        return GateState(
            locked=self.locked,
            interactive=self.interactive,
            dimmed=self.dimmed,
            selectable=self.selectable,
            overlay=self.overlay,
        )


class LockGate:
    def __init__(self, plans: Sequence[PlanTier] = DEFAULT_PLANS) -> None:
        self._plans = tuple(plans)

    def render(
        self,
        content: ContentT,
        is_locked: bool,
        feature_name: str,
        on_request_upgrade: UpgradeCallback | None = None,
        *,
        decision: LockDecision | None = None,
    ) -> GatedView[ContentT]:
        if not is_locked:
            return GatedView(
                content=content,
                locked=False,
                feature_name=feature_name,
                decision=decision,
                on_request_upgrade=on_request_upgrade,
            )
        plan = self._required_plan(decision)
        overlay = LockOverlay(
            title=f"{feature_name} Locked",
            message=(
                f"Upgrade to {plan} to unlock this feature "
                "and access the full platform."
            ),
            feature_name=feature_name,
            required_plan=plan,
        )
        return GatedView(
            content=content,
            locked=True,
            feature_name=feature_name,
            overlay=overlay,
            decision=decision,
            on_request_upgrade=on_request_upgrade,
        )

    def activate(
        self,
        view: GatedView[ContentT],
        event: ActivationEvent,
        handler: Callable[[ActivationEvent], ResultT] | None = None,
    ) -> ResultT | UpgradeRequired | None:
        """Route an activation through the gate.

        Locked: default prevented, propagation stopped, upgrade requested;
        *handler* is never called. Unlocked: *handler* runs and its result
        is returned.
        """
        if not view.locked:
            if handler is None:
                return None
            event.record("handler")
            return handler(event)

        event.prevent_default()
        event.stop_propagation()
        outcome = self._upgrade_outcome(view, event.path)
        self.request_upgrade(view, outcome)
        event.record("request_upgrade")
        return outcome

    def click_cta(self, view: GatedView[ContentT]) -> UpgradeRequired | None:
        """The overlay's call-to-action button."""
        if not view.locked:
            return None
        outcome = self._upgrade_outcome(view, view.decision.path if view.decision else "")
        self.request_upgrade(view, outcome)
        return outcome

    @staticmethod
    def request_upgrade(view: GatedView[ContentT], outcome: UpgradeRequired) -> None:
        if view.on_request_upgrade is not None:
            view.on_request_upgrade(outcome)

    def _required_plan(self, decision: LockDecision | None) -> str:
        feature = decision.feature if decision else AccessSentinel.ALWAYS_LOCKED
        return required_plan_for(feature, self._plans)

    def _upgrade_outcome(self, view: GatedView[ContentT], path: str) -> UpgradeRequired:
        return UpgradeRequired(
            path=path,
            feature=view.decision.feature if view.decision else AccessSentinel.ALWAYS_LOCKED,
            feature_name=view.feature_name,
            required_plan=view.overlay.required_plan if view.overlay else self._required_plan(None),
        )
