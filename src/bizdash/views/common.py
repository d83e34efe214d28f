"""Pieces shared by the sidebar and dashboard presenters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bizdash.gate.lock import ActivationEvent, GatedView, LockGate, UpgradeCallback
from bizdash.models import LockDecision, NavNode


@runtime_checkable
class DecisionSource(Protocol):
    """Anything that can decide whether a path is locked right now.

    Implemented by AccessSession (live, follows the current account) and
    AccessSnapshot (fixed profile for one request).
    """

    def decide(self, path: str) -> LockDecision: ...


def gate_node(
    gate: LockGate,
    access: DecisionSource,
    node: NavNode,
    on_request_upgrade: UpgradeCallback | None,
) -> GatedView[NavNode]:
    """Wrap *node* in the gate using a fresh lock decision."""
    decision = access.decide(node.path)
    return gate.render(
        node,
        decision.is_locked,
        node.name,
        on_request_upgrade,
        decision=decision,
    )


def new_event(path: str, event: ActivationEvent | None) -> ActivationEvent:
    return event if event is not None else ActivationEvent(path)
