from bizdash.gate.lock import (
    CTA_LABEL,
    ActivationEvent,
    GatedView,
    GateState,
    LockGate,
    LockOverlay,
)

__all__ = [
    "CTA_LABEL",
    "ActivationEvent",
    "GateState",
    "GatedView",
    "LockGate",
    "LockOverlay",
]
