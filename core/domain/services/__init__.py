"""Pure domain services."""

from .delivery_rules import Allow, CourierChange, Deny, decide_transition

__all__ = ["Allow", "CourierChange", "Deny", "decide_transition"]
