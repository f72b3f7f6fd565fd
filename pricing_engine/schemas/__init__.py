"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Order, cart and reconciliation schemas.

==============================================================================
"""

from .order import CartItem, FrozenLine, OrderLineSnapshot, ReconciliationResult

__all__ = [
    "CartItem",
    "FrozenLine",
    "OrderLineSnapshot",
    "ReconciliationResult",
]
