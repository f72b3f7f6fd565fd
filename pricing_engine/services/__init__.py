"""
==============================================================================
Services Package
==============================================================================

Callers of the pricing pipeline shared by every storefront surface.

Modules:
--------
- catalog_service: CatalogView, the resolved products of one catalog
- reorder_service: ReorderReconciler for repeat orders
- cart_service: Cart lifecycle

==============================================================================
"""

from .catalog_service import CatalogView
from .reorder_service import ReorderReconciler, reconcile
from .cart_service import Cart

__all__ = [
    "CatalogView",
    "ReorderReconciler",
    "reconcile",
    "Cart",
]
