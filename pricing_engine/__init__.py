"""
==============================================================================
Storefront Pricing Engine
==============================================================================

Catalog-scoped price and availability resolution for a multi-tenant
storefront: one product list, many price-lists.

Usage:
------
    from pricing_engine import CatalogView, ReorderReconciler, resolve_for_catalog

    resolved = resolve_for_catalog(product, override)
    resolved.price_for(1)        # half of a cheese head
    resolved.can_order

==============================================================================
"""

from .catalog import (
    Catalog,
    CatalogOverride,
    CatalogStatus,
    CatalogStore,
    HeadVariant,
    MarkupRule,
    PackagingType,
    Product,
)
from .core import Degradation, PricingEngineError
from .pricing import ResolvedProduct, compute_variant_prices, resolve_for_catalog, resolve_sale_price
from .schemas import CartItem, FrozenLine, OrderLineSnapshot, ReconciliationResult
from .services import Cart, CatalogView, ReorderReconciler, reconcile

__version__ = "1.0.0"

__all__ = [
    "Catalog",
    "CatalogOverride",
    "CatalogStatus",
    "CatalogStore",
    "HeadVariant",
    "MarkupRule",
    "PackagingType",
    "Product",
    "Degradation",
    "PricingEngineError",
    "ResolvedProduct",
    "compute_variant_prices",
    "resolve_for_catalog",
    "resolve_sale_price",
    "CartItem",
    "FrozenLine",
    "OrderLineSnapshot",
    "ReconciliationResult",
    "Cart",
    "CatalogView",
    "ReorderReconciler",
    "reconcile",
]
