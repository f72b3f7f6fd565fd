"""
==============================================================================
Pricing Package
==============================================================================

Catalog-scoped price and availability resolution.

Pipeline:
--------
    Product -> markup -> packaging -> catalog overrides -> ResolvedProduct

Modules:
--------
- precedence: first-match-wins override providers
- markup: resolve_sale_price
- packaging: compute_variant_prices
- overrides: resolve_for_catalog, ResolvedProduct

==============================================================================
"""

from .markup import resolve_sale_price
from .packaging import PackagingInfo, VariantPriceMap, compute_variant_prices
from .overrides import ResolvedProduct, resolve_for_catalog
from .precedence import effective_markup, effective_status, first_match

__all__ = [
    "resolve_sale_price",
    "PackagingInfo",
    "VariantPriceMap",
    "compute_variant_prices",
    "ResolvedProduct",
    "resolve_for_catalog",
    "effective_markup",
    "effective_status",
    "first_match",
]
