"""
==============================================================================
Catalog Package - Product Records
==============================================================================

Records the engine consumes and an in-memory store for them.

Classes:
--------
- Product, Catalog, CatalogOverride: Pydantic record models
- CatalogStore: Indexed collection loaded from dicts or JSON

==============================================================================
"""

from .models import (
    Catalog,
    CatalogOverride,
    CatalogStatus,
    HeadVariant,
    MarkupKind,
    MarkupRule,
    PackagingType,
    PieceVariant,
    PieceVariantKind,
    PortionPriceOverrides,
    Product,
    VariantPrices,
)
from .catalog import CatalogStore

__all__ = [
    "Catalog",
    "CatalogOverride",
    "CatalogStatus",
    "HeadVariant",
    "MarkupKind",
    "MarkupRule",
    "PackagingType",
    "PieceVariant",
    "PieceVariantKind",
    "PortionPriceOverrides",
    "Product",
    "VariantPrices",
    "CatalogStore",
]
