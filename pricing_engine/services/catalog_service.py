"""
==============================================================================
Catalog View Service Module
==============================================================================

Resolves every member of one catalog once and serves the result to the
storefront surfaces (admin preview, guest view, customer view, reorder).

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from pricing_engine.catalog.catalog import CatalogStore
from pricing_engine.catalog.models import CatalogOverride, CatalogStatus, Product
from pricing_engine.pricing.overrides import ResolvedProduct, resolve_for_catalog


# Module logger
logger = logging.getLogger(__name__)


class CatalogView:
    """
    Resolved products of one catalog.

    Hidden products are resolved too (admin preview) but excluded from
    ``visible_products`` and ``orderable_products``.

    Example:
        >>> view = CatalogView.for_catalog(store, "opt")
        >>> [p.product_id for p in view.orderable_products()]
        ['p1', 'p3']
        >>> view.find("p1").price_for(1)
        Decimal('33075.0')
    """

    def __init__(
        self,
        products: Iterable[Product],
        overrides: Optional[Mapping[str, CatalogOverride]] = None,
        catalog_id: Optional[str] = None,
    ) -> None:
        """
        Initialize and resolve the view.

        Args:
            products: Member products in display order
            overrides: Catalog overrides keyed by product id
            catalog_id: Catalog being viewed (None for base storefront prices)
        """
        self._catalog_id = catalog_id
        overrides = overrides or {}

        self._resolved: List[ResolvedProduct] = [
            resolve_for_catalog(product, overrides.get(product.id), catalog_id=catalog_id)
            for product in products
        ]
        self._by_id: Dict[str, ResolvedProduct] = {
            resolved.product_id: resolved for resolved in self._resolved
        }

        logger.debug(
            f"Resolved {len(self._resolved)} products for catalog {catalog_id or '<base>'}"
        )

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def for_catalog(cls, store: CatalogStore, catalog_id: str) -> "CatalogView":
        """View of one catalog's members with its overrides applied."""
        return cls(store.members(catalog_id), store.overrides_for(catalog_id), catalog_id)

    @classmethod
    def base(cls, store: CatalogStore) -> "CatalogView":
        """View of every product at its own prices and stock status."""
        return cls(store.products)

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def catalog_id(self) -> Optional[str]:
        return self._catalog_id

    @property
    def resolved(self) -> List[ResolvedProduct]:
        return self._resolved.copy()

    def find(self, product_id: Optional[str]) -> Optional[ResolvedProduct]:
        if not product_id:
            return None
        return self._by_id.get(product_id)

    def visible_products(self) -> List[ResolvedProduct]:
        return [resolved for resolved in self._resolved if resolved.visible]

    def orderable_products(self) -> List[ResolvedProduct]:
        return [resolved for resolved in self._resolved if resolved.can_order]

    def get_stats(self) -> Dict:
        """Counts per effective status plus visibility totals."""
        by_status = {status.value: 0 for status in CatalogStatus}
        for resolved in self._resolved:
            by_status[resolved.status.value] += 1

        return {
            "catalog_id": self._catalog_id,
            "total_products": len(self._resolved),
            "visible": len(self.visible_products()),
            "orderable": len(self.orderable_products()),
            "by_status": by_status,
        }
