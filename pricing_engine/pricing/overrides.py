"""
==============================================================================
Catalog Override Resolver Module
==============================================================================

Applies catalog-specific price and status overrides on top of the packaging
calculator and decides final purchasability.

Resolution Order:
----------------
1. sale price     = markup resolver (catalog markup, then product markup)
2. variant prices = packaging calculator
3. HEAD only: each catalog override REPLACES the computed value
       full / half / quarter  -> override is per kg: override * (w / divisor)
       portion                -> override is a final fixed price
4. status   = catalog status, else IN_STOCK when active with stock,
              else OUT_OF_STOCK
   visible  = status != HIDDEN
   can_order = status in {IN_STOCK, PRE_ORDER}

Prices are computed for hidden products too, for admin preview.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pricing_engine.catalog.models import (
    CatalogOverride,
    CatalogStatus,
    HeadVariant,
    PackagingType,
    Product,
)
from pricing_engine.core.exceptions import Degradation
from pricing_engine.pricing.markup import resolve_sale_price
from pricing_engine.pricing.packaging import (
    PackagingInfo,
    VariantPriceMap,
    compute_variant_prices,
    cut_weight,
    has_missing_packaging_data,
)
from pricing_engine.pricing.precedence import (
    effective_markup,
    effective_status,
    first_match,
    is_orderable,
    is_visible,
)


# Module logger
logger = logging.getLogger(__name__)


class ResolvedProduct(BaseModel):
    """
    A product priced and classified for one catalog.

    Attributes:
        product: Source product record
        catalog_id: Catalog the resolution applies to (None for base prices)
        unit_price: Sale price per unit after markup
        variant_prices: Variant index -> price, or None for PLAIN pricing
        status: Effective catalog status
        visible: False only for HIDDEN
        can_order: True for IN_STOCK and PRE_ORDER
        degradations: Recoverable conditions met during resolution
    """

    model_config = ConfigDict(frozen=True)

    product: Product
    catalog_id: Optional[str] = None
    unit_price: Decimal
    variant_prices: Optional[Dict[int, Decimal]] = None
    status: CatalogStatus
    visible: bool
    can_order: bool
    degradations: List[Degradation] = Field(default_factory=list)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def is_plain(self) -> bool:
        return self.variant_prices is None

    def offered_variants(self) -> List[int]:
        """Indices of the variants that can be added to a cart."""
        if self.variant_prices is None:
            return [0]
        return sorted(self.variant_prices)

    def price_for(self, variant_index: int) -> Optional[Decimal]:
        """
        Price of one variant, or None when the variant is not offered.

        PLAIN products answer variant 0 with the unit price.
        """
        if self.variant_prices is None:
            return self.unit_price if variant_index == 0 else None
        return self.variant_prices.get(variant_index)

    def variant_weight(
        self,
        variant_index: int,
        default_portion_weight: Decimal = Decimal("0.1"),
    ) -> Optional[Decimal]:
        """Weight in kg of a HEAD variant; None for other shapes."""
        product = self.product
        if product.packaging_type != PackagingType.HEAD or self.variant_prices is None:
            return None
        if variant_index not in self.variant_prices:
            return None

        variant = HeadVariant(variant_index)
        if variant == HeadVariant.PORTION:
            return product.portion_weight or default_portion_weight
        return cut_weight(product.unit_weight, variant)


# =============================================================================
# OVERRIDE APPLICATION
# =============================================================================

def catalog_head_price(
    variant: HeadVariant,
    unit_weight: Decimal,
    override: Optional[CatalogOverride],
) -> Optional[Decimal]:
    """
    Final price implied by a catalog override for one HEAD variant.

    full/half/quarter overrides are per kg; the portion override is final.
    """
    if override is None:
        return None
    price = override.price_overrides().get(variant)
    if price is None:
        return None
    if variant == HeadVariant.PORTION:
        return price
    return price * cut_weight(unit_weight, variant)


def apply_catalog_overrides(
    computed: VariantPriceMap,
    unit_weight: Decimal,
    override: Optional[CatalogOverride],
) -> VariantPriceMap:
    """Replace computed HEAD prices with catalog overrides where present."""
    resolved: VariantPriceMap = {}
    for variant in HeadVariant:
        price = first_match([
            lambda: catalog_head_price(variant, unit_weight, override),
            lambda: computed.get(int(variant)),
        ])
        if price is not None:
            resolved[int(variant)] = price
    return resolved


def resolve_for_catalog(
    product: Product,
    catalog_override: Optional[CatalogOverride] = None,
    catalog_id: Optional[str] = None,
) -> ResolvedProduct:
    """
    Resolve prices, visibility and purchasability of a product.

    Never raises; missing data degrades the result instead.

    Args:
        product: Product record
        catalog_override: Catalog × product settings, if any
        catalog_id: Catalog being resolved when no override exists

    Returns:
        ResolvedProduct for the override's catalog
    """
    degradations: List[Degradation] = []
    if catalog_override is None:
        degradations.append(Degradation.NO_OVERRIDE)

    sale_price = resolve_sale_price(
        product.buy_price,
        effective_markup(product, catalog_override),
        product.base_price,
    )

    packaging = PackagingInfo.from_product(product)
    variant_prices = compute_variant_prices(sale_price, packaging)

    if has_missing_packaging_data(packaging):
        degradations.append(Degradation.MISSING_PACKAGING_DATA)
        logger.debug(
            f"Product {product.id}: {product.packaging_type} packaging data missing, "
            "priced as a single unit"
        )

    if variant_prices is not None and product.packaging_type == PackagingType.HEAD:
        variant_prices = apply_catalog_overrides(
            variant_prices, product.unit_weight, catalog_override
        )

    status = effective_status(product, catalog_override)

    return ResolvedProduct(
        product=product,
        catalog_id=catalog_override.catalog_id if catalog_override else catalog_id,
        unit_price=sale_price,
        variant_prices=variant_prices,
        status=status,
        visible=is_visible(status),
        can_order=is_orderable(status),
        degradations=degradations,
    )
