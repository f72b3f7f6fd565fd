"""
==============================================================================
Packaging Price Calculator Module
==============================================================================

Derives per-variant prices from a unit sale price and packaging metadata.

Packaging Shapes:
----------------
PLAIN   No variant map. The caller offers one "add at sale price" action
        addressed as variant 0.

HEAD    With w = unit_weight (kg):
            full    = custom.full    or sale * w
            half    = custom.half    or sale * (w / 2)
            quarter = custom.quarter or sale * (w / 4)
            portion = custom.portion or not offered
        A missing or non-positive w degrades the product to PLAIN.

PIECE   price[i] = sale * piece_variants[i].quantity
        No overrides apply. No declared variants degrades to PLAIN.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pricing_engine.catalog.models import (
    HeadVariant,
    PackagingType,
    PieceVariant,
    Product,
    VariantPrices,
)
from pricing_engine.pricing.precedence import first_match


# Module logger
logger = logging.getLogger(__name__)

VariantPriceMap = Dict[int, Decimal]

# Divisor of the whole-unit weight for each derived cut
HEAD_DIVISORS = {
    HeadVariant.FULL: Decimal("1"),
    HeadVariant.HALF: Decimal("2"),
    HeadVariant.QUARTER: Decimal("4"),
}


class PackagingInfo(BaseModel):
    """Packaging slice of a product record."""

    model_config = ConfigDict(frozen=True)

    packaging_type: PackagingType = PackagingType.PLAIN
    unit_weight: Optional[Decimal] = None
    custom_variant_prices: VariantPrices = Field(default_factory=VariantPrices)
    piece_variants: List[PieceVariant] = Field(default_factory=list)

    @classmethod
    def from_product(cls, product: Product) -> "PackagingInfo":
        return cls(
            packaging_type=product.packaging_type,
            unit_weight=product.unit_weight,
            custom_variant_prices=product.custom_variant_prices,
            piece_variants=product.piece_variants,
        )

    @property
    def has_head_weight(self) -> bool:
        return self.unit_weight is not None and self.unit_weight > 0


def cut_weight(unit_weight: Decimal, variant: HeadVariant) -> Optional[Decimal]:
    """Weight of a derived Head cut, or None for the portion."""
    divisor = HEAD_DIVISORS.get(variant)
    if divisor is None:
        return None
    return unit_weight / divisor


def head_variant_price(
    variant: HeadVariant,
    sale_price: Decimal,
    unit_weight: Decimal,
    custom: VariantPrices,
) -> Optional[Decimal]:
    """Explicit final price first, then the weight-derived price."""

    def derived() -> Optional[Decimal]:
        weight = cut_weight(unit_weight, variant)
        return sale_price * weight if weight is not None else None

    return first_match([
        lambda: custom.get(variant),
        derived,
    ])


def _head_prices(sale_price: Decimal, packaging: PackagingInfo) -> VariantPriceMap:
    prices: VariantPriceMap = {}
    for variant in HeadVariant:
        price = head_variant_price(
            variant, sale_price, packaging.unit_weight, packaging.custom_variant_prices
        )
        if price is not None:
            prices[int(variant)] = price
    return prices


def _piece_prices(sale_price: Decimal, packaging: PackagingInfo) -> VariantPriceMap:
    return {
        index: sale_price * variant.quantity
        for index, variant in enumerate(packaging.piece_variants)
    }


def compute_variant_prices(
    sale_price_per_unit: Decimal,
    packaging: PackagingInfo,
) -> Optional[VariantPriceMap]:
    """
    Compute the price of every offered variant.

    Args:
        sale_price_per_unit: Output of the markup resolver
        packaging: Packaging metadata of the product

    Returns:
        Mapping of variant index to price, or None when the product is
        priced as a single PLAIN unit
    """
    if packaging.packaging_type == PackagingType.HEAD:
        if not packaging.has_head_weight:
            return None
        return _head_prices(sale_price_per_unit, packaging)

    if packaging.packaging_type == PackagingType.PIECE:
        if not packaging.piece_variants:
            return None
        return _piece_prices(sale_price_per_unit, packaging)

    return None


def has_missing_packaging_data(packaging: PackagingInfo) -> bool:
    """True when a HEAD/PIECE product lacks the data for its variant layout."""
    if packaging.packaging_type == PackagingType.HEAD:
        return not packaging.has_head_weight
    if packaging.packaging_type == PackagingType.PIECE:
        return not packaging.piece_variants
    return False
