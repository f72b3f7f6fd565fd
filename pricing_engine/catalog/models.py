"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for the records the engine consumes.

This module defines:
- MarkupKind, PackagingType, CatalogStatus: record enumerations
- HeadVariant, PieceVariantKind: variant addressing
- MarkupRule, VariantPrices, PortionPriceOverrides, PieceVariant
- Product, Catalog, CatalogOverride

Price Units:
-----------
- Product.custom_variant_prices: FINAL price of each cut
- CatalogOverride.portion_price_overrides: price PER KG for full/half/quarter,
  FINAL price for portion

==============================================================================
"""

from __future__ import annotations

import enum
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# ENUMS
# =============================================================================

class MarkupKind(str, enum.Enum):
    """Markup rule kind. 'rubles' is accepted on input as FIXED."""

    PERCENT = "percent"
    FIXED = "fixed"

    def __str__(self) -> str:
        return self.value


class PackagingType(str, enum.Enum):
    """
    Packaging shape of a product.

    - HEAD: weight-based, sold whole or cut (half, quarter, portion)
    - PIECE: countable, sold as boxes and/or singles
    - PLAIN: a single price per unit
    """

    HEAD = "head"
    PIECE = "piece"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value


class CatalogStatus(str, enum.Enum):
    """Availability status of a product inside a catalog."""

    IN_STOCK = "in_stock"
    PRE_ORDER = "pre_order"
    OUT_OF_STOCK = "out_of_stock"
    COMING_SOON = "coming_soon"
    HIDDEN = "hidden"

    def __str__(self) -> str:
        return self.value


ORDERABLE_STATUSES = frozenset({CatalogStatus.IN_STOCK, CatalogStatus.PRE_ORDER})


class HeadVariant(enum.IntEnum):
    """Positional variant indices of a Head product."""

    FULL = 0
    HALF = 1
    QUARTER = 2
    PORTION = 3


class PieceVariantKind(str, enum.Enum):
    """Kind of a Piece product variant."""

    BOX = "box"
    SINGLE = "single"

    def __str__(self) -> str:
        return self.value


# Storefront packaging values that have no variant layout of their own
_PACKAGING_ALIASES = {
    "package": PackagingType.PLAIN,
    "can": PackagingType.PLAIN,
    "box": PackagingType.PIECE,
}


# =============================================================================
# VALUE MODELS
# =============================================================================

class MarkupRule(BaseModel):
    """Seller margin applied to a buy price."""

    model_config = ConfigDict(frozen=True)

    kind: MarkupKind = Field(..., description="Percent or fixed add-on")
    amount: Decimal = Field(default=Decimal("0"), description="Percent or currency amount")

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.lower().strip()
            if value == "rubles":
                return MarkupKind.FIXED
        return value


class VariantPrices(BaseModel):
    """
    Explicit prices per Head cut.

    Missing fields mean "not set". Legacy keys ``fullPrice``, ``halfPrice``,
    ``quarterPrice`` and ``portionPrice`` are accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    full: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("full", "fullPrice"),
    )
    half: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("half", "halfPrice"),
    )
    quarter: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("quarter", "quarterPrice"),
    )
    portion: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("portion", "portionPrice"),
    )

    def get(self, variant: HeadVariant) -> Optional[Decimal]:
        """Return the price set for a Head variant, or None."""
        return {
            HeadVariant.FULL: self.full,
            HeadVariant.HALF: self.half,
            HeadVariant.QUARTER: self.quarter,
            HeadVariant.PORTION: self.portion,
        }[variant]


class PortionPriceOverrides(VariantPrices):
    """
    Catalog price overrides for a Head product.

    ``full``, ``half`` and ``quarter`` are prices per kg; ``portion`` is a
    final price. Also reads the storefront keys ``fullPricePerKg``,
    ``halfPricePerKg`` and ``quarterPricePerKg``.
    """

    full: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("full", "fullPrice", "fullPricePerKg"),
    )
    half: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("half", "halfPricePerKg"),
    )
    quarter: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("quarter", "quarterPricePerKg"),
    )


class PieceVariant(BaseModel):
    """One box or single option of a Piece product."""

    model_config = ConfigDict(frozen=True)

    kind: PieceVariantKind
    quantity: int = Field(..., ge=1, description="Units contained in the variant")


# =============================================================================
# RECORD MODELS
# =============================================================================

class Product(BaseModel):
    """
    Product record as supplied by the persistence layer.

    Attributes:
        id: Product identifier
        name: Display name
        buy_price: Purchase price, if known
        base_price: Sale price used when no buy price/markup applies
        markup: Product-level markup rule
        unit: Unit label ("kg", "pcs", ...)
        packaging_type: HEAD, PIECE or PLAIN
        unit_weight: kg per whole unit (HEAD only)
        portion_weight: kg per portion (HEAD only, configurable default)
        custom_variant_prices: Final prices per cut (HEAD only)
        piece_variants: Box/single layout (PIECE only)
        quantity: Units in stock
        is_active: Whether the seller has the product enabled
    """

    model_config = ConfigDict(
        from_attributes=True,
        extra="ignore",
        frozen=True,
    )

    id: str = Field(..., min_length=1, description="Product identifier")
    name: str = Field(default="", description="Product name")
    buy_price: Optional[Decimal] = Field(default=None, description="Purchase price")
    base_price: Decimal = Field(default=Decimal("0"), description="Fallback sale price")
    markup: Optional[MarkupRule] = Field(default=None, description="Product markup")
    unit: str = Field(default="pcs", description="Unit label")
    packaging_type: PackagingType = Field(default=PackagingType.PLAIN)
    unit_weight: Optional[Decimal] = Field(default=None, description="kg per whole unit")
    portion_weight: Optional[Decimal] = Field(default=None, description="kg per portion")
    custom_variant_prices: VariantPrices = Field(default_factory=VariantPrices)
    piece_variants: List[PieceVariant] = Field(default_factory=list)
    quantity: int = Field(default=0, description="Units in stock")
    is_active: bool = Field(default=True)

    @field_validator("packaging_type", mode="before")
    @classmethod
    def normalize_packaging_type(cls, value: Any) -> Any:
        if value is None:
            return PackagingType.PLAIN
        if isinstance(value, str):
            value = value.lower().strip()
            return _PACKAGING_ALIASES.get(value, value)
        return value

    @field_validator("custom_variant_prices", mode="before")
    @classmethod
    def default_custom_prices(cls, value: Any) -> Any:
        return {} if value is None else value


class Catalog(BaseModel):
    """A seller price-list exposing a subset of the product list."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    member_product_ids: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("member_product_ids", "product_ids", "productIds"),
    )

    @property
    def member_set(self) -> frozenset:
        return frozenset(self.member_product_ids)

    def contains(self, product_id: str) -> bool:
        return product_id in self.member_set


class CatalogOverride(BaseModel):
    """
    Catalog × product settings.

    Any field left as None inherits the product-level computation. The
    storefront's flat ``markup_type``/``markup_value`` pair and its
    ``portion_prices`` key are accepted on input.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore", frozen=True)

    catalog_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    portion_price_overrides: Optional[PortionPriceOverrides] = Field(
        default=None,
        validation_alias=AliasChoices("portion_price_overrides", "portion_prices"),
    )
    status: Optional[CatalogStatus] = Field(default=None)
    markup: Optional[MarkupRule] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def collect_flat_markup(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("markup") is not None:
            return data
        if data.get("markup_value") is None:
            return data
        data = dict(data)
        data["markup"] = {
            "kind": data.get("markup_type") or MarkupKind.PERCENT,
            "amount": data["markup_value"],
        }
        return data

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.lower().strip()
            return value or None
        return value

    @property
    def key(self) -> tuple:
        return (self.catalog_id, self.product_id)

    def price_overrides(self) -> Dict[HeadVariant, Decimal]:
        """Return the set per-variant overrides keyed by Head variant."""
        overrides: Dict[HeadVariant, Decimal] = {}
        if self.portion_price_overrides is None:
            return overrides

        for variant in HeadVariant:
            price = self.portion_price_overrides.get(variant)
            if price is not None:
                overrides[variant] = price
        return overrides
