"""
==============================================================================
Order & Cart Schemas Module
==============================================================================

Pydantic models for historical order lines, cart lines and the result of
reconciling an order against the live catalog.

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pricing_engine.core.exceptions import Degradation


class OrderLineSnapshot(BaseModel):
    """
    Immutable line of a placed order.

    ``variant_index`` is written for new orders; older snapshots only carry
    the variant as a label suffix of the name.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True, extra="ignore")

    product_id: Optional[str] = None
    product_name_with_variant_suffix: str = Field(
        default="",
        validation_alias=AliasChoices("product_name_with_variant_suffix", "product_name"),
    )
    quantity: int = Field(default=1)
    price: Decimal = Field(default=Decimal("0"))
    variant_index: Optional[int] = Field(default=None, ge=0)


class CartItem(BaseModel):
    """Cart line keyed by (product_id, variant_index) with a snapshotted price."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1)
    variant_index: int = Field(default=0, ge=0)
    quantity: int = Field(default=1, ge=1)
    price_at_add: Decimal
    product_name: str = ""

    @property
    def key(self) -> Tuple[str, int]:
        return (self.product_id, self.variant_index)

    @property
    def line_total(self) -> Decimal:
        return self.price_at_add * self.quantity


class FrozenLine(BaseModel):
    """Order line that could not be matched; kept at its historical values."""

    model_config = ConfigDict(frozen=True)

    product_id: Optional[str] = None
    name: str
    variant_index: int = 0
    quantity: int
    price: Decimal
    reason: Degradation = Degradation.UNRESOLVED_REORDER_PRODUCT

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class ReconciliationResult(BaseModel):
    """
    Cart projection of a historical order.

    Attributes:
        available: Repriced cart lines, one per (product, variant)
        unavailable: Frozen lines in original order
        available_count: Snapshot lines that resolved to a live product
        unavailable_count: Snapshot lines that did not
    """

    model_config = ConfigDict(frozen=True)

    available: List[CartItem] = Field(default_factory=list)
    unavailable: List[FrozenLine] = Field(default_factory=list)
    available_count: int = 0
    unavailable_count: int = 0

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.available), Decimal("0"))

    @property
    def is_fully_available(self) -> bool:
        return self.unavailable_count == 0

    def summary_message(self) -> str:
        """Short message for the customer after a repeat order."""
        if self.available_count == 0:
            return "Товары из этого заказа больше не доступны"
        message = f"Добавлено в корзину: {self.available_count}"
        if self.unavailable_count:
            message += f", недоступно: {self.unavailable_count}"
        return message
