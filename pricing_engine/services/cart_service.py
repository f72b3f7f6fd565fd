"""
==============================================================================
Cart Service Module
==============================================================================

Per-session cart keyed by (product_id, variant_index).

Lifecycle:
---------
- add()        creates the line at the current resolved price, or adds
               to its quantity; the stored price is never recomputed
- increment() / decrement()
- set_quantity(0), decrement() to 0 or remove() delete the line
- clear()      after checkout

A cart is owned by a single session; it holds no locks.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from pricing_engine.core import exceptions
from pricing_engine.pricing.overrides import ResolvedProduct
from pricing_engine.schemas.order import CartItem, ReconciliationResult
from pricing_engine.utils.validators import QuantityValidator


# Module logger
logger = logging.getLogger(__name__)

CartKey = Tuple[str, int]


class Cart:
    """
    Shopping cart for one customer session and catalog.

    Attributes:
        catalog_id: Catalog the prices were resolved for

    Example:
        >>> cart = Cart("opt")
        >>> cart.add(view.find("p1"), variant_index=1)
        >>> cart.total
        Decimal('33075.0')
    """

    def __init__(self, catalog_id: Optional[str] = None) -> None:
        self.catalog_id = catalog_id
        self._items: Dict[CartKey, CartItem] = {}
        self._validator = QuantityValidator()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self._items.values()), Decimal("0"))

    @property
    def items_count(self) -> int:
        """Total units across all lines."""
        return sum(item.quantity for item in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def get(self, product_id: str, variant_index: int = 0) -> CartItem:
        item = self._items.get((product_id, variant_index))
        if item is None:
            raise exceptions.cart_item_not_found(product_id, variant_index)
        return item

    def quantity_of(self, product_id: str, variant_index: int = 0) -> int:
        item = self._items.get((product_id, variant_index))
        return item.quantity if item else 0

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def _check_quantity(self, quantity: int, allow_zero: bool = False) -> None:
        is_valid, error = self._validator.validate(quantity, allow_zero)
        if not is_valid:
            raise exceptions.invalid_quantity(quantity, error)

    def add(self, resolved: ResolvedProduct, variant_index: int = 0, quantity: int = 1) -> CartItem:
        """
        Add units of a variant at its current resolved price.

        Raises:
            PricingEngineError: PRODUCT_NOT_ORDERABLE, VARIANT_NOT_OFFERED,
                INVALID_QUANTITY
        """
        self._check_quantity(quantity)

        if not resolved.can_order:
            raise exceptions.product_not_orderable(resolved.product_id, resolved.status.value)

        key = (resolved.product_id, variant_index)
        existing = self._items.get(key)
        if existing is not None:
            return self.set_quantity(resolved.product_id, variant_index, existing.quantity + quantity)

        price = resolved.price_for(variant_index)
        if price is None:
            raise exceptions.variant_not_offered(resolved.product_id, variant_index)

        item = CartItem(
            product_id=resolved.product_id,
            variant_index=variant_index,
            quantity=quantity,
            price_at_add=price,
            product_name=resolved.product.name,
        )
        self._items[key] = item
        logger.debug(f"Cart add {key} x{quantity} at {price}")
        return item

    def set_quantity(self, product_id: str, variant_index: int, quantity: int) -> CartItem:
        """
        Set the quantity of an existing line; 0 removes it.

        Returns:
            The updated line (the removed line when quantity is 0)
        """
        self._check_quantity(quantity, allow_zero=True)
        item = self.get(product_id, variant_index)

        if quantity == 0:
            return self.remove(product_id, variant_index)

        item = item.model_copy(update={"quantity": quantity})
        self._items[item.key] = item
        return item

    def increment(self, product_id: str, variant_index: int = 0) -> CartItem:
        item = self.get(product_id, variant_index)
        return self.set_quantity(product_id, variant_index, item.quantity + 1)

    def decrement(self, product_id: str, variant_index: int = 0) -> CartItem:
        item = self.get(product_id, variant_index)
        return self.set_quantity(product_id, variant_index, item.quantity - 1)

    def remove(self, product_id: str, variant_index: int = 0) -> CartItem:
        item = self.get(product_id, variant_index)
        del self._items[item.key]
        return item

    def clear(self) -> None:
        self._items.clear()

    # =========================================================================
    # REPEAT ORDER
    # =========================================================================

    def merge_reconciliation(self, result: ReconciliationResult, append: bool = True) -> int:
        """
        Put the available lines of a reconciled order into the cart.

        Args:
            result: Output of the reorder reconciler
            append: Keep current lines and add quantities; when False the
                cart is replaced by the reconciled lines

        Returns:
            Number of lines added or updated

        Raises:
            PricingEngineError: INVALID_QUANTITY if a merged line would exceed
                the quantity limit; the cart is left unchanged
        """
        merged: Dict[CartKey, CartItem] = dict(self._items) if append else {}

        for line in result.available:
            existing = merged.get(line.key)
            if existing is not None:
                line = existing.model_copy(update={"quantity": existing.quantity + line.quantity})
            self._check_quantity(line.quantity)
            merged[line.key] = line

        self._items = merged

        logger.info(
            f"Merged {len(result.available)} reordered lines into cart "
            f"({'append' if append else 'replace'})"
        )
        return len(result.available)
