"""
==============================================================================
Reorder Service Module
==============================================================================

Maps the lines of a historical order back onto the live catalog.

Per-line State Machine:
----------------------
                         ┌──────────────────────────┐
               found  ──▶│  AVAILABLE (repriced)    │
┌────────────┐           └──────────────────────────┘
│ HISTORICAL │
└────────────┘           ┌──────────────────────────┐
           not found  ──▶│  UNAVAILABLE (frozen)    │
                         └──────────────────────────┘

Both outcomes are terminal for one reconciliation call. A line is "found"
when its product is in the live catalog, can be ordered there, and still
offers the recovered variant. Everything else is frozen at the historical
name and price so the customer sees every line they originally ordered.

Variant Recovery:
----------------
1. Explicit ``variant_index`` stored on the snapshot
2. Trailing label of the line name ("Сыр (½)" -> 1)
3. FULL

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pricing_engine.core.exceptions import Degradation
from pricing_engine.pricing.overrides import ResolvedProduct
from pricing_engine.pricing.precedence import first_match
from pricing_engine.schemas.order import (
    CartItem,
    FrozenLine,
    OrderLineSnapshot,
    ReconciliationResult,
)
from pricing_engine.utils.variant_labels import VariantLabelParser


# Module logger
logger = logging.getLogger(__name__)


class ReorderReconciler:
    """
    Reconciler of order snapshots against a resolved catalog.

    Never raises for line content; unresolvable lines degrade to frozen.

    Example:
        >>> reconciler = ReorderReconciler()
        >>> result = reconciler.reconcile(order_lines, view.resolved)
        >>> result.available_count, result.unavailable_count
        (3, 1)
    """

    def __init__(self, label_parser: Optional[VariantLabelParser] = None) -> None:
        self._label_parser = label_parser or VariantLabelParser()

    # =========================================================================
    # VARIANT RECOVERY
    # =========================================================================

    def recover_variant_index(self, line: OrderLineSnapshot) -> int:
        """Explicit index first, then the name label (which defaults to FULL)."""
        return first_match([
            lambda: line.variant_index,
            lambda: self._label_parser.variant_index(line.product_name_with_variant_suffix),
        ])

    # =========================================================================
    # RECONCILIATION
    # =========================================================================

    def reconcile_line(
        self,
        line: OrderLineSnapshot,
        live: Dict[str, ResolvedProduct],
    ) -> Union[CartItem, FrozenLine]:
        """Reconcile one snapshot line."""
        variant_index = self.recover_variant_index(line)
        resolved = live.get(line.product_id) if line.product_id else None

        price = None
        if resolved is not None and resolved.can_order:
            price = resolved.price_for(variant_index)

        if price is None:
            logger.debug(
                f"Order line '{line.product_name_with_variant_suffix}' "
                f"(product {line.product_id}) is unavailable, keeping historical price"
            )
            return FrozenLine(
                product_id=line.product_id,
                name=line.product_name_with_variant_suffix,
                variant_index=variant_index,
                quantity=line.quantity,
                price=line.price,
                reason=Degradation.UNRESOLVED_REORDER_PRODUCT,
            )

        return CartItem(
            product_id=resolved.product_id,
            variant_index=variant_index,
            quantity=max(line.quantity, 1),
            price_at_add=price,
            product_name=resolved.product.name,
        )

    def reconcile(
        self,
        snapshot_lines: Iterable[OrderLineSnapshot],
        live_catalog: Iterable[ResolvedProduct],
    ) -> ReconciliationResult:
        """
        Reconcile a whole order.

        Args:
            snapshot_lines: Lines of the historical order
            live_catalog: Products resolved for the current catalog

        Returns:
            ReconciliationResult with available lines merged per
            (product, variant) and unavailable lines in original order
        """
        live = {resolved.product_id: resolved for resolved in live_catalog}

        available: Dict[Tuple[str, int], CartItem] = {}
        unavailable: List[FrozenLine] = []
        available_count = 0

        for line in snapshot_lines:
            outcome = self.reconcile_line(line, live)

            if isinstance(outcome, FrozenLine):
                unavailable.append(outcome)
                continue

            available_count += 1
            existing = available.get(outcome.key)
            if existing is not None:
                outcome = existing.model_copy(
                    update={"quantity": existing.quantity + outcome.quantity}
                )
            available[outcome.key] = outcome

        result = ReconciliationResult(
            available=list(available.values()),
            unavailable=unavailable,
            available_count=available_count,
            unavailable_count=len(unavailable),
        )

        logger.info(
            f"Reorder reconciled: {result.available_count} available, "
            f"{result.unavailable_count} unavailable"
        )
        return result


def reconcile(
    snapshot_lines: Iterable[OrderLineSnapshot],
    live_catalog: Iterable[ResolvedProduct],
) -> ReconciliationResult:
    """Reconcile an order with a default reconciler."""
    return ReorderReconciler().reconcile(snapshot_lines, live_catalog)
