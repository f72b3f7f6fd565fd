"""
==============================================================================
Markup Resolver Module
==============================================================================

Derives a unit sale price from a buy price and a markup rule.

Rules:
------
- buy price and markup both present:
    PERCENT -> buy_price * (1 + amount / 100)
    FIXED   -> buy_price + amount
- otherwise the base price is returned unchanged

No rounding happens here; prices are rounded only when formatted for display.
Negative results are not clamped.

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pricing_engine.catalog.models import MarkupKind, MarkupRule


HUNDRED = Decimal("100")


def apply_markup(buy_price: Decimal, markup: MarkupRule) -> Decimal:
    """Apply a markup rule to a buy price."""
    if markup.kind == MarkupKind.PERCENT:
        return buy_price * (1 + markup.amount / HUNDRED)
    return buy_price + markup.amount


def resolve_sale_price(
    buy_price: Optional[Decimal],
    markup: Optional[MarkupRule],
    base_price: Decimal,
) -> Decimal:
    """
    Resolve the sale price per unit.

    Args:
        buy_price: Purchase price, if known
        markup: Markup rule, if any
        base_price: Fallback sale price

    Returns:
        Sale price per unit (unrounded)

    Example:
        >>> resolve_sale_price(Decimal("2200"), MarkupRule(kind="percent", amount=30), Decimal("0"))
        Decimal('2860.0')
    """
    if buy_price is None or markup is None:
        return base_price
    return apply_markup(buy_price, markup)
