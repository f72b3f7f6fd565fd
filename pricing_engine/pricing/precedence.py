"""
==============================================================================
Precedence Module
==============================================================================

First-match-wins evaluation of ordered "override providers".

Every field whose value can come from several layers (catalog override,
product setting, derived value) is resolved by a small pure function that
lists its providers in precedence order and hands them to ``first_match``.
The order is then testable on its own.

==============================================================================
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from pricing_engine.catalog.models import (
    ORDERABLE_STATUSES,
    CatalogOverride,
    CatalogStatus,
    MarkupRule,
    Product,
)


T = TypeVar("T")

Provider = Callable[[], Optional[T]]


def first_match(providers: Iterable[Provider]) -> Optional[T]:
    """
    Return the first non-None value produced by the providers.

    Providers are called lazily, in order; later ones are not evaluated once
    a value is found.

    Example:
        >>> first_match([lambda: None, lambda: 5, lambda: 7])
        5
    """
    for provider in providers:
        value = provider()
        if value is not None:
            return value
    return None


# =============================================================================
# FIELD RESOLVERS
# =============================================================================

def stock_status(product: Product) -> CatalogStatus:
    """Status implied by the product's own stock and active flag."""
    if product.is_active and product.quantity > 0:
        return CatalogStatus.IN_STOCK
    return CatalogStatus.OUT_OF_STOCK


def effective_status(product: Product, override: Optional[CatalogOverride]) -> CatalogStatus:
    """Catalog status first, then the stock-derived status."""
    return first_match([
        lambda: override.status if override else None,
        lambda: stock_status(product),
    ])


def effective_markup(product: Product, override: Optional[CatalogOverride]) -> Optional[MarkupRule]:
    """Catalog markup first, then the product markup."""
    return first_match([
        lambda: override.markup if override else None,
        lambda: product.markup,
    ])


def is_visible(status: CatalogStatus) -> bool:
    return status != CatalogStatus.HIDDEN


def is_orderable(status: CatalogStatus) -> bool:
    return status in ORDERABLE_STATUSES
