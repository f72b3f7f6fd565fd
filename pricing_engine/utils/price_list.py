"""
==============================================================================
Price List Text Module
==============================================================================

Plain-text reports for admin preview and repeat-order summaries.

Report Layout:
-------------
    ================================================================
    PRICE LIST: Оптовый (opt)
    ================================================================

    [✓] Пармезан                                  in_stock
        Целая (35 кг)         66 150 ₽
        ½ (17.5 кг)           33 075 ₽
    ...
    ================================================================
    SUMMARY
    ...

==============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from pricing_engine.catalog.models import PackagingType
from pricing_engine.config import Settings, get_settings
from pricing_engine.pricing.overrides import ResolvedProduct
from pricing_engine.schemas.order import ReconciliationResult
from pricing_engine.services.catalog_service import CatalogView
from pricing_engine.utils.formatters import format_price, format_weight
from pricing_engine.utils.variant_labels import label_for

SEPARATOR = "=" * 64


class PriceListFormatter:
    """
    Text renderer for resolved catalogs and reconciled orders.

    Example:
        >>> text = PriceListFormatter().format_catalog(view, title="Оптовый")
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def _price(self, value) -> str:
        return format_price(value, self._settings)

    def variant_name(self, resolved: ResolvedProduct, variant_index: int) -> str:
        """Human name of a variant, with its weight or piece count."""
        product = resolved.product

        if product.packaging_type == PackagingType.HEAD and not resolved.is_plain:
            weight = resolved.variant_weight(variant_index, self._settings.default_portion_weight)
            return f"{label_for(variant_index)} ({format_weight(weight)})"

        if product.packaging_type == PackagingType.PIECE and not resolved.is_plain:
            piece = product.piece_variants[variant_index]
            return f"{piece.kind.value} × {piece.quantity}"

        return product.unit

    def format_product(self, resolved: ResolvedProduct) -> List[str]:
        marker = "✓" if resolved.can_order else ("·" if resolved.visible else "x")
        lines = [f"[{marker}] {resolved.product.name:<40} {resolved.status.value}"]

        for index in resolved.offered_variants():
            lines.append(
                f"    {self.variant_name(resolved, index):<22}"
                f"{self._price(resolved.price_for(index)):>14}"
            )
        return lines

    def format_catalog(self, view: CatalogView, title: Optional[str] = None, include_hidden: bool = False) -> str:
        """Render every visible (optionally every) product of a view."""
        heading = title or view.catalog_id or "Base prices"
        lines = [SEPARATOR, f"PRICE LIST: {heading}", SEPARATOR, ""]

        products = view.resolved if include_hidden else view.visible_products()
        for resolved in products:
            lines.extend(self.format_product(resolved))
            lines.append("")

        stats = view.get_stats()
        lines.extend([
            SEPARATOR,
            "SUMMARY",
            SEPARATOR,
            f"Total Products:  {stats['total_products']}",
            f"Visible:         {stats['visible']}",
            f"Orderable:       {stats['orderable']}",
        ])
        return "\n".join(lines)

    def format_reconciliation(self, result: ReconciliationResult) -> str:
        """Render a reconciled order: repriced lines, then frozen lines."""
        lines = [SEPARATOR, "REPEAT ORDER", SEPARATOR, ""]

        for item in result.available:
            lines.append(
                f"[✓] {item.product_name} [{item.variant_index}] × {item.quantity}"
                f" = {self._price(item.line_total)}"
            )

        for frozen in result.unavailable:
            lines.append(
                f"[!] {frozen.name} × {frozen.quantity} = {self._price(frozen.line_total)}"
                " (недоступно)"
            )

        lines.extend([
            "",
            SEPARATOR,
            result.summary_message(),
            f"Итого: {self._price(result.total)}",
            SEPARATOR,
        ])
        return "\n".join(lines)
