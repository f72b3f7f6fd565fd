"""
==============================================================================
Storefront Pricing Engine - Command Line Entry Point
==============================================================================

Prints resolved price lists and repeat-order projections from a JSON data
file, for admin preview and debugging.

Usage:
------
    # Price list of one catalog (hidden products included)
    pricing-engine price-list --catalog opt --all

    # Base storefront prices
    pricing-engine price-list

    # Repeat an order against a catalog
    pricing-engine reorder --catalog opt order.json

==============================================================================
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from pricing_engine.catalog.catalog import CatalogStore
from pricing_engine.config import get_settings
from pricing_engine.core.exceptions import PricingEngineError
from pricing_engine.schemas.order import OrderLineSnapshot
from pricing_engine.services.catalog_service import CatalogView
from pricing_engine.services.reorder_service import ReorderReconciler
from pricing_engine.utils.price_list import PriceListFormatter


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="pricing-engine", description=settings.app_name)
    parser.add_argument(
        "--data",
        default=settings.data_file,
        help="JSON document with products, catalogs and overrides",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    price_list = subparsers.add_parser("price-list", help="Print a resolved price list")
    price_list.add_argument("--catalog", help="Catalog id (base prices when omitted)")
    price_list.add_argument("--all", action="store_true", help="Include hidden products")

    reorder = subparsers.add_parser("reorder", help="Reconcile an order against a catalog")
    reorder.add_argument("--catalog", help="Catalog id (base prices when omitted)")
    reorder.add_argument("order_file", help="JSON list of order lines")

    return parser


def _view(store: CatalogStore, catalog_id: Optional[str]) -> CatalogView:
    if catalog_id:
        return CatalogView.for_catalog(store, catalog_id)
    return CatalogView.base(store)


def _load_order(path: Path) -> List[OrderLineSnapshot]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    lines = data.get("items", []) if isinstance(data, dict) else data
    return [OrderLineSnapshot.model_validate(line) for line in lines]


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings.debug)

    args = build_parser().parse_args(argv)
    formatter = PriceListFormatter(settings)

    try:
        store = CatalogStore.from_file(Path(args.data))
        view = _view(store, args.catalog)

        if args.command == "price-list":
            print(formatter.format_catalog(view, include_hidden=args.all))
        else:
            lines = _load_order(Path(args.order_file))
            result = ReorderReconciler().reconcile(lines, view.resolved)
            print(formatter.format_reconciliation(result))

    except PricingEngineError as e:
        logger.error(f"Engine error: {e.to_dict()}")
        return 2
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
